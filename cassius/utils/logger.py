"""
Logger configuration for Cassius Backend API.

Proporciona configuración centralizada de logging con formato consistente
y niveles apropiados según el ambiente (local/production).

Características:
- Nivel DEBUG en local, LOG_LEVEL (INFO por defecto) en otros ambientes
- Handler a stdout (la plataforma de despliegue recoge los logs)
- Formato: [TIMESTAMP] [LEVEL] [MODULE] MESSAGE
"""

import logging
import sys
from cassius.config import config


def setup_logger() -> None:
    """
    Configura logging global del sistema.

    Formato de log:
        [2026-03-10 14:30:00] [INFO] [cassius.routers.saved_filters] Filtro guardado: implants

    Usage:
        >>> from cassius.utils.logger import setup_logger
        >>> setup_logger()
        >>> logger = logging.getLogger(__name__)
        >>> logger.info("API iniciada correctamente")
    """
    if config.ENVIRONMENT == "local":
        level = logging.DEBUG
    else:
        level = logging.getLevelName(config.LOG_LEVEL.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logging.basicConfig(
        level=level,
        format='[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        handlers=[logging.StreamHandler(sys.stdout)]
    )

    logger = logging.getLogger(__name__)
    logger.info(f"Logging configurado: nivel={logging.getLevelName(level)}, ambiente={config.ENVIRONMENT}")
