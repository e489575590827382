"""
Configuración del backend Cassius.

Carga y valida variables de entorno necesarias para el servicio de filtros.
"""
import os
from pathlib import Path
from dotenv import load_dotenv

# Cargar variables de entorno desde .env.local
env_path = Path(__file__).parent.parent / '.env.local'
load_dotenv(dotenv_path=env_path)


class Config:
    """Configuración centralizada del backend."""

    # Environment
    ENVIRONMENT: str = os.getenv('ENVIRONMENT', 'development')

    # API Configuration
    API_HOST: str = os.getenv('API_HOST', '0.0.0.0')
    API_PORT: int = int(os.getenv('API_PORT', '8000'))

    # CORS - Orígenes permitidos
    ALLOWED_ORIGINS: list[str] = [
        origin.strip()
        for origin in os.getenv('ALLOWED_ORIGINS', 'http://localhost:5173').split(',')
    ]

    # Logging
    LOG_LEVEL: str = os.getenv('LOG_LEVEL', 'INFO')

    # Redis (almacenamiento de filtros guardados)
    REDIS_URL: str = os.getenv('REDIS_URL', 'redis://localhost:6379/0')
    REDIS_POOL_MAX_CONNECTIONS: int = int(os.getenv('REDIS_POOL_MAX_CONNECTIONS', '20'))
    REDIS_SOCKET_CONNECT_TIMEOUT: int = int(os.getenv('REDIS_SOCKET_CONNECT_TIMEOUT', '5'))
    REDIS_SOCKET_TIMEOUT: int = int(os.getenv('REDIS_SOCKET_TIMEOUT', '5'))
    REDIS_HEALTH_CHECK_INTERVAL: int = int(os.getenv('REDIS_HEALTH_CHECK_INTERVAL', '30'))

    # Filtros guardados
    SAVED_FILTERS_KEY_PREFIX: str = os.getenv('SAVED_FILTERS_KEY_PREFIX', 'saved_filters')
    SAVED_FILTER_NAME_MAX_LENGTH: int = int(os.getenv('SAVED_FILTER_NAME_MAX_LENGTH', '100'))

    @classmethod
    def validate(cls) -> None:
        """
        Valida que las variables de entorno críticas estén configuradas.

        Raises:
            ValueError: Si falta alguna variable requerida o tiene un valor inválido.
        """
        required_vars = {
            'REDIS_URL': cls.REDIS_URL,
            'SAVED_FILTERS_KEY_PREFIX': cls.SAVED_FILTERS_KEY_PREFIX,
        }

        missing = [var for var, value in required_vars.items() if not value]

        if missing:
            raise ValueError(
                f"Missing required environment variables: {', '.join(missing)}. "
                f"Please check your .env.local file."
            )

        if not cls.REDIS_URL.startswith(('redis://', 'rediss://', 'unix://')):
            raise ValueError(f"REDIS_URL must be a redis:// URL, got: {cls.REDIS_URL}")

        if cls.SAVED_FILTER_NAME_MAX_LENGTH < 1:
            raise ValueError("SAVED_FILTER_NAME_MAX_LENGTH must be >= 1")


# Instancia global de configuración
config = Config()


if __name__ == '__main__':
    """Script para validar configuración."""
    try:
        config.validate()
        print("✅ Configuración válida")
        print(f"   - Environment: {config.ENVIRONMENT}")
        print(f"   - Redis URL: {config.REDIS_URL}")
        print(f"   - Saved filters prefix: {config.SAVED_FILTERS_KEY_PREFIX}")
        print(f"   - Allowed Origins: {config.ALLOWED_ORIGINS}")
    except ValueError as e:
        print(f"❌ Error de configuración: {e}")
        exit(1)
