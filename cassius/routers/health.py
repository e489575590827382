"""
Health Check Router - Monitoreo del estado del sistema.

Endpoint para verificar que la API está funcionando y que la conexión
con Redis (almacenamiento de filtros guardados) está operativa.

Endpoints:
- GET /api/health - Health check con test de conexión Redis
"""

from fastapi import APIRouter, Depends, status
from datetime import datetime, timezone

from cassius.core.dependency import get_redis_repository
from cassius.repositories.redis_repository import RedisRepository
from cassius.config import config
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check(
    redis_repo: RedisRepository = Depends(get_redis_repository)
):
    """
    Health check endpoint para monitoreo del sistema.

    Si Redis falla, retorna status "degraded" en lugar de 503: la API sigue
    evaluando filtros en memoria, solo los filtros guardados no están
    disponibles.

    Returns:
        Dict con:
        - status: "healthy" si todo OK, "degraded" si Redis falla
        - timestamp: Timestamp UTC actual (ISO 8601 format)
        - environment: Ambiente de ejecución
        - redis_connection: "ok" o "error"
        - version: Versión de la API

    Example response (degraded):
        ```json
        {
            "status": "degraded",
            "timestamp": "2026-03-10T14:30:00Z",
            "environment": "production",
            "redis_connection": "error",
            "version": "1.0.0"
        }
        ```
    """
    logger.info("Health check requested")

    redis_health = await redis_repo.health_check()
    redis_status = "ok" if redis_health.get("status") == "healthy" else "error"
    if redis_status == "error":
        logger.error(f"Health check failed: Redis error - {redis_health.get('error')}")

    return {
        "status": "healthy" if redis_status == "ok" else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        "environment": config.ENVIRONMENT,
        "redis_connection": redis_status,
        "version": "1.0.0"
    }
