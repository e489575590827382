"""
Cassius API - Entry Point.

Filtros avanzados para los catálogos de implantes y prótesis dentales.

Configuración:
- FastAPI app con OpenAPI docs automática
- CORS para frontend
- Exception handlers para errores custom (CassiusException)
- Conexión Redis en startup (filtros guardados)
- run(): servidor uvicorn en API_HOST:API_PORT (python -m cassius.main)

Endpoints:
- GET  /                       - Root endpoint (info API)
- GET  /api/docs               - OpenAPI documentation (Swagger UI)
- GET  /api/health             - Health check (API + Redis)
- *    /api/filters/*          - Motor de filtros (campos, normalizar, aplicar, chips)
- *    /api/saved-filters/*    - Filtros guardados por organización
"""

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging
import uvicorn

from cassius.config import config
from cassius.exceptions import CassiusException
from cassius.models.error import ErrorResponse
from cassius.repositories.redis_repository import RedisRepository
from cassius.utils.logger import setup_logger

from cassius.routers import health, filters, saved_filters


# ============================================================================
# INICIALIZACIÓN FASTAPI
# ============================================================================

app = FastAPI(
    title="Cassius Filters API",
    description="""
    API de filtros avanzados para los catálogos de implantes y prothèses.

    ## Funcionalidades

    - **Campos**: Tabla de campos filtrables por página (tipo, operadores, etiqueta)
    - **Filtros**: Normalizar, aplicar y proyectar a chips un grupo de reglas AND/OR
    - **Filtros guardados**: Favoritos por organización y página (Redis)
    - **Health Check**: Estado de la API y de la conexión Redis

    ## Reglas incompletas

    Una regla sin valor (o con un valor no numérico en un campo numérico) no
    es un error: se descarta al aplicar. Si no queda ninguna, el filtro es null
    y todas las entidades pasan.
    """,
    version="1.0.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    license_info={
        "name": "Proprietary"
    }
)


# ============================================================================
# MIDDLEWARE - CORS
# ============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=["*"]
)


# ============================================================================
# EXCEPTION HANDLERS
# ============================================================================


@app.exception_handler(CassiusException)
async def cassius_exception_handler(request: Request, exc: CassiusException):
    """
    Handler global para todas las excepciones custom de Cassius.

    Mapea CassiusException.error_code → HTTP status code y retorna
    ErrorResponse consistente.

    Mapeo de error_code → HTTP status:
        - PAGE_TYPE_NOT_SUPPORTED, SAVED_FILTER_NOT_FOUND → 404 NOT FOUND
        - INVALID_FILTER_FORMAT, FILTER_EMPTY, ORGANISATION_REQUIRED → 400 BAD REQUEST
        - STORAGE_UNAVAILABLE, STORAGE_ERROR → 503 SERVICE UNAVAILABLE

    Logging según severidad:
        - 500+: ERROR con stack trace
        - 400/404: INFO (errores cliente esperados)
    """
    status_map = {
        # 404 NOT FOUND
        "PAGE_TYPE_NOT_SUPPORTED": status.HTTP_404_NOT_FOUND,
        "SAVED_FILTER_NOT_FOUND": status.HTTP_404_NOT_FOUND,

        # 400 BAD REQUEST
        "INVALID_FILTER_FORMAT": status.HTTP_400_BAD_REQUEST,
        "FILTER_EMPTY": status.HTTP_400_BAD_REQUEST,
        "ORGANISATION_REQUIRED": status.HTTP_400_BAD_REQUEST,

        # 503 SERVICE UNAVAILABLE
        "STORAGE_UNAVAILABLE": status.HTTP_503_SERVICE_UNAVAILABLE,
        "STORAGE_ERROR": status.HTTP_503_SERVICE_UNAVAILABLE
    }

    http_status = status_map.get(exc.error_code, status.HTTP_500_INTERNAL_SERVER_ERROR)

    error_response = ErrorResponse(
        success=False,
        error=exc.error_code,
        message=exc.message,
        data=exc.data if exc.data else None
    )

    if http_status >= 500:
        logging.error(f"Server error: {exc.message}", exc_info=True)
    else:
        logging.info(f"Client error: {exc.message}")

    return JSONResponse(
        status_code=http_status,
        content=error_response.model_dump()
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    """
    Handler para excepciones no manejadas (fallback).

    En desarrollo (ENVIRONMENT=local): Incluye detalles del error en data
    En producción: Solo mensaje genérico (no exponer detalles internos)
    """
    logging.error(f"Unhandled exception: {str(exc)}", exc_info=True)

    error_response = ErrorResponse(
        success=False,
        error="INTERNAL_SERVER_ERROR",
        message="Error interno del servidor. Contacta al administrador.",
        data={"detail": str(exc)} if config.ENVIRONMENT == "local" else None
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_response.model_dump()
    )


# ============================================================================
# STARTUP/SHUTDOWN EVENTS
# ============================================================================


@app.on_event("startup")
async def startup_event():
    """
    Configurar sistema al iniciar app.

    Acciones:
    - Configurar logging con setup_logger()
    - Validar configuración
    - Conectar Redis (si falla, la API arranca igual en modo degradado)
    """
    setup_logger()
    config.validate()
    logging.info("✅ Cassius API iniciada correctamente")
    logging.info(f"Environment: {config.ENVIRONMENT}")
    logging.info(f"CORS Origins: {config.ALLOWED_ORIGINS}")

    try:
        await RedisRepository().connect()
    except Exception as e:
        # Filtros en memoria siguen disponibles; filtros guardados → 503
        logging.error(f"❌ Redis unavailable at startup, saved filters disabled: {e}")


@app.on_event("shutdown")
async def shutdown_event():
    """Cierra la conexión Redis."""
    logging.info("🔴 Cassius API shutting down...")
    await RedisRepository().disconnect()


# ============================================================================
# ROUTERS
# ============================================================================

app.include_router(health.router, prefix="/api", tags=["Health"])
app.include_router(filters.router, prefix="/api", tags=["Filters"])
app.include_router(saved_filters.router, prefix="/api", tags=["Saved Filters"])


# ============================================================================
# ROOT ENDPOINT
# ============================================================================


@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - Información básica de la API.

    Example response:
        ```json
        {
            "message": "Cassius API - Advanced Filters",
            "version": "1.0.0",
            "docs": "/api/docs",
            "health": "/api/health"
        }
        ```
    """
    return {
        "message": "Cassius API - Advanced Filters",
        "version": "1.0.0",
        "docs": "/api/docs",
        "redoc": "/api/redoc",
        "health": "/api/health"
    }


def run():
    """Levanta la API con uvicorn en API_HOST:API_PORT."""
    uvicorn.run(app, host=config.API_HOST, port=config.API_PORT)


if __name__ == "__main__":
    run()
