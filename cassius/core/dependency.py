"""
Dependency Injection para FastAPI.

Centraliza la creación de dependencias (repositories, services) usando
Depends().

Estrategia:
- Singleton: RedisRepository (conexión creada en el startup event)
- Nuevas instancias: SavedFilterRepository, SavedFilterService
  - Reciben el cliente Redis actual en cada request

Testability:
- Sobreescribir factory functions con app.dependency_overrides

Usage en routers:
    from cassius.core.dependency import get_saved_filter_service
    from fastapi import Depends

    @router.get("/saved-filters/{page_type}")
    async def list_saved_filters(
        page_type: SavedFilterPageType,
        service: SavedFilterService = Depends(get_saved_filter_service)
    ):
        ...
"""

from typing import Optional

from fastapi import Depends, Header

from cassius.exceptions import OrganisationRequiredError
from cassius.repositories.redis_repository import RedisRepository
from cassius.repositories.saved_filter_repository import SavedFilterRepository
from cassius.services.saved_filter_service import SavedFilterService


def get_redis_repository() -> RedisRepository:
    """
    Factory para RedisRepository (singleton por diseño de la clase).

    Usage:
        redis_repo: RedisRepository = Depends(get_redis_repository)
    """
    return RedisRepository()


def get_saved_filter_repository(
    redis_repo: RedisRepository = Depends(get_redis_repository)
) -> SavedFilterRepository:
    """
    Factory para SavedFilterRepository.

    Si Redis no está conectado el repositorio se crea igual; cada operación
    lanza StorageUnavailableError (503).
    """
    return SavedFilterRepository(redis_client=redis_repo.get_client())


def get_saved_filter_service(
    repository: SavedFilterRepository = Depends(get_saved_filter_repository)
) -> SavedFilterService:
    return SavedFilterService(repository=repository)


def get_organisation_id(
    x_organisation_id: Optional[str] = Header(None)
) -> str:
    """
    Tenant del request (header X-Organisation-Id).

    Raises:
        OrganisationRequiredError: Si el header falta o está vacío
    """
    if x_organisation_id is None or not x_organisation_id.strip():
        raise OrganisationRequiredError()
    return x_organisation_id.strip()
