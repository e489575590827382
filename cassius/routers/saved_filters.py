"""
Saved Filters Router - Filtros favoritos por organización.

Todas las rutas requieren el header X-Organisation-Id (scope de tenant).

Endpoints:
- GET    /api/saved-filters/{page_type}                   - Lista (más recientes primero)
- POST   /api/saved-filters                               - Crea un filtro guardado
- GET    /api/saved-filters/{page_type}/{filter_id}/load  - Carga como grupo activo
- POST   /api/saved-filters/{page_type}/{filter_id}/load  - Carga combinada con el grupo activo
- DELETE /api/saved-filters/{filter_id}                   - Elimina
"""

from fastapi import APIRouter, Depends, status
import logging

from cassius.core.dependency import get_organisation_id, get_saved_filter_service
from cassius.models.saved_filter import (
    DeleteSavedFilterResponse,
    LoadFilterRequest,
    LoadedFilterResponse,
    SavedFilter,
    SavedFilterCreate,
    SavedFilterListResponse,
)
from cassius.services.filters import FilterFieldRegistry
from cassius.services.saved_filter_service import SavedFilterService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/saved-filters/{page_type}",
    response_model=SavedFilterListResponse,
    status_code=status.HTTP_200_OK
)
async def list_saved_filters(
    page_type: str,
    organisation_id: str = Depends(get_organisation_id),
    service: SavedFilterService = Depends(get_saved_filter_service)
):
    """
    Lista los filtros guardados de la organización para una página.

    Raises:
        PageTypeNotSupportedError (404): Página desconocida
        StorageUnavailableError / StorageError (503): Redis no disponible
    """
    resolved = FilterFieldRegistry.resolve_page_type(page_type)
    saved_filters = await service.list_saved_filters(organisation_id, resolved)

    return SavedFilterListResponse(
        page_type=resolved,
        filters=saved_filters,
        total=len(saved_filters)
    )


@router.post(
    "/saved-filters",
    response_model=SavedFilter,
    status_code=status.HTTP_201_CREATED
)
async def create_saved_filter(
    payload: SavedFilterCreate,
    organisation_id: str = Depends(get_organisation_id),
    service: SavedFilterService = Depends(get_saved_filter_service)
):
    """
    Guarda el filtro activo bajo un nombre.

    Example request:
        ```json
        {
            "name": "Straumann 4mm",
            "pageType": "implants",
            "filterData": "{\\"id\\":\\"g1\\",\\"operator\\":\\"AND\\",\\"rules\\":[...]}"
        }
        ```

    Raises:
        InvalidFilterFormatError (400): filterData no describe un FilterGroup
        EmptyFilterError (400): "Aucun filtre actif à sauvegarder."
        StorageError (503): "Impossible de sauvegarder le filtre."
    """
    return await service.create_saved_filter(organisation_id, payload)


@router.get(
    "/saved-filters/{page_type}/{filter_id}/load",
    response_model=LoadedFilterResponse,
    status_code=status.HTTP_200_OK
)
async def load_saved_filter(
    page_type: str,
    filter_id: str,
    organisation_id: str = Depends(get_organisation_id),
    service: SavedFilterService = Depends(get_saved_filter_service)
):
    """
    Carga un filtro guardado como grupo activo (normalizado).

    Raises:
        SavedFilterNotFoundError (404): No existe en la organización/página
        InvalidFilterFormatError (400): "Format de filtre invalide."
    """
    resolved = FilterFieldRegistry.resolve_page_type(page_type)
    saved_filter, group = await service.load_saved_filter(organisation_id, resolved, filter_id)

    return LoadedFilterResponse(
        saved_filter_id=saved_filter.id,
        name=saved_filter.name,
        filters=group
    )


@router.post(
    "/saved-filters/{page_type}/{filter_id}/load",
    response_model=LoadedFilterResponse,
    status_code=status.HTTP_200_OK
)
async def load_and_combine_saved_filter(
    page_type: str,
    filter_id: str,
    request: LoadFilterRequest,
    organisation_id: str = Depends(get_organisation_id),
    service: SavedFilterService = Depends(get_saved_filter_service)
):
    """
    Carga un filtro guardado combinándolo con el grupo activo del cliente.

    Example request:
        ```json
        {
            "filters": {"id": "a1b2c3d4e", "operator": "AND", "rules": [...]},
            "combine": "OR"
        }
        ```

    Sin combine, o si uno de los dos grupos está vacío, equivale a
    GET .../load.

    Raises:
        SavedFilterNotFoundError (404): No existe en la organización/página
        InvalidFilterFormatError (400): "Format de filtre invalide."
    """
    resolved = FilterFieldRegistry.resolve_page_type(page_type)
    saved_filter, group = await service.load_saved_filter(
        organisation_id,
        resolved,
        filter_id,
        active=request.filters,
        combine=request.combine
    )

    return LoadedFilterResponse(
        saved_filter_id=saved_filter.id,
        name=saved_filter.name,
        filters=group
    )


@router.delete(
    "/saved-filters/{filter_id}",
    response_model=DeleteSavedFilterResponse,
    status_code=status.HTTP_200_OK
)
async def delete_saved_filter(
    filter_id: str,
    organisation_id: str = Depends(get_organisation_id),
    service: SavedFilterService = Depends(get_saved_filter_service)
):
    """
    Elimina un filtro guardado.

    Raises:
        SavedFilterNotFoundError (404): No existe en la organización
        StorageError (503): "Impossible de supprimer le filtre."
    """
    await service.delete_saved_filter(organisation_id, filter_id)
    return DeleteSavedFilterResponse(success=True, id=filter_id)
