"""
Servicio de filtros guardados (favoritos) por organización y página.

Responsabilidades:
- Validar filterData antes de persistir (rechaza grupos sin reglas activas)
- Listar filtros de una página (más recientes primero)
- Cargar un filtro como FilterGroup normalizado, opcionalmente combinado
  con el grupo activo
- Eliminar filtros
"""
import logging
import uuid
from datetime import datetime, timezone
from typing import Optional, Tuple

from cassius.exceptions import EmptyFilterError, SavedFilterNotFoundError
from cassius.models.enums import GroupOperator, SavedFilterPageType
from cassius.models.filters import FilterGroup, generate_id
from cassius.models.saved_filter import SavedFilter, SavedFilterCreate
from cassius.repositories.saved_filter_repository import SavedFilterRepository
from cassius.services.filters import (
    FilterFieldRegistry,
    deserialize_group,
    normalize_group,
    serialize_group,
)

logger = logging.getLogger(__name__)


class SavedFilterService:
    """
    Lógica de negocio de filtros guardados.

    Los nombres no son únicos: guardar dos veces el mismo nombre crea dos
    registros. Sin reconciliación entre escrituras concurrentes.
    """

    def __init__(self, repository: SavedFilterRepository):
        """
        Args:
            repository: Repositorio Redis de filtros guardados
        """
        self.repository = repository

    def _filter_data_for(self, payload: SavedFilterCreate) -> str:
        fields = FilterFieldRegistry.get_fields(payload.page_type)

        if payload.filters is None:
            group = deserialize_group(payload.filter_data)
            if normalize_group(group, fields) is None:
                raise EmptyFilterError(payload.page_type.value)
            # Texto válido: se guarda tal cual
            return payload.filter_data

        normalized = normalize_group(payload.filters, fields)
        if normalized is None:
            raise EmptyFilterError(payload.page_type.value)
        return serialize_group(normalized)

    async def create_saved_filter(
        self,
        organisation_id: str,
        payload: SavedFilterCreate
    ) -> SavedFilter:
        """
        Crea un filtro guardado.

        Args:
            organisation_id: Tenant
            payload: Nombre, página y filterData (o filters)

        Returns:
            SavedFilter persistido (id y createdAt asignados)

        Raises:
            InvalidFilterFormatError: Si filterData no es un FilterGroup
            EmptyFilterError: Si no queda ninguna regla activa tras normalizar
            StorageError: Si falla la escritura
        """
        logger.info(
            f"Saving filter '{payload.name}' for {organisation_id} ({payload.page_type.value})"
        )

        saved_filter = SavedFilter(
            id=str(uuid.uuid4()),
            organisation_id=organisation_id,
            name=payload.name,
            page_type=payload.page_type,
            filter_data=self._filter_data_for(payload),
            created_at=datetime.now(timezone.utc),
        )
        return await self.repository.create(saved_filter)

    async def list_saved_filters(
        self,
        organisation_id: str,
        page_type: SavedFilterPageType
    ) -> list[SavedFilter]:
        saved_filters = await self.repository.list_by_page(organisation_id, page_type)
        logger.debug(f"{len(saved_filters)} saved filters for {organisation_id} ({page_type.value})")
        return saved_filters

    async def load_saved_filter(
        self,
        organisation_id: str,
        page_type: SavedFilterPageType,
        filter_id: str,
        active: Optional[FilterGroup] = None,
        combine: Optional[GroupOperator] = None
    ) -> Tuple[SavedFilter, Optional[FilterGroup]]:
        """
        Carga un filtro guardado como grupo activo.

        Con combine, las reglas del grupo activo y las del filtro guardado se
        fusionan (activas primero) bajo un grupo nuevo con ese operador. Si
        combine es None o alguno de los dos lados no tiene reglas, es una
        carga simple que reemplaza el grupo activo.

        El resultado se normaliza con la tabla de campos de la página, por lo
        que puede ser None si todas las reglas quedaron incompletas.

        Returns:
            Tupla (SavedFilter, FilterGroup normalizado o None)

        Raises:
            SavedFilterNotFoundError: Si no existe en la organización/página
            InvalidFilterFormatError: Si filterData está corrupto
        """
        saved_filter = await self.repository.get(organisation_id, filter_id)
        if saved_filter is None or saved_filter.page_type != page_type:
            raise SavedFilterNotFoundError(filter_id)

        group = deserialize_group(saved_filter.filter_data, filter_id=filter_id)
        if combine is not None and active is not None and active.rules and group.rules:
            logger.debug(
                f"Combining saved filter {filter_id} with {len(active.rules)} active rules ({combine.value})"
            )
            group = FilterGroup(
                id=generate_id(),
                operator=combine,
                rules=[*active.rules, *group.rules]
            )

        fields = FilterFieldRegistry.get_fields(page_type)
        return saved_filter, normalize_group(group, fields)

    async def delete_saved_filter(self, organisation_id: str, filter_id: str) -> None:
        """
        Elimina un filtro guardado.

        Raises:
            SavedFilterNotFoundError: Si no existe en la organización
            StorageError: Si falla la eliminación
        """
        removed = await self.repository.delete(organisation_id, filter_id)
        if not removed:
            raise SavedFilterNotFoundError(filter_id)
        logger.info(f"Saved filter {filter_id} deleted for {organisation_id}")
