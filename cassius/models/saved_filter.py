"""
Modelos de filtros guardados (favoritos) de filtros avanzados.

El formato de red conserva las claves camelCase del cliente web
(organisationId, pageType, filterData, createdAt); el código Python usa
atributos snake_case.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from cassius.config import config
from .enums import GroupOperator, SavedFilterPageType
from .filters import FilterGroup


class SavedFilterCreate(BaseModel):
    """
    Request body de POST /api/saved-filters.

    Exactamente uno de filter_data (FilterGroup serializado, se guarda tal
    cual tras validarlo) o filters (FilterGroup, se normaliza y serializa).
    """
    name: str = Field(
        ...,
        description="Nombre elegido por el usuario",
        examples=["Straumann 4mm"]
    )
    page_type: SavedFilterPageType = Field(
        ...,
        description="Página a la que aplica el filtro",
        examples=["implants"]
    )
    filter_data: Optional[str] = Field(
        None,
        min_length=2,
        description="FilterGroup serializado (texto JSON)",
        examples=['{"id":"g1","operator":"AND","rules":[{"id":"r1","field":"marque","operator":"contains","value":"stra"}]}']
    )
    filters: Optional[FilterGroup] = Field(
        None,
        description="FilterGroup activo, serializado en el servidor"
    )

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        if len(value) > config.SAVED_FILTER_NAME_MAX_LENGTH:
            raise ValueError(
                f"name must be at most {config.SAVED_FILTER_NAME_MAX_LENGTH} characters"
            )
        return value

    @model_validator(mode="after")
    def _one_filter_source(self) -> "SavedFilterCreate":
        if (self.filter_data is None) == (self.filters is None):
            raise ValueError("exactly one of filterData or filters is required")
        return self


class SavedFilter(BaseModel):
    """Filtro persistido, acotado a una organización y un tipo de página."""
    id: str = Field(..., description="UUID del filtro guardado")
    organisation_id: str = Field(..., description="Scope de tenant")
    name: str = Field(..., description="Nombre elegido por el usuario")
    page_type: SavedFilterPageType = Field(..., description="Página a la que aplica el filtro")
    filter_data: str = Field(..., description="FilterGroup serializado")
    created_at: datetime = Field(..., description="Fecha de creación (UTC)")

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": "5b0c3c1e-6a43-4f0e-9a43-2f9d2d7b8c11",
                "organisationId": "org-1",
                "name": "Straumann 4mm",
                "pageType": "implants",
                "filterData": '{"id":"g1","operator":"AND","rules":[{"id":"r1","field":"marque","operator":"contains","value":"stra"}]}',
                "createdAt": "2026-03-10T14:30:00Z"
            }
        }
    )


class SavedFilterListResponse(BaseModel):
    """Filtros guardados de un tipo de página, más recientes primero."""
    page_type: SavedFilterPageType
    filters: List[SavedFilter] = Field(default_factory=list)
    total: int = Field(0, ge=0)

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LoadFilterRequest(BaseModel):
    """
    Request body de POST /api/saved-filters/{page_type}/{filter_id}/load.

    Con combine y un grupo activo con reglas, las reglas activas y las
    guardadas se fusionan bajo un grupo nuevo con ese operador. Sin combine
    (o con un lado vacío) equivale a una carga simple.
    """
    filters: Optional[FilterGroup] = Field(
        None,
        description="Grupo activo actual del cliente"
    )
    combine: Optional[GroupOperator] = Field(
        None,
        description="Operador del grupo combinado (AND / OR)",
        examples=["AND"]
    )

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LoadedFilterResponse(BaseModel):
    """Filtro guardado reconstruido como FilterGroup (efímero)."""
    saved_filter_id: str
    name: str
    filters: Optional[FilterGroup] = Field(
        None,
        description="Grupo normalizado; null si todas las reglas quedaron incompletas"
    )

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DeleteSavedFilterResponse(BaseModel):
    """Response de DELETE /api/saved-filters/{filter_id}."""
    success: bool = True
    id: str
