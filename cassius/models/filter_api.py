"""
Modelos request/response de los endpoints /api/filters.
"""
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .enums import FieldType, FilterOperator
from .filters import FilterGroup


class FieldOptionResponse(BaseModel):
    value: str
    label: str


class FieldConfigResponse(BaseModel):
    """Campo filtrable de una página, tal como se muestra en el panel de filtros."""
    field: str
    label: str
    type: FieldType
    operators: List[FilterOperator]
    options: List[FieldOptionResponse] = Field(default_factory=list)


class FieldListResponse(BaseModel):
    page_type: str
    fields: List[FieldConfigResponse]

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FilterGroupRequest(BaseModel):
    """Body con un grupo (posiblemente null), tal como se edita en el panel."""
    filters: Optional[FilterGroup] = None


class NormalizedFilterResponse(BaseModel):
    """Grupo sin las reglas incompletas; null significa "sin filtro"."""
    filters: Optional[FilterGroup] = None
    active_filter_count: int = Field(0, ge=0)

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApplyFilterRequest(BaseModel):
    """
    Aplica un grupo a una colección ya obtenida.

    La obtención y la paginación son del cliente; los items se devuelven en
    el orden en que se recibieron.
    """
    filters: Optional[FilterGroup] = None
    items: List[dict[str, Any]] = Field(
        default_factory=list,
        description="Entidades (nombre de campo -> valor)",
        examples=[[{"marque": "Straumann", "diametre": 4.0}, {"marque": "Nobel", "diametre": 3.5}]]
    )


class ApplyFilterResponse(BaseModel):
    items: List[dict[str, Any]]
    total: int = Field(..., ge=0, description="Items recibidos")
    matched: int = Field(..., ge=0, description="Items devueltos")
    filters: Optional[FilterGroup] = Field(None, description="Grupo efectivamente aplicado")


class FilterChipResponse(BaseModel):
    rule_id: str
    field: str
    label: str
    operator_label: str

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FilterChipsResponse(BaseModel):
    chips: List[FilterChipResponse]
    operator: Optional[str] = None


class RemoveChipRequest(BaseModel):
    filters: Optional[FilterGroup] = None
    rule_id: str = Field(..., min_length=1)

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
