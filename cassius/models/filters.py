"""
Modelos Pydantic para reglas y grupos de filtros avanzados.

FilterRule y FilterGroup son valores efímeros construidos en el cliente.
Se aplican a una vista, se descartan, o se serializan en un SavedFilter.
"""
import uuid
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .enums import FilterOperator, GroupOperator

FilterValue = Union[int, float, str]


def generate_id() -> str:
    """Token opaco de 9 caracteres para reglas y grupos."""
    return uuid.uuid4().hex[:9]


class FilterRule(BaseModel):
    """
    Un predicado: campo, operador y uno o dos literales.

    value None o "" significa "sin especificar" y excluye la regla al aplicar.
    value2 solo se usa con operator=between (límite superior del rango).
    """
    id: str = Field(
        default_factory=generate_id,
        description="Token opaco generado por el cliente",
        examples=["k3j9x0a2b"]
    )
    field: str = Field(
        ...,
        min_length=1,
        description="Nombre del atributo filtrable (depende de la página)",
        examples=["marque", "diametre"]
    )
    operator: FilterOperator = Field(
        ...,
        description="Operador de comparación",
        examples=["contains", "between"]
    )
    value: Optional[FilterValue] = Field(
        None,
        description="Literal a comparar",
        examples=["Straumann", 4.1]
    )
    value2: Optional[FilterValue] = Field(
        None,
        description="Límite superior (solo between)",
        examples=[5.0]
    )

    model_config = ConfigDict(extra="ignore")


class FilterGroup(BaseModel):
    """
    Lista plana de reglas combinadas con un único operador (AND/OR).

    El orden de las reglas no afecta la evaluación, solo la visualización.
    """
    id: str = Field(
        default_factory=generate_id,
        description="Token opaco del grupo"
    )
    operator: GroupOperator = Field(
        GroupOperator.AND,
        description="Combinador aplicado a todas las reglas"
    )
    rules: list[FilterRule] = Field(
        default_factory=list,
        description="Reglas del grupo (sin sub-grupos)"
    )

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "id": "g1a2b3c4d",
                "operator": "AND",
                "rules": [
                    {"id": "r1a2b3c4d", "field": "marque", "operator": "contains", "value": "stra"},
                    {"id": "r5e6f7g8h", "field": "diametre", "operator": "between", "value": 3.5, "value2": 4.5}
                ]
            }
        }
    )
