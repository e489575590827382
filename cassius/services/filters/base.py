"""
Tipos base del motor de filtros avanzados.

Define la metadata de un campo filtrable (FieldConfig) y el resultado
detallado de evaluar una regla (RuleResult).
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

from cassius.models.enums import FieldType, FilterOperator

Accessor = Union[str, Callable[[Any], Any]]


@dataclass(frozen=True)
class RuleResult:
    """
    Resultado de aplicar una regla a una entidad.

    Attributes:
        passed: True si la entidad cumple la regla
        reason: Razón detallada del resultado (para logging/debugging)
    """
    passed: bool
    reason: str


@dataclass(frozen=True)
class FieldOption:
    """Opción de un campo SELECT (valor almacenado + etiqueta visible)."""
    value: str
    label: str


@dataclass(frozen=True)
class FieldConfig:
    """
    Metadata de un campo filtrable.

    Una tabla de FieldConfig por página reemplaza la lógica duplicada por
    tipo de entidad: el evaluador es genérico y solo recibe la tabla.

    Attributes:
        field: Nombre del campo en las reglas (ej: "diametre")
        label: Etiqueta visible en chips (ej: "Diamètre (mm)")
        type: TEXT, NUMBER o SELECT
        operators: Operadores permitidos para el campo
        accessor: Clave/atributo de la entidad, o función; por defecto `field`
        options: Opciones de un campo SELECT
    """
    field: str
    label: str
    type: FieldType
    operators: tuple[FilterOperator, ...]
    accessor: Optional[Accessor] = None
    options: tuple[FieldOption, ...] = ()

    @property
    def is_numeric(self) -> bool:
        return self.type == FieldType.NUMBER

    def allows(self, operator: FilterOperator) -> bool:
        return operator in self.operators

    def read(self, entity: Any) -> Any:
        """
        Lee el valor del campo en una entidad (dict o objeto).

        Returns:
            El valor, o None si la entidad no lo tiene.
        """
        accessor = self.accessor or self.field
        if callable(accessor):
            return accessor(entity)
        if isinstance(entity, Mapping):
            return entity.get(accessor)
        return getattr(entity, accessor, None)

    def option_label(self, value: Any) -> Optional[str]:
        for option in self.options:
            if option.value == value:
                return option.label
        return None


FieldTable = Mapping[str, FieldConfig]


def build_field_table(*configs: FieldConfig) -> dict[str, FieldConfig]:
    """Indexa configs por nombre de campo (conserva el orden de declaración)."""
    table: dict[str, FieldConfig] = {}
    for field_config in configs:
        if field_config.field in table:
            raise ValueError(f"Campo duplicado en tabla de filtros: {field_config.field}")
        table[field_config.field] = field_config
    return table
