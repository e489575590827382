"""
Enumeraciones para el sistema de filtros avanzados.

Define operadores de reglas, combinadores de grupo, tipos de campo y
páginas que soportan filtros guardados.
"""
from enum import Enum


class FilterOperator(str, Enum):
    """
    Operadores soportados por una FilterRule.

    Texto: EQUALS, NOT_EQUALS, CONTAINS, NOT_CONTAINS
    Numérico: EQUALS + comparaciones + BETWEEN (rango inclusivo)
    """
    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    CONTAINS = "contains"
    NOT_CONTAINS = "not_contains"
    GREATER_THAN = "greater_than"
    GREATER_THAN_OR_EQUAL = "greater_than_or_equal"
    LESS_THAN = "less_than"
    LESS_THAN_OR_EQUAL = "less_than_or_equal"
    BETWEEN = "between"

    @property
    def is_negative(self) -> bool:
        """Operadores que resultan True cuando la entidad no tiene valor."""
        return self in (FilterOperator.NOT_EQUALS, FilterOperator.NOT_CONTAINS)


class GroupOperator(str, Enum):
    """Combinador booleano aplicado a todas las reglas de un grupo."""
    AND = "AND"
    OR = "OR"


class FieldType(str, Enum):
    """
    Tipo de un campo filtrable.

    SELECT se evalúa como TEXT; solo cambia la etiqueta mostrada en chips.
    """
    TEXT = "text"
    NUMBER = "number"
    SELECT = "select"


class SavedFilterPageType(str, Enum):
    """Páginas (catálogos) con filtros avanzados y favoritos."""
    IMPLANTS = "implants"
    PROTHESES = "protheses"


TEXT_OPERATORS: tuple[FilterOperator, ...] = (
    FilterOperator.CONTAINS,
    FilterOperator.EQUALS,
    FilterOperator.NOT_CONTAINS,
    FilterOperator.NOT_EQUALS,
)

NUMBER_OPERATORS: tuple[FilterOperator, ...] = (
    FilterOperator.EQUALS,
    FilterOperator.GREATER_THAN,
    FilterOperator.LESS_THAN,
    FilterOperator.GREATER_THAN_OR_EQUAL,
    FilterOperator.LESS_THAN_OR_EQUAL,
    FilterOperator.BETWEEN,
)

OPERATOR_LABELS: dict[FilterOperator, str] = {
    FilterOperator.EQUALS: "est égal à",
    FilterOperator.NOT_EQUALS: "n'est pas égal à",
    FilterOperator.CONTAINS: "contient",
    FilterOperator.NOT_CONTAINS: "ne contient pas",
    FilterOperator.GREATER_THAN: "supérieur à",
    FilterOperator.GREATER_THAN_OR_EQUAL: "supérieur ou égal à",
    FilterOperator.LESS_THAN: "inférieur à",
    FilterOperator.LESS_THAN_OR_EQUAL: "inférieur ou égal à",
    FilterOperator.BETWEEN: "entre",
}
