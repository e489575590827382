"""
Evaluador genérico de filtros avanzados.

Evalúa un FilterGroup sobre una colección ya cargada en memoria. Es
síncrono y sin I/O: el fetch y la paginación son responsabilidad del
llamador.

Ejemplo de uso:
    evaluator = FilterEvaluator.for_page("implants")
    visibles = evaluator.apply(implants, group)
"""

import logging
from typing import Any, Iterable, List, Optional, TypeVar, Union

from cassius.models.enums import FilterOperator, GroupOperator, SavedFilterPageType
from cassius.models.filters import FilterGroup, FilterRule
from .base import FieldTable, RuleResult
from .registry import FilterFieldRegistry
from .validator import normalize_group
from .values import format_value, to_number

logger = logging.getLogger(__name__)

T = TypeVar("T")

_ORDERING_OPERATORS = {
    FilterOperator.GREATER_THAN: lambda a, b: a > b,
    FilterOperator.GREATER_THAN_OR_EQUAL: lambda a, b: a >= b,
    FilterOperator.LESS_THAN: lambda a, b: a < b,
    FilterOperator.LESS_THAN_OR_EQUAL: lambda a, b: a <= b,
}


def _as_text(value: Any) -> str:
    return format_value(value).lower()


class FilterEvaluator:
    """
    Evaluador parametrizado por una tabla de campos.

    La misma clase sirve para implants y protheses; solo cambia la tabla.
    """

    def __init__(self, fields: FieldTable):
        self._fields = fields

    @classmethod
    def for_page(cls, page_type: Union[str, SavedFilterPageType]) -> "FilterEvaluator":
        return cls(FilterFieldRegistry.get_fields(page_type))

    @property
    def fields(self) -> FieldTable:
        return self._fields

    def explain_rule(self, entity: Any, rule: FilterRule) -> RuleResult:
        """
        Evalúa una regla sobre una entidad y explica el resultado.

        Política para valores ausentes: solo not_equals / not_contains
        resultan True (verdad vacua para operadores negativos).

        Args:
            entity: dict o objeto con los campos de la página
            rule: Regla (normalizada)

        Returns:
            RuleResult con passed y razón
        """
        field_config = self._fields.get(rule.field)
        if field_config is None:
            return RuleResult(True, f"Campo desconocido '{rule.field}' (regla neutra)")

        entity_value = field_config.read(entity)
        if entity_value is None:
            return RuleResult(
                rule.operator.is_negative,
                f"'{rule.field}' ausente ({rule.operator.value})"
            )

        passed = self._compare(entity_value, rule, field_config.is_numeric)
        return RuleResult(
            passed,
            f"{rule.field}={entity_value!r} {rule.operator.value} {rule.value!r}"
            + (f"..{rule.value2!r}" if rule.operator == FilterOperator.BETWEEN else "")
        )

    def _compare(self, entity_value: Any, rule: FilterRule, numeric: bool) -> bool:
        operator = rule.operator

        if operator in (FilterOperator.EQUALS, FilterOperator.NOT_EQUALS):
            if numeric:
                left, right = to_number(entity_value), to_number(rule.value)
                equal = left is not None and right is not None and left == right
            else:
                equal = _as_text(entity_value) == _as_text(rule.value)
            return equal if operator == FilterOperator.EQUALS else not equal

        if operator in (FilterOperator.CONTAINS, FilterOperator.NOT_CONTAINS):
            contained = _as_text(rule.value) in _as_text(entity_value)
            return contained if operator == FilterOperator.CONTAINS else not contained

        left = to_number(entity_value)
        if left is None:
            return False

        if operator == FilterOperator.BETWEEN:
            low, high = to_number(rule.value), to_number(rule.value2)
            if low is None or high is None:
                return False
            return low <= left <= high

        right = to_number(rule.value)
        if right is None:
            return False
        return _ORDERING_OPERATORS[operator](left, right)

    def evaluate_rule(self, entity: Any, rule: FilterRule) -> bool:
        return self.explain_rule(entity, rule).passed

    def matches(self, entity: Any, group: Optional[FilterGroup]) -> bool:
        """
        AND: todas las reglas deben cumplirse. OR: al menos una.

        El grupo debe estar normalizado; un grupo None o vacío no filtra.
        """
        if group is None or not group.rules:
            return True

        results = (self.evaluate_rule(entity, rule) for rule in group.rules)
        if group.operator == GroupOperator.AND:
            return all(results)
        return any(results)

    def apply(self, entities: Iterable[T], group: Optional[FilterGroup]) -> List[T]:
        """
        Filtra una colección conservando el orden original.

        Normaliza el grupo antes de evaluar; si queda None, retorna todas
        las entidades.

        Returns:
            Nueva lista con las entidades que cumplen el grupo
        """
        items = list(entities)
        normalized = normalize_group(group, self._fields)
        if normalized is None:
            return items

        matched = [item for item in items if self.matches(item, normalized)]
        logger.debug(
            f"Filtro {normalized.operator.value} ({len(normalized.rules)} reglas): "
            f"{len(matched)}/{len(items)} entidades"
        )
        return matched
