"""
Proyección de un grupo activo a chips legibles ("Marque contient stra").
"""
from dataclasses import dataclass
from typing import List, Optional

from cassius.models.enums import FilterOperator, OPERATOR_LABELS
from cassius.models.filters import FilterGroup, FilterRule
from .base import FieldConfig, FieldTable
from .validator import normalize_group
from .values import format_value


@dataclass(frozen=True)
class FilterChip:
    """Chip de una regla activa. rule_id permite quitarla con remove_rule."""
    rule_id: str
    field: str
    label: str
    operator_label: str


def _display_value(rule: FilterRule, field_config: FieldConfig) -> str:
    if rule.operator == FilterOperator.BETWEEN:
        return f"{format_value(rule.value)} - {format_value(rule.value2)}"
    if field_config.options:
        option_label = field_config.option_label(rule.value)
        if option_label is not None:
            return option_label
    return format_value(rule.value)


def build_chips(group: Optional[FilterGroup], fields: FieldTable) -> List[FilterChip]:
    """
    Un chip por regla, en el orden del grupo.

    Las reglas sobre campos fuera de la tabla no generan chip (el grupo
    debería venir normalizado).
    """
    if group is None:
        return []

    chips = []
    for rule in group.rules:
        field_config = fields.get(rule.field)
        if field_config is None:
            continue

        operator_label = OPERATOR_LABELS[rule.operator]
        chips.append(FilterChip(
            rule_id=rule.id,
            field=rule.field,
            label=f"{field_config.label} {operator_label} {_display_value(rule, field_config)}",
            operator_label=operator_label,
        ))
    return chips


def remove_rule(
    group: Optional[FilterGroup],
    rule_id: str,
    fields: FieldTable
) -> Optional[FilterGroup]:
    """Quita la regla rule_id y re-normaliza (grupo vacío → None)."""
    if group is None:
        return None

    remaining = [rule for rule in group.rules if rule.id != rule_id]
    return normalize_group(group.model_copy(update={"rules": remaining}), fields)


def count_active_rules(group: Optional[FilterGroup]) -> int:
    return len(group.rules) if group is not None else 0
