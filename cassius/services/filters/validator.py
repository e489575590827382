"""
Validación y normalización de grupos de filtros.

Una regla incompleta (sin valor, valor no numérico en campo numérico,
between sin segundo límite) no es un error: se descarta en silencio al
aplicar. Si no queda ninguna regla, el grupo equivale a "sin filtro" (None).
"""

import logging
from typing import Optional

from cassius.models.enums import FilterOperator
from cassius.models.filters import FilterGroup, FilterRule
from .base import FieldConfig, FieldTable
from .values import is_empty_value, to_number

logger = logging.getLogger(__name__)


def is_rule_allowed(rule: FilterRule, field_config: Optional[FieldConfig]) -> bool:
    """El campo existe en la tabla y admite el operador de la regla."""
    return field_config is not None and field_config.allows(rule.operator)


def is_rule_complete(rule: FilterRule, field_config: Optional[FieldConfig]) -> bool:
    """
    Determina si una regla es utilizable.

    Reglas:
    - value no vacío
    - campo numérico: value numérico
    - between (campo numérico): value2 no vacío y numérico

    Args:
        rule: Regla a validar
        field_config: Metadata del campo (None si el campo es desconocido)

    Returns:
        True si la regla puede evaluarse
    """
    if is_empty_value(rule.value):
        return False

    if field_config is not None and field_config.is_numeric:
        if to_number(rule.value) is None:
            return False
        if rule.operator == FilterOperator.BETWEEN:
            if is_empty_value(rule.value2) or to_number(rule.value2) is None:
                return False

    return True


def _coerce_rule(rule: FilterRule, field_config: FieldConfig) -> FilterRule:
    is_between = rule.operator == FilterOperator.BETWEEN

    if not field_config.is_numeric:
        if rule.value2 is None or is_between:
            return rule
        return rule.model_copy(update={"value2": None})

    value = to_number(rule.value)
    value2 = to_number(rule.value2) if is_between else None

    if is_between and value2 < value:
        # Rango invertido: se conserva tal cual, no coincide ninguna entidad
        logger.warning(
            f"Regla between con rango invertido ({rule.field}: {value} > {value2}), "
            f"ninguna entidad coincidirá"
        )

    return rule.model_copy(update={"value": value, "value2": value2})


def normalize_group(group: Optional[FilterGroup], fields: FieldTable) -> Optional[FilterGroup]:
    """
    Normaliza un grupo antes de aplicarlo o persistirlo.

    - Descarta reglas sobre campos desconocidos u operadores no permitidos
    - Descarta reglas incompletas
    - Convierte literales de campos numéricos a número
    - Grupo vacío → None

    Idempotente: normalize_group(normalize_group(g)) == normalize_group(g).

    Args:
        group: Grupo editado por el usuario (o None)
        fields: Tabla de campos de la página

    Returns:
        Grupo normalizado, o None si no queda ninguna regla válida
    """
    if group is None:
        return None

    valid_rules: list[FilterRule] = []
    for rule in group.rules:
        field_config = fields.get(rule.field)

        if not is_rule_allowed(rule, field_config):
            logger.debug(f"Regla descartada: operador {rule.operator.value} no permitido para '{rule.field}'")
            continue

        if not is_rule_complete(rule, field_config):
            logger.debug(f"Regla descartada: '{rule.field}' incompleta (value={rule.value!r})")
            continue

        valid_rules.append(_coerce_rule(rule, field_config))

    if not valid_rules:
        return None

    return group.model_copy(update={"rules": valid_rules})
