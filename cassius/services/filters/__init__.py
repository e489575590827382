"""
Motor genérico de filtros avanzados (implants / protheses).

Arquitectura:
- FieldConfig: Metadata de un campo filtrable (tipo, operadores, etiqueta)
- FilterFieldRegistry: Tabla de campos por página
- normalize_group: Descarta reglas incompletas y convierte números
- FilterEvaluator: Evalúa un grupo AND/OR sobre entidades en memoria
- serialize_group / deserialize_group: filterData de filtros guardados
- build_chips / remove_rule: Proyección de reglas activas a chips

Ejemplo de uso:
    from cassius.services.filters import FilterEvaluator

    evaluator = FilterEvaluator.for_page("implants")
    visibles = evaluator.apply(implants, group)
"""

from .base import FieldConfig, FieldOption, FieldTable, RuleResult, build_field_table
from .chips import FilterChip, build_chips, count_active_rules, remove_rule
from .evaluator import FilterEvaluator
from .registry import FilterFieldRegistry
from .serializer import deserialize_group, serialize_group
from .validator import is_rule_allowed, is_rule_complete, normalize_group

__all__ = [
    'FieldConfig',
    'FieldOption',
    'FieldTable',
    'RuleResult',
    'build_field_table',
    'FilterChip',
    'build_chips',
    'count_active_rules',
    'remove_rule',
    'FilterEvaluator',
    'FilterFieldRegistry',
    'deserialize_group',
    'serialize_group',
    'is_rule_allowed',
    'is_rule_complete',
    'normalize_group',
]
