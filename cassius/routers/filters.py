"""
Filters Router - Motor de filtros avanzados.

Expone la tabla de campos de cada página y las operaciones sin estado del
motor (normalizar, aplicar, chips). No requiere Redis.

Endpoints:
- GET  /api/filters/{page_type}/fields        - Campos filtrables y operadores
- POST /api/filters/{page_type}/normalize     - Grupo normalizado (o null)
- POST /api/filters/{page_type}/apply         - Aplica un grupo a items recibidos
- POST /api/filters/{page_type}/chips         - Chips de las reglas activas
- POST /api/filters/{page_type}/chips/remove  - Quita una regla y re-normaliza
"""

from fastapi import APIRouter, status
import logging

from cassius.models.filter_api import (
    ApplyFilterRequest,
    ApplyFilterResponse,
    FieldConfigResponse,
    FieldListResponse,
    FieldOptionResponse,
    FilterChipResponse,
    FilterChipsResponse,
    FilterGroupRequest,
    NormalizedFilterResponse,
    RemoveChipRequest,
)
from cassius.services.filters import (
    FilterEvaluator,
    FilterFieldRegistry,
    build_chips,
    count_active_rules,
    normalize_group,
    remove_rule,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/filters/{page_type}/fields",
    response_model=FieldListResponse,
    status_code=status.HTTP_200_OK
)
async def get_filter_fields(page_type: str):
    """
    Lista los campos filtrables de una página (para el drawer de filtros).

    Raises:
        PageTypeNotSupportedError (404): Si la página no tiene filtros avanzados
    """
    resolved = FilterFieldRegistry.resolve_page_type(page_type)
    fields = FilterFieldRegistry.get_fields(resolved)

    return FieldListResponse(
        page_type=resolved.value,
        fields=[
            FieldConfigResponse(
                field=field_config.field,
                label=field_config.label,
                type=field_config.type,
                operators=list(field_config.operators),
                options=[
                    FieldOptionResponse(value=option.value, label=option.label)
                    for option in field_config.options
                ],
            )
            for field_config in fields.values()
        ]
    )


@router.post(
    "/filters/{page_type}/normalize",
    response_model=NormalizedFilterResponse,
    status_code=status.HTTP_200_OK
)
async def normalize_filters(page_type: str, request: FilterGroupRequest):
    """
    Normaliza el grupo editado: descarta reglas incompletas y convierte
    literales numéricos. filters=null significa "sin filtro".
    """
    fields = FilterFieldRegistry.get_fields(page_type)
    normalized = normalize_group(request.filters, fields)

    return NormalizedFilterResponse(
        filters=normalized,
        active_filter_count=count_active_rules(normalized)
    )


@router.post(
    "/filters/{page_type}/apply",
    response_model=ApplyFilterResponse,
    status_code=status.HTTP_200_OK
)
async def apply_filters(page_type: str, request: ApplyFilterRequest):
    """
    Aplica un grupo a una colección ya cargada por el cliente.

    El orden de los items se conserva. Un grupo que queda vacío tras
    normalizar retorna todos los items.

    Example request:
        ```json
        {
            "filters": {"operator": "AND", "rules": [
                {"field": "marque", "operator": "contains", "value": "stra"}
            ]},
            "items": [{"marque": "Straumann", "diametre": 4.0}, {"marque": "Nobel", "diametre": 3.5}]
        }
        ```
    """
    evaluator = FilterEvaluator.for_page(page_type)
    normalized = normalize_group(request.filters, evaluator.fields)
    matched = evaluator.apply(request.items, normalized)

    logger.info(
        f"Filtros aplicados en {page_type}: {len(matched)}/{len(request.items)} items "
        f"({count_active_rules(normalized)} reglas)"
    )

    return ApplyFilterResponse(
        items=matched,
        total=len(request.items),
        matched=len(matched),
        filters=normalized
    )


@router.post(
    "/filters/{page_type}/chips",
    response_model=FilterChipsResponse,
    status_code=status.HTTP_200_OK
)
async def get_filter_chips(page_type: str, request: FilterGroupRequest):
    """Chips ("Marque contient stra") para las reglas activas del grupo."""
    fields = FilterFieldRegistry.get_fields(page_type)
    normalized = normalize_group(request.filters, fields)

    return FilterChipsResponse(
        chips=[
            FilterChipResponse(
                rule_id=chip.rule_id,
                field=chip.field,
                label=chip.label,
                operator_label=chip.operator_label
            )
            for chip in build_chips(normalized, fields)
        ],
        operator=normalized.operator.value if normalized else None
    )


@router.post(
    "/filters/{page_type}/chips/remove",
    response_model=NormalizedFilterResponse,
    status_code=status.HTTP_200_OK
)
async def remove_filter_chip(page_type: str, request: RemoveChipRequest):
    """
    Quita la regla de un chip. Si no queda ninguna regla válida el grupo
    resultante es null.
    """
    fields = FilterFieldRegistry.get_fields(page_type)
    remaining = remove_rule(request.filters, request.rule_id, fields)

    return NormalizedFilterResponse(
        filters=remaining,
        active_filter_count=count_active_rules(remaining)
    )
