"""
Serialización de FilterGroup para filtros guardados (filterData).
"""
import json
import logging
from typing import Any, Optional

from pydantic import ValidationError

from cassius.exceptions import InvalidFilterFormatError
from cassius.models.filters import FilterGroup

logger = logging.getLogger(__name__)


def serialize_group(group: FilterGroup) -> str:
    """JSON compacto del grupo; value2 (y value) se omiten cuando son None."""
    return group.model_dump_json(exclude_none=True)


def deserialize_group(data: Any, filter_id: Optional[str] = None) -> FilterGroup:
    """
    Reconstruye un FilterGroup desde filterData.

    Args:
        data: Texto JSON almacenado
        filter_id: ID del filtro guardado (solo para el error)

    Returns:
        FilterGroup completo

    Raises:
        InvalidFilterFormatError: Si el texto no es JSON o no describe un grupo
    """
    if not isinstance(data, (str, bytes)):
        raise InvalidFilterFormatError(
            f"filterData must be text, got {type(data).__name__}", filter_id
        )

    try:
        payload = json.loads(data)
    except ValueError as e:
        logger.info(f"filterData no es JSON válido (filter_id={filter_id}): {e}")
        raise InvalidFilterFormatError(str(e), filter_id) from e

    if (
        not isinstance(payload, dict)
        or "operator" not in payload
        or not isinstance(payload.get("rules"), list)
    ):
        raise InvalidFilterFormatError("filterData is not a filter group", filter_id)

    try:
        return FilterGroup.model_validate(payload)
    except ValidationError as e:
        logger.info(f"filterData con estructura inválida (filter_id={filter_id}): {e.error_count()} errores")
        raise InvalidFilterFormatError(
            "; ".join(error["msg"] for error in e.errors()), filter_id
        ) from e
