"""
Registro centralizado de campos filtrables por página.

Define, para cada catálogo (implants, protheses), qué campos se pueden
filtrar, con qué tipo, qué operadores y qué etiqueta.

Este es el único lugar donde se configuran las tablas de campos - el
evaluador, el normalizador y los chips son genéricos.
"""

from typing import Dict, List, Union

from cassius.exceptions import PageTypeNotSupportedError
from cassius.models.enums import (
    FieldType,
    FilterOperator,
    NUMBER_OPERATORS,
    SavedFilterPageType,
    TEXT_OPERATORS,
)
from .base import FieldConfig, FieldOption, FieldTable, build_field_table


class FilterFieldRegistry:
    """
    Registro de tablas de campos por página.

    Ejemplo de uso:
        fields = FilterFieldRegistry.get_fields("implants")
        evaluator = FilterEvaluator(fields)
        visibles = evaluator.apply(implants, group)
    """

    # ============================================================================
    # IMPLANTS - catálogo de implantes (con estadísticas de poses)
    # ============================================================================
    _IMPLANT_FIELDS = build_field_table(
        FieldConfig(
            field="marque",
            label="Marque",
            type=FieldType.TEXT,
            operators=TEXT_OPERATORS,
        ),
        FieldConfig(
            field="referenceFabricant",
            label="Référence fabricant",
            type=FieldType.TEXT,
            operators=(
                FilterOperator.CONTAINS,
                FilterOperator.EQUALS,
                FilterOperator.NOT_CONTAINS,
            ),
        ),
        FieldConfig(
            field="diametre",
            label="Diamètre (mm)",
            type=FieldType.NUMBER,
            operators=NUMBER_OPERATORS,
        ),
        FieldConfig(
            field="longueur",
            label="Longueur (mm)",
            type=FieldType.NUMBER,
            operators=NUMBER_OPERATORS,
        ),
        FieldConfig(
            field="lot",
            label="Numéro de lot",
            type=FieldType.TEXT,
            operators=(FilterOperator.CONTAINS, FilterOperator.EQUALS),
        ),
        FieldConfig(
            field="poseCount",
            label="Nombre de poses",
            type=FieldType.NUMBER,
            operators=NUMBER_OPERATORS,
        ),
        FieldConfig(
            field="successRate",
            label="Taux de réussite (%)",
            type=FieldType.NUMBER,
            operators=NUMBER_OPERATORS,
        ),
    )

    # ============================================================================
    # PROTHESES - catálogo de prótesis (vissée / scellée)
    # ============================================================================
    _PROTHESE_FIELDS = build_field_table(
        FieldConfig(
            field="marque",
            label="Marque",
            type=FieldType.TEXT,
            operators=TEXT_OPERATORS,
        ),
        FieldConfig(
            field="referenceFabricant",
            label="Référence fabricant",
            type=FieldType.TEXT,
            operators=(
                FilterOperator.CONTAINS,
                FilterOperator.EQUALS,
                FilterOperator.NOT_CONTAINS,
            ),
        ),
        FieldConfig(
            field="typeProthese",
            label="Type de prothèse",
            type=FieldType.SELECT,
            operators=(FilterOperator.EQUALS, FilterOperator.NOT_EQUALS),
            options=(
                FieldOption(value="VISSEE", label="Vissée"),
                FieldOption(value="SCELLEE", label="Scellée"),
            ),
        ),
        FieldConfig(
            field="poseCount",
            label="Nombre de poses",
            type=FieldType.NUMBER,
            operators=NUMBER_OPERATORS,
        ),
    )

    _FIELD_MAP: Dict[SavedFilterPageType, FieldTable] = {
        SavedFilterPageType.IMPLANTS: _IMPLANT_FIELDS,
        SavedFilterPageType.PROTHESES: _PROTHESE_FIELDS,
    }

    @classmethod
    def supported_page_types(cls) -> List[str]:
        return [page_type.value for page_type in cls._FIELD_MAP]

    @classmethod
    def resolve_page_type(cls, page_type: Union[str, SavedFilterPageType]) -> SavedFilterPageType:
        """
        Convierte un nombre de página a SavedFilterPageType.

        Raises:
            PageTypeNotSupportedError: Si la página no tiene tabla de campos
        """
        try:
            resolved = SavedFilterPageType(str(getattr(page_type, "value", page_type)).lower())
        except ValueError:
            raise PageTypeNotSupportedError(str(page_type), cls.supported_page_types()) from None

        if resolved not in cls._FIELD_MAP:
            raise PageTypeNotSupportedError(resolved.value, cls.supported_page_types())
        return resolved

    @classmethod
    def get_fields(cls, page_type: Union[str, SavedFilterPageType]) -> FieldTable:
        """
        Obtiene la tabla de campos filtrables de una página.

        Args:
            page_type: "implants" o "protheses"

        Returns:
            Mapping campo → FieldConfig (en orden de declaración)

        Raises:
            PageTypeNotSupportedError: Si la página no está registrada

        Examples:
            >>> list(FilterFieldRegistry.get_fields("protheses"))
            ['marque', 'referenceFabricant', 'typeProthese', 'poseCount']
        """
        return cls._FIELD_MAP[cls.resolve_page_type(page_type)]

    @classmethod
    def get_field_description(cls, page_type: Union[str, SavedFilterPageType]) -> str:
        """
        Genera descripción legible de los campos de una página.

        Example:
            >>> print(FilterFieldRegistry.get_field_description("protheses"))
            PROTHESES - Campos filtrables:
            1. marque (text): contains, equals, not_contains, not_equals
            ...
        """
        resolved = cls.resolve_page_type(page_type)
        lines = [f"{resolved.value.upper()} - Campos filtrables:"]
        for idx, field_config in enumerate(cls._FIELD_MAP[resolved].values(), start=1):
            operators = ", ".join(op.value for op in field_config.operators)
            lines.append(f"{idx}. {field_config.field} ({field_config.type.value}): {operators}")
        return "\n".join(lines)
