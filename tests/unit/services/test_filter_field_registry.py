"""
Unit tests for FilterFieldRegistry (field tables per page).
"""
import pytest

from cassius.exceptions import PageTypeNotSupportedError
from cassius.models.enums import FieldType, FilterOperator, NUMBER_OPERATORS, SavedFilterPageType
from cassius.services.filters import FilterFieldRegistry


class TestFilterFieldRegistry:

    def test_supported_page_types(self):
        assert FilterFieldRegistry.supported_page_types() == ["implants", "protheses"]

    def test_implant_fields_in_declaration_order(self):
        fields = FilterFieldRegistry.get_fields("implants")
        assert list(fields) == [
            "marque", "referenceFabricant", "diametre", "longueur", "lot", "poseCount", "successRate"
        ]

    def test_prothese_select_field(self):
        field = FilterFieldRegistry.get_fields(SavedFilterPageType.PROTHESES)["typeProthese"]

        assert field.type == FieldType.SELECT
        assert field.operators == (FilterOperator.EQUALS, FilterOperator.NOT_EQUALS)
        assert field.option_label("SCELLEE") == "Scellée"
        assert field.option_label("OTHER") is None

    def test_numeric_fields_allow_every_comparison(self):
        for field in FilterFieldRegistry.get_fields("implants").values():
            if field.type == FieldType.NUMBER:
                assert field.operators == NUMBER_OPERATORS

    def test_text_fields_never_allow_ordering(self):
        for page_type in FilterFieldRegistry.supported_page_types():
            for field in FilterFieldRegistry.get_fields(page_type).values():
                if field.type != FieldType.NUMBER:
                    assert FilterOperator.GREATER_THAN not in field.operators
                    assert FilterOperator.BETWEEN not in field.operators

    def test_page_type_is_case_insensitive(self):
        assert FilterFieldRegistry.resolve_page_type("IMPLANTS") == SavedFilterPageType.IMPLANTS

    def test_unknown_page_type_raises(self):
        with pytest.raises(PageTypeNotSupportedError) as exc_info:
            FilterFieldRegistry.get_fields("patients")

        assert exc_info.value.error_code == "PAGE_TYPE_NOT_SUPPORTED"
        assert exc_info.value.data["supported"] == ["implants", "protheses"]

    def test_field_description(self):
        description = FilterFieldRegistry.get_field_description("protheses")

        assert description.startswith("PROTHESES - Campos filtrables:")
        assert "3. typeProthese (select): equals, not_equals" in description
