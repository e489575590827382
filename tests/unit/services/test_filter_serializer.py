"""
Unit tests for filterData serialization.
"""
import json

import pytest

from cassius.exceptions import InvalidFilterFormatError
from cassius.models.enums import FilterOperator, GroupOperator
from cassius.models.filters import FilterGroup, FilterRule
from cassius.services.filters import deserialize_group, serialize_group


@pytest.fixture
def group():
    return FilterGroup(
        id="g1a2b3c4d",
        operator=GroupOperator.OR,
        rules=[
            FilterRule(id="r1", field="marque", operator=FilterOperator.CONTAINS, value="stra"),
            FilterRule(id="r2", field="diametre", operator=FilterOperator.BETWEEN, value=3.5, value2=4.5),
            FilterRule(id="r3", field="poseCount", operator=FilterOperator.GREATER_THAN, value=10),
        ]
    )


class TestSerializeGroup:

    def test_json_shape(self, group):
        payload = json.loads(serialize_group(group))

        assert payload["id"] == "g1a2b3c4d"
        assert payload["operator"] == "OR"
        assert payload["rules"][0] == {
            "id": "r1", "field": "marque", "operator": "contains", "value": "stra"
        }
        assert payload["rules"][1]["value2"] == 4.5

    def test_value2_omitted_when_unset(self, group):
        payload = json.loads(serialize_group(group))
        assert "value2" not in payload["rules"][2]

    def test_round_trip(self, group):
        assert deserialize_group(serialize_group(group)) == group

    def test_round_trip_empty_group(self):
        empty = FilterGroup(id="g0", rules=[])
        assert deserialize_group(serialize_group(empty)) == empty


class TestDeserializeGroup:

    @pytest.mark.parametrize("data", [
        "not json",
        "",
        "null",
        "[]",
        '{"id": "g1", "operator": "AND"}',
        '{"rules": []}',
        '{"id": "g1", "rules": [{"field": "marque", "operator": "contains", "value": "x"}]}',
        '{"id": "g1", "operator": "XOR", "rules": []}',
        '{"id": "g1", "operator": "AND", "rules": [{"field": "marque", "operator": "like", "value": "x"}]}',
        '{"id": "g1", "operator": "AND", "rules": "marque"}',
    ])
    def test_invalid_data_raises(self, data):
        with pytest.raises(InvalidFilterFormatError) as exc_info:
            deserialize_group(data)

        assert exc_info.value.error_code == "INVALID_FILTER_FORMAT"
        assert exc_info.value.message == "Format de filtre invalide."

    def test_non_text_raises(self):
        with pytest.raises(InvalidFilterFormatError):
            deserialize_group({"rules": []})

    def test_error_carries_filter_id(self):
        with pytest.raises(InvalidFilterFormatError) as exc_info:
            deserialize_group("{", filter_id="sf-1")

        assert exc_info.value.data["filter_id"] == "sf-1"

    def test_accepts_client_payload_without_ids(self):
        group = deserialize_group(
            '{"operator": "AND", "rules": [{"field": "marque", "operator": "equals", "value": "Nobel"}]}'
        )

        assert group.rules[0].value == "Nobel"
        assert len(group.id) == 9
