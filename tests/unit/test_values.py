"""
Unit tests for literal helpers used by the filter engine.
"""
import pytest

from cassius.services.filters.values import format_value, is_empty_value, to_number


@pytest.mark.parametrize("value,expected", [
    (None, True),
    ("", True),
    (" ", False),
    (0, False),
    ("0", False),
])
def test_is_empty_value(value, expected):
    assert is_empty_value(value) is expected


@pytest.mark.parametrize("value,expected", [
    ("4", 4),
    (" 3.5 ", 3.5),
    (4.0, 4),
    (7, 7),
    ("abc", None),
    ("", None),
    (None, None),
    (True, None),
    ("nan", None),
    ("inf", None),
])
def test_to_number(value, expected):
    assert to_number(value) == expected


def test_to_number_keeps_integral_values_as_int():
    assert isinstance(to_number("10.0"), int)


@pytest.mark.parametrize("value,expected", [
    (4.0, "4"),
    (3.5, "3.5"),
    (12, "12"),
    ("VISSEE", "VISSEE"),
    (None, ""),
])
def test_format_value(value, expected):
    assert format_value(value) == expected


def test_to_number_handles_integers_beyond_float_range():
    huge = 10 ** 400

    assert to_number(huge) == huge
    assert to_number(str(huge)) == huge
    assert to_number("1e400") is None
