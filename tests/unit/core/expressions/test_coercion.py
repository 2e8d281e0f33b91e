"""Unit tests for value coercion rules."""

import math
from datetime import datetime, timezone

import pytest

from exprkit.core.expressions.coercion import (
    compare,
    is_truthy,
    strict_equals,
    to_datetime,
    to_number,
    to_string,
)
from exprkit.core.expressions.values import UNDEFINED


class TestToNumber:
    """Number coercion."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (5, 5),
            (2.5, 2.5),
            ("12", 12),
            (" 3.5 ", 3.5),
            ("", 0),
            (None, 0),
            (True, 1),
            (False, 0),
            ([], 0),
            ([7], 7),
        ],
    )
    def test_numeric_forms(self, value, expected):
        assert to_number(value) == expected

    @pytest.mark.parametrize("value", [UNDEFINED, "abc", [1, 2], {"a": 1}])
    def test_not_a_number(self, value):
        assert math.isnan(to_number(value))

    def test_datetime_is_epoch_milliseconds(self):
        assert to_number(datetime(1970, 1, 1, 0, 0, 1, tzinfo=timezone.utc)) == 1000

    def test_integer_strings_beyond_double_precision_become_floats(self):
        assert to_number("9" * 5000) == math.inf
        assert to_number("-" + "9" * 5000) == -math.inf
        big = to_number("9007199254740993")
        assert isinstance(big, float)
        assert big == 2**53

    def test_safe_integer_strings_stay_ints(self):
        assert to_number("-42") == -42
        assert isinstance(to_number("9007199254740992"), int)


class TestToString:
    """Null-safe stringification."""

    def test_missing_values_become_empty(self):
        assert to_string(None) == ""
        assert to_string(UNDEFINED) == ""

    def test_scalars(self):
        assert to_string(True) == "true"
        assert to_string(8.0) == "8"
        assert to_string(2.5) == "2.5"
        assert to_string(math.nan) == "NaN"

    def test_lists_join_with_commas(self):
        assert to_string([1, None, "b"]) == "1,,b"


def test_truthiness():
    assert is_truthy([]) is True
    assert is_truthy({}) is True
    assert is_truthy("x") is True
    assert is_truthy(0) is False
    assert is_truthy(math.nan) is False
    assert is_truthy("") is False
    assert is_truthy(UNDEFINED) is False


def test_strict_equality_does_not_cross_types():
    assert strict_equals(1, 1.0) is True
    assert strict_equals(True, 1) is False
    assert strict_equals("1", 1) is False
    assert strict_equals(None, UNDEFINED) is False
    assert strict_equals(None, None) is True
    assert strict_equals([1, 2], [1, 2]) is True


def test_compare_orders_numbers_strings_and_dates():
    assert compare(1, 2) == -1
    assert compare("b", "a") == 1
    assert compare("10", 9) == 1
    assert compare(
        datetime(2024, 1, 1, tzinfo=timezone.utc), datetime(2024, 1, 1, tzinfo=timezone.utc)
    ) == 0
    assert compare("abc", 1) is None
    assert compare(UNDEFINED, 1) is None


def test_to_datetime_accepts_iso_strings():
    parsed = to_datetime("2024-01-15T10:30:00Z")
    assert parsed == datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)
    assert to_datetime("2024-01-15").tzinfo is not None
    assert to_datetime("not a date") is None
    assert to_datetime(None) is None
