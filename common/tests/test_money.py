from decimal import Decimal

import pytest
from common.exceptions import InvalidAmount
from common.money import (
    amounts_match,
    lines_total,
    normalize_amount,
    normalize_quantity,
    parse_amount,
    require_positive_quantity,
    signed_difference,
)


@pytest.mark.parametrize(
    "value,expected",
    [
        (10, Decimal("10.00")),
        (19.999, Decimal("20.00")),
        ("  42.5 ", Decimal("42.50")),
        (Decimal("0.005"), Decimal("0.01")),
        ("0", Decimal("0.00")),
    ],
)
def test_normalize_amount(value, expected):
    assert normalize_amount(value) == expected


@pytest.mark.parametrize("value", [None, "", "   ", "abc", "NaN", "Infinity", float("inf"), -1, "-0.01", True])
def test_normalize_amount_rejects(value):
    with pytest.raises(InvalidAmount) as exc:
        normalize_amount(value, field="price")
    assert exc.value.details["field"] == "price"


def test_parse_amount_keeps_precision():
    assert parse_amount("100.011") == Decimal("100.011")


@pytest.mark.parametrize("value,expected", [(3, 3), ("4", 4), (2.0, 2), (0, 0), (-2, -2)])
def test_normalize_quantity(value, expected):
    assert normalize_quantity(value) == expected


@pytest.mark.parametrize("value", [1.5, "1.5", "x", None, False])
def test_normalize_quantity_rejects(value):
    with pytest.raises(InvalidAmount):
        normalize_quantity(value)


def test_require_positive_quantity():
    assert require_positive_quantity("2") == 2
    with pytest.raises(InvalidAmount):
        require_positive_quantity(0)


def test_tolerance_boundaries():
    assert amounts_match(Decimal("100.01"), Decimal("100.00"))
    assert not amounts_match(Decimal("100.011"), Decimal("100.00"))
    assert signed_difference(Decimal("99.50"), Decimal("100.00")) == Decimal("-0.50")


def test_lines_total_accepts_mappings():
    lines = [{"unit_price": "10.10", "quantity": 2}, {"unit_price": "0.30", "quantity": 1}]
    assert lines_total(lines) == Decimal("20.50")


def test_amount_upper_bound_matches_money_columns():
    assert normalize_amount("9999999999.99") == Decimal("9999999999.99")
    assert normalize_amount("9999999999.985") == Decimal("9999999999.99")


@pytest.mark.parametrize("value", ["1e30", "10000000000.00", "9999999999.995", 10**40])
def test_oversized_amounts_are_rejected(value):
    with pytest.raises(InvalidAmount) as exc:
        normalize_amount(value, field="total_price")
    assert exc.value.details["field"] == "total_price"
    assert exc.value.message == "total_price is too large"


def test_oversized_quantity_is_rejected():
    assert normalize_quantity(2147483647) == 2147483647
    with pytest.raises(InvalidAmount):
        normalize_quantity("1e30")
    with pytest.raises(InvalidAmount):
        require_positive_quantity(2147483648)
