"""Money and quantity normalization.

Every price or quantity that crosses into the cart, checkout or order code
goes through these helpers first. Prices are `Decimal` values quantized to
cents; quantities are plain integers.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Iterable

from .exceptions import InvalidAmount

CENT = Decimal("0.01")
ZERO = Decimal("0.00")

# Declared vs computed totals (and payment amounts) may differ by at most this much.
AMOUNT_TOLERANCE = Decimal("0.01")

# Largest value a money column (max_digits=12, decimal_places=2) can hold.
MAX_AMOUNT = Decimal("9999999999.99")
# PositiveIntegerField upper bound.
MAX_QUANTITY = 2147483647


def _to_decimal(value: Any, field: str) -> Decimal:
    if value is None or isinstance(value, bool):
        raise InvalidAmount(field, value)
    if isinstance(value, str):
        value = value.strip()
        if not value:
            raise InvalidAmount(field, value)
    try:
        number = Decimal(str(value)) if isinstance(value, float) else Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidAmount(field, value)
    if not number.is_finite():
        raise InvalidAmount(field, value)
    return number


def parse_amount(value: Any, *, field: str = "amount") -> Decimal:
    """Return `value` as an exact non-negative Decimal, without rounding.

    Tolerance checks compare this value, so 0.011 off stays 0.011 off.
    """

    number = _to_decimal(value, field)
    if number < 0:
        raise InvalidAmount(field, value, reason="must not be negative")
    if number > MAX_AMOUNT:
        raise InvalidAmount(field, value, reason="is too large")
    return number


def normalize_amount(value: Any, *, field: str = "amount") -> Decimal:
    """Return `value` as a non-negative Decimal rounded to cents.

    Accepts ints, floats, Decimals and numeric strings. Raises `InvalidAmount`
    for anything missing, non-numeric, non-finite, negative or above
    `MAX_AMOUNT`.
    """

    number = parse_amount(value, field=field)
    try:
        return number.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise InvalidAmount(field, value)


def normalize_quantity(value: Any, *, field: str = "quantity") -> int:
    """Return `value` as an int.

    Zero and negative results are returned unchanged; callers decide whether
    they mean "remove" or are an error.
    """

    number = _to_decimal(value, field)
    if number != number.to_integral_value():
        raise InvalidAmount(field, value, reason="must be a whole number")
    if abs(number) > MAX_QUANTITY:
        raise InvalidAmount(field, value, reason="is too large")
    return int(number)


def require_positive_quantity(value: Any, *, field: str = "quantity") -> int:
    quantity = normalize_quantity(value, field=field)
    if quantity <= 0:
        raise InvalidAmount(field, value, reason="must be a positive integer")
    return quantity


def amounts_match(left: Decimal, right: Decimal) -> bool:
    """Compare two money values allowing for rounding noise."""

    return abs(Decimal(left) - Decimal(right)) <= AMOUNT_TOLERANCE


def signed_difference(declared: Decimal, expected: Decimal) -> Decimal:
    return Decimal(declared) - Decimal(expected)


def line_total(unit_price: Decimal, quantity: int) -> Decimal:
    return (Decimal(unit_price) * Decimal(int(quantity))).quantize(CENT, rounding=ROUND_HALF_UP)


def lines_total(lines: Iterable[Any]) -> Decimal:
    """Sum `unit_price * quantity` over line objects or mappings."""

    total = ZERO
    for line in lines:
        if isinstance(line, dict):
            total += line_total(Decimal(str(line["unit_price"])), line["quantity"])
        else:
            total += line_total(line.unit_price, line.quantity)
    return total.quantize(CENT, rounding=ROUND_HALF_UP)
