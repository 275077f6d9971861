"""
Money Utilities - Single source of truth for money and ratio parsing.

Everything that enters the calculator goes through here first, so the engines
only ever see finite ``Decimal`` values and whole cents.

Usage:
    amount = parse_money("1,234.56")
    cents = to_cents(amount)            # 123456
    value = from_cents(cents)           # Decimal("1234.56")
    ratio = parse_ratio("0.35")
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

ZERO = Decimal(0)
HUNDRED = Decimal(100)
CENT = Decimal("0.01")


def to_decimal(value: Any, field: str = "value") -> Decimal:
    """
    Convert a number or numeric string to a finite Decimal.

    Floats go through ``str()`` so 0.1 becomes Decimal("0.1") rather than its
    binary expansion. Thousands separators and surrounding blanks are accepted
    in strings.

    Args:
        value: int, float, str or Decimal
        field: Name used in error messages

    Returns:
        The parsed Decimal

    Raises:
        ValueError: If the value is empty, unparseable, boolean, NaN or infinite
    """
    if isinstance(value, bool):
        raise ValueError(f"{field} must be a number, got {value!r}")
    if isinstance(value, Decimal):
        parsed = value
    elif isinstance(value, int):
        parsed = Decimal(value)
    elif isinstance(value, float):
        parsed = Decimal(str(value))
    elif isinstance(value, str):
        text = value.strip().replace(",", "")
        if not text:
            raise ValueError(f"{field} must not be empty")
        try:
            parsed = Decimal(text)
        except InvalidOperation as e:
            raise ValueError(f"{field} is not a valid number: {value!r}") from e
    else:
        raise ValueError(f"{field} must be a number, got {type(value).__name__}")

    if not parsed.is_finite():
        raise ValueError(f"{field} must be finite, got {value!r}")
    return parsed


def _quantize(value: Decimal, exp: Decimal, field: str) -> Decimal:
    try:
        return value.quantize(exp, rounding=ROUND_HALF_UP)
    except InvalidOperation as e:
        raise ValueError(f"{field} is too large: {value}") from e


def parse_money(value: Any, field: str = "amount") -> Decimal:
    """Parse a currency amount, rounded half-up to whole cents."""
    return _quantize(to_decimal(value, field), CENT, field)


def parse_ratio(value: Any, field: str = "target_ratio") -> Decimal:
    """Parse a fractional ratio (0.35 means 35%). Precision is kept as given."""
    return to_decimal(value, field)


def require_non_negative(value: Any, field: str) -> Decimal:
    """Parse a value and reject negatives.

    Raises:
        ValueError: If the value is invalid or below zero
    """
    parsed = to_decimal(value, field)
    if parsed < 0:
        raise ValueError(f"{field} must not be negative, got {value!r}")
    return parsed


def round_half_up(value: Decimal) -> int:
    """Round to the nearest integer, halves away from zero.

    Raises:
        ValueError: If the value has more digits than the decimal context holds
    """
    return int(_quantize(value, Decimal(1), "value"))


def to_cents(amount: Decimal) -> int:
    """Convert a money amount to integer cents."""
    return round_half_up(amount * HUNDRED)


def from_cents(cents: int) -> Decimal:
    """Convert integer cents back to a two-decimal money amount."""
    return (Decimal(cents) / HUNDRED).quantize(CENT)
