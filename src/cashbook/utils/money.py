"""Money helpers: decimal accumulation, rounding and display."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Iterable

CENT = Decimal("0.01")
ZERO = Decimal("0")


def to_decimal(value: Any) -> Decimal:
    """Convert a stored amount into a Decimal.

    ``None`` counts as zero. Floats go through ``str`` so that ``0.1`` becomes
    ``Decimal("0.1")`` rather than its binary expansion.

    Raises:
        ValueError: If the value is not numeric
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        value = str(value)
    try:
        return Decimal(value)
    except (InvalidOperation, TypeError) as e:
        raise ValueError(f"Could not convert {value!r} to an amount: {e}") from e


def decimal_sum(values: Iterable[Any]) -> Decimal:
    """Sum amounts as Decimals, starting from ``Decimal("0")``."""
    total = ZERO
    for value in values:
        total += to_decimal(value)
    return total


def quantize_cents(amount: Decimal) -> Decimal:
    """Round an amount to cents (half up)."""
    return to_decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)


def format_currency(amount: Any) -> str:
    """Format an amount as ``$1,234.56`` (``-$12.00`` when negative)."""
    value = quantize_cents(to_decimal(amount))
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"
