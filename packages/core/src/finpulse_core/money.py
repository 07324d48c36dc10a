"""Decimal helpers shared by the analysis stages.

Amounts are accumulated at full Decimal precision and only rounded to
cents when a report value is built.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any

ZERO = Decimal("0")
HUNDRED = Decimal("100")
CENTS = Decimal("0.01")


def to_decimal(value: Any) -> Decimal:
    """Coerce a raw amount into a finite Decimal.

    Anything that is not a finite number (None, empty or non-numeric
    strings, NaN, infinities, booleans) becomes ``Decimal("0")``.
    """
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        return value if value.is_finite() else ZERO
    if isinstance(value, float):
        value = repr(value)
    if isinstance(value, str):
        value = value.strip().replace(",", "")
        if not value:
            return ZERO

    try:
        result = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        return ZERO
    return result if result.is_finite() else ZERO


def _quantize_half_up(value: Decimal, exponent: Decimal) -> Decimal:
    # Widen precision so very large values round instead of raising
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() - exponent.adjusted() + 2)
        return value.quantize(exponent, rounding=ROUND_HALF_UP)


def round_money(value: Decimal) -> Decimal:
    """Round to two decimal places, half-up."""
    return _quantize_half_up(value, CENTS)


def round_whole(value: Decimal) -> int:
    """Round to the nearest integer, half-up."""
    return int(_quantize_half_up(value, Decimal("1")))


def safe_divide(numerator: Decimal, denominator: Decimal) -> Decimal:
    """Divide, returning 0 for a zero denominator."""
    if denominator == 0:
        return ZERO
    return numerator / denominator


def percentage(part: Decimal, whole: Decimal) -> Decimal:
    """``part / whole * 100``, or 0 when ``whole`` is 0 (unrounded)."""
    return safe_divide(part, whole) * HUNDRED


def format_currency(amount: Decimal, symbol: str) -> str:
    """Format an amount for display, e.g. ``₹1,250.00`` or ``-$40.00``."""
    rounded = round_money(amount)
    sign = "-" if rounded < 0 else ""
    return f"{sign}{symbol}{abs(rounded):,.2f}"
