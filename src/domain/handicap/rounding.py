"""Half-up rounding shared by every handicap formula."""

from __future__ import annotations

from decimal import ROUND_FLOOR, Decimal

_HALF = Decimal("0.5")


def to_decimal(value: float | int | Decimal) -> Decimal:
    """Exact decimal form of a handicap value as it was written."""
    if isinstance(value, Decimal):
        return value
    # str() keeps the shortest repr so 0.15 stays 0.15 instead of 0.1499999...
    return Decimal(str(value))


def _round_half_up(value: float | Decimal, places: int) -> Decimal:
    scale = Decimal(10) ** places
    scaled = to_decimal(value) * scale + _HALF
    return scaled.to_integral_value(rounding=ROUND_FLOOR) / scale


def round1(value: float | Decimal) -> float:
    """Round to one decimal place, ties toward +infinity.

    Callers that combine several handicaps should do the arithmetic on
    ``to_decimal`` operands and pass the ``Decimal`` result, so a sum that is
    exactly on a half never arrives here as ``...4999``.
    """
    return float(_round_half_up(value, 1))


def round_whole(value: float | Decimal) -> int:
    """Round to the nearest integer, ties toward +infinity."""
    return int(_round_half_up(value, 0))


__all__ = ["round1", "round_whole", "to_decimal"]
