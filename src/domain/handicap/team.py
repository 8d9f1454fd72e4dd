"""Team handicap aggregation and relative stroke allocation."""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal

from domain.handicap.rounding import round1, round_whole, to_decimal

# Weights apply to handicaps sorted ascending (lowest handicap first).
SCRAMBLE_WEIGHTS: dict[int, tuple[float, ...]] = {
    2: (0.35, 0.15),
    4: (0.20, 0.15, 0.10, 0.05),
}
BEST_BALL_WEIGHTS: dict[int, tuple[float, ...]] = {
    2: (0.80, 0.20),
    4: (0.80, 0.60, 0.40, 0.20),
}


def _weighted(sorted_handicaps: Sequence[float], weights: Sequence[float]) -> Decimal:
    total = Decimal(0)
    for handicap, weight in zip(sorted_handicaps, weights):
        total += to_decimal(handicap) * to_decimal(weight)
    return total


def scramble_handicap(handicaps: Sequence[float]) -> float:
    """Scramble allowance; team sizes without a weight table use the mean."""
    if not handicaps:
        return 0.0

    ordered = sorted(handicaps)
    weights = SCRAMBLE_WEIGHTS.get(len(ordered))
    if weights is not None:
        return round1(_weighted(ordered, weights))
    total = sum((to_decimal(handicap) for handicap in ordered), Decimal(0))
    return round1(total / len(ordered))


def best_ball_handicap(handicaps: Sequence[float]) -> float:
    """Best ball / shamble allowance; other team sizes use the lowest handicap."""
    if not handicaps:
        return 0.0

    ordered = sorted(handicaps)
    weights = BEST_BALL_WEIGHTS.get(len(ordered))
    if weights is not None:
        return round1(_weighted(ordered, weights))
    return round1(ordered[0])


def individual_handicap(handicaps: Sequence[float]) -> float:
    """Match play / stroke play: the first player's own handicap, no blending."""
    if not handicaps:
        return 0.0
    return round1(handicaps[0])


def relative_strokes(team_handicaps: Sequence[float]) -> list[int]:
    """Strokes each side receives relative to the lowest team handicap."""
    if not team_handicaps:
        return []
    lowest = to_decimal(min(team_handicaps))
    return [round_whole(to_decimal(handicap) - lowest) for handicap in team_handicaps]


__all__ = [
    "BEST_BALL_WEIGHTS",
    "SCRAMBLE_WEIGHTS",
    "best_ball_handicap",
    "individual_handicap",
    "relative_strokes",
    "scramble_handicap",
]
