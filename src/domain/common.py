"""Shared result payloads passed between the match lifecycle and the adjuster."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SideResult:
    """One competing side of a completed match, reduced to what the adjuster needs."""

    side_number: int
    player_ids: tuple[int, ...]
    net_score: int


@dataclass(frozen=True)
class TwoSidedResult:
    """Canonical outcome of a completed head-to-head match."""

    match_id: int | None
    group_id: int | None
    holes_played: int
    side1: SideResult
    side2: SideResult

    @property
    def margin(self) -> int:
        """Net strokes by which side 1 beat side 2 (negative when side 1 lost)."""
        return self.side2.net_score - self.side1.net_score

    @property
    def sides(self) -> tuple[SideResult, SideResult]:
        return (self.side1, self.side2)


@dataclass(frozen=True)
class MultiSidedResult:
    """A completed match with a side count other than two; no adjustment rule exists."""

    match_id: int | None
    group_id: int | None
    holes_played: int
    side_count: int


__all__ = ["MultiSidedResult", "SideResult", "TwoSidedResult"]
