"""Post-match group skill index (GSI) adjustment."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from domain.common import MultiSidedResult, SideResult, TwoSidedResult
from domain.handicap.rounding import round1, to_decimal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SkillIndexParameters:
    learning_rate_offset: float = 3.0
    dampening: float = 0.5
    max_adjustment: float = 2.0
    full_round_holes: int = 18


@dataclass(frozen=True)
class SkillIndexEvent:
    player_id: int
    group_id: int | None
    match_id: int | None
    side_number: int
    won: bool
    score_differential: float
    matches_played_pre: int
    holes_played: int
    learning_rate: float
    round_weight: float
    raw_adjustment: float
    applied_adjustment: float
    pre_index: float
    index_delta: float
    post_index: float


@dataclass(frozen=True)
class SkillIndexUpdate:
    """Adjustments produced for a two-sided match."""

    match_id: int | None
    events: tuple[SkillIndexEvent, ...]
    skipped_player_ids: tuple[int, ...] = ()

    def new_indices(self) -> dict[int, float]:
        return {event.player_id: event.post_index for event in self.events}


@dataclass(frozen=True)
class UnsupportedSideCount:
    """Explicit no-op outcome for matches that are not head-to-head."""

    match_id: int | None
    side_count: int

    @property
    def reason(self) -> str:
        return (
            f"skill index adjustment is only defined for two sides; "
            f"match_id={self.match_id} has {self.side_count}"
        )


def learning_rate(matches_played: int, params: SkillIndexParameters | None = None) -> float:
    """Per-player learning rate; shrinks as the player completes more group matches."""
    params = params or SkillIndexParameters()
    if matches_played < 0:
        raise ValueError(f"matches_played must be >= 0, got {matches_played}")
    return 1.0 / (matches_played + params.learning_rate_offset)


def round_weight(holes_played: int, params: SkillIndexParameters | None = None) -> float:
    params = params or SkillIndexParameters()
    return holes_played / params.full_round_holes


def clamp_adjustment(raw_adjustment: float, params: SkillIndexParameters | None = None) -> float:
    params = params or SkillIndexParameters()
    limit = params.max_adjustment
    return max(-limit, min(raw_adjustment, limit))


def raw_adjustment(
    matches_played: int,
    score_differential: float,
    holes_played: int,
    params: SkillIndexParameters | None = None,
) -> float:
    params = params or SkillIndexParameters()
    return (
        score_differential
        * learning_rate(matches_played, params)
        * round_weight(holes_played, params)
        * params.dampening
    )


def adjust_skill_index(
    current_index: float,
    matches_played: int,
    score_differential: float,
    holes_played: int,
    params: SkillIndexParameters | None = None,
) -> float:
    """Return the new skill index after one match.

    ``score_differential`` is negative when the player's side won by that many
    net strokes and positive when it lost. The move is capped at
    ``max_adjustment`` strokes in either direction.
    """
    params = params or SkillIndexParameters()
    adjustment = clamp_adjustment(
        raw_adjustment(matches_played, score_differential, holes_played, params),
        params,
    )
    return round1(to_decimal(current_index) + to_decimal(adjustment))


def side_differential(side_number: int, margin: float) -> float:
    """Differential for side 1 or side 2 given ``margin = net2 - net1``."""
    if side_number == 1:
        return -margin
    if side_number == 2:
        return margin
    raise ValueError(f"side_number must be 1 or 2, got {side_number}")


class SkillIndexAdjuster:
    """Applies the GSI update rule to every participant of a completed match.

    Each player's new index depends only on their own current index and
    completed-match count plus the match margin, so events may be applied in
    any order. The caller guarantees ``current_indices`` holds the latest
    committed values.
    """

    def __init__(self, params: SkillIndexParameters | None = None) -> None:
        self.params = params or SkillIndexParameters()

    def process_match(
        self,
        result: TwoSidedResult | MultiSidedResult,
        *,
        current_indices: Mapping[int, float],
        matches_played: Mapping[int, int],
    ) -> SkillIndexUpdate | UnsupportedSideCount:
        if isinstance(result, MultiSidedResult):
            outcome = UnsupportedSideCount(match_id=result.match_id, side_count=result.side_count)
            logger.warning(outcome.reason)
            return outcome

        self._validate(result)

        events: list[SkillIndexEvent] = []
        skipped: list[int] = []
        margin = result.margin
        for side in result.sides:
            differential = side_differential(side.side_number, margin)
            for player_id in side.player_ids:
                current = current_indices.get(player_id)
                if current is None:
                    skipped.append(player_id)
                    continue
                events.append(
                    self._player_event(
                        result,
                        side=side,
                        player_id=player_id,
                        current_index=float(current),
                        matches_played=int(matches_played.get(player_id, 0)),
                        score_differential=differential,
                    )
                )

        if skipped:
            logger.warning(
                "match_id=%s skipped skill index adjustment for players without a roster entry: %s",
                result.match_id,
                skipped,
            )

        return SkillIndexUpdate(
            match_id=result.match_id,
            events=tuple(events),
            skipped_player_ids=tuple(skipped),
        )

    def _player_event(
        self,
        result: TwoSidedResult,
        *,
        side: SideResult,
        player_id: int,
        current_index: float,
        matches_played: int,
        score_differential: float,
    ) -> SkillIndexEvent:
        raw = raw_adjustment(matches_played, score_differential, result.holes_played, self.params)
        applied = clamp_adjustment(raw, self.params)
        post_index = round1(to_decimal(current_index) + to_decimal(applied))
        return SkillIndexEvent(
            player_id=player_id,
            group_id=result.group_id,
            match_id=result.match_id,
            side_number=side.side_number,
            won=score_differential < 0,
            score_differential=score_differential,
            matches_played_pre=matches_played,
            holes_played=result.holes_played,
            learning_rate=learning_rate(matches_played, self.params),
            round_weight=round_weight(result.holes_played, self.params),
            raw_adjustment=raw,
            applied_adjustment=applied,
            pre_index=current_index,
            index_delta=round1(to_decimal(post_index) - to_decimal(current_index)),
            post_index=post_index,
        )

    @staticmethod
    def _validate(result: TwoSidedResult) -> None:
        if (result.side1.side_number, result.side2.side_number) != (1, 2):
            raise ValueError(
                f"match_id={result.match_id} sides must be numbered 1 and 2, got "
                f"{result.side1.side_number}/{result.side2.side_number}"
            )
        overlap = set(result.side1.player_ids) & set(result.side2.player_ids)
        if overlap:
            raise ValueError(
                f"match_id={result.match_id} has players on both sides: {sorted(overlap)}"
            )


__all__ = [
    "SkillIndexAdjuster",
    "SkillIndexEvent",
    "SkillIndexParameters",
    "SkillIndexUpdate",
    "UnsupportedSideCount",
    "adjust_skill_index",
    "clamp_adjustment",
    "learning_rate",
    "raw_adjustment",
    "round_weight",
    "side_differential",
]
