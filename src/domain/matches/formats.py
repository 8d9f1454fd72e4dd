"""Match formats and the team shape each one allows."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum

from domain.handicap.team import best_ball_handicap, individual_handicap, scramble_handicap
from domain.matches.errors import TeamShapeError

AggregateFn = Callable[[Sequence[float]], float]


class MatchFormat(str, Enum):
    """Game formats a match can be created with."""

    STROKE_PLAY = "stroke_play"
    MATCH_PLAY = "match_play"
    SCRAMBLE_2V2 = "2v2_scramble"
    BEST_BALL = "best_ball"
    SHAMBLE = "shamble"

    @classmethod
    def parse(cls, value: str | MatchFormat) -> MatchFormat:
        if isinstance(value, MatchFormat):
            return value
        normalized = str(value).strip().lower()
        normalized = _LEGACY_ALIASES.get(normalized, normalized)
        try:
            return cls(normalized)
        except ValueError as exc:
            available = ", ".join(member.value for member in cls)
            raise ValueError(f"Unknown match format {value!r}. Available: {available}") from exc


# Short codes written by older match-creation forms.
_LEGACY_ALIASES = {
    "stroke": MatchFormat.STROKE_PLAY.value,
    "scramble": MatchFormat.SCRAMBLE_2V2.value,
}


@dataclass(frozen=True)
class TeamShape:
    """Allowed side count, per-side player count and team handicap rule."""

    min_sides: int
    max_sides: int
    min_players: int
    max_players: int
    aggregate: AggregateFn


_SHAPES: dict[MatchFormat, TeamShape] = {
    MatchFormat.STROKE_PLAY: TeamShape(1, 4, 1, 1, individual_handicap),
    MatchFormat.MATCH_PLAY: TeamShape(2, 2, 1, 2, individual_handicap),
    MatchFormat.SCRAMBLE_2V2: TeamShape(2, 2, 1, 2, scramble_handicap),
    MatchFormat.BEST_BALL: TeamShape(2, 2, 1, 2, best_ball_handicap),
    MatchFormat.SHAMBLE: TeamShape(2, 2, 1, 2, best_ball_handicap),
}


def team_shape(match_format: MatchFormat | str) -> TeamShape:
    return _SHAPES[MatchFormat.parse(match_format)]


def team_handicap(match_format: MatchFormat | str, handicaps: Sequence[float]) -> float:
    """Dispatch to the aggregator registered for ``match_format``."""
    return team_shape(match_format).aggregate(handicaps)


def validate_team_shape(match_format: MatchFormat | str, rosters: Sequence[Sequence[int]]) -> None:
    """Check side count, players per side and that nobody plays on two teams."""
    fmt = MatchFormat.parse(match_format)
    shape = _SHAPES[fmt]

    side_count = len(rosters)
    if not shape.min_sides <= side_count <= shape.max_sides:
        raise TeamShapeError(
            f"{fmt.value} needs {shape.min_sides}-{shape.max_sides} teams, got {side_count}"
        )

    seen: set[int] = set()
    for team_number, roster in enumerate(rosters, start=1):
        if not shape.min_players <= len(roster) <= shape.max_players:
            raise TeamShapeError(
                f"{fmt.value} team {team_number} needs {shape.min_players}-{shape.max_players} "
                f"players, got {len(roster)}"
            )
        for player_id in roster:
            if player_id in seen:
                raise TeamShapeError(
                    f"{fmt.value} team {team_number}: player {player_id} is already assigned"
                )
            seen.add(player_id)


__all__ = [
    "MatchFormat",
    "TeamShape",
    "TeamShapeError",
    "team_handicap",
    "team_shape",
    "validate_team_shape",
]
