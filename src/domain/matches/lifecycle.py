"""Match lifecycle: team assignment, score entry and the hand-off to the adjuster.

A match moves ``pending -> teams_ready -> completed``. Player handicaps are
computed once during team assignment and frozen into the match; nothing in
this module recomputes them later.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from enum import Enum

from domain.common import MultiSidedResult, SideResult, TwoSidedResult
from domain.handicap.course import FULL_ROUND_HOLES, CourseAttributes, playing_handicap
from domain.handicap.skill_index import SkillIndexAdjuster, SkillIndexUpdate, UnsupportedSideCount
from domain.handicap.team import relative_strokes
from domain.matches.errors import InvalidScoreError, MatchLifecycleError, MatchStateError
from domain.matches.formats import MatchFormat, team_handicap, validate_team_shape

ALLOWED_HOLES = (9, FULL_ROUND_HOLES)


class MatchStatus(str, Enum):
    PENDING = "pending"
    TEAMS_READY = "teams_ready"
    COMPLETED = "completed"


@dataclass(frozen=True)
class PlayerSlot:
    player_id: int
    handicap_used: float


@dataclass(frozen=True)
class TeamSetup:
    team_number: int
    players: tuple[PlayerSlot, ...]
    team_handicap: float
    handicap_strokes: int
    handicap_override: bool = False

    @property
    def player_ids(self) -> tuple[int, ...]:
        return tuple(slot.player_id for slot in self.players)


@dataclass(frozen=True)
class TeamResult:
    team_number: int
    gross_score: int
    net_score: int
    is_winner: bool


@dataclass(frozen=True)
class MatchState:
    """Everything the lifecycle needs to know about one match."""

    match_id: int | None
    group_id: int | None
    match_format: MatchFormat
    holes_played: int
    course: CourseAttributes
    status: MatchStatus = MatchStatus.PENDING
    teams: tuple[TeamSetup, ...] = ()
    results: tuple[TeamResult, ...] = ()

    @property
    def side_count(self) -> int:
        return len(self.teams)

    def winners(self) -> tuple[int, ...]:
        return tuple(result.team_number for result in self.results if result.is_winner)


def new_match(
    *,
    match_format: MatchFormat | str,
    holes_played: int,
    course: CourseAttributes,
    match_id: int | None = None,
    group_id: int | None = None,
) -> MatchState:
    """Create a pending match; format and holes are fixed from here on."""
    if holes_played not in ALLOWED_HOLES:
        raise MatchLifecycleError(f"holes_played must be one of {ALLOWED_HOLES}, got {holes_played}")
    return MatchState(
        match_id=match_id,
        group_id=group_id,
        match_format=MatchFormat.parse(match_format),
        holes_played=holes_played,
        course=course,
    )


def assign_teams(
    state: MatchState,
    rosters: Sequence[Sequence[int]],
    skill_indices: Mapping[int, float],
    *,
    stroke_override: Sequence[int] | None = None,
) -> MatchState:
    """Freeze player handicaps, build team handicaps and allot relative strokes.

    ``rosters`` lists player ids per team in team-number order. When
    ``stroke_override`` is given it replaces the computed strokes one-for-one.
    """
    _require_status(state, MatchStatus.PENDING, "assign teams")
    validate_team_shape(state.match_format, rosters)

    frozen_teams: list[tuple[PlayerSlot, ...]] = []
    for roster in rosters:
        slots: list[PlayerSlot] = []
        for player_id in roster:
            if player_id not in skill_indices:
                raise MatchLifecycleError(
                    f"match_id={state.match_id} has no skill index for player {player_id}"
                )
            slots.append(
                PlayerSlot(
                    player_id=player_id,
                    handicap_used=playing_handicap(
                        skill_indices[player_id],
                        state.course,
                        state.holes_played,
                    ),
                )
            )
        frozen_teams.append(tuple(slots))

    team_handicaps = [
        team_handicap(state.match_format, [slot.handicap_used for slot in slots])
        for slots in frozen_teams
    ]

    if stroke_override is not None:
        strokes = _validate_override(stroke_override, team_count=len(frozen_teams))
        overridden = True
    else:
        strokes = relative_strokes(team_handicaps)
        overridden = False

    teams = tuple(
        TeamSetup(
            team_number=team_number,
            players=slots,
            team_handicap=handicap,
            handicap_strokes=team_strokes,
            handicap_override=overridden,
        )
        for team_number, (slots, handicap, team_strokes) in enumerate(
            zip(frozen_teams, team_handicaps, strokes),
            start=1,
        )
    )
    return replace(state, status=MatchStatus.TEAMS_READY, teams=teams)


def enter_scores(state: MatchState, gross_scores: Mapping[int, object]) -> MatchState:
    """Validate gross scores, compute net scores and mark the winners.

    Every team whose net score equals the minimum is a winner, so a tie
    produces several winners.
    """
    _require_status(state, MatchStatus.TEAMS_READY, "enter scores")

    validated: dict[int, int] = {}
    for team in state.teams:
        validated[team.team_number] = _validate_gross(
            gross_scores.get(team.team_number),
            match_id=state.match_id,
            team_number=team.team_number,
        )

    unknown = sorted(set(gross_scores) - set(validated))
    if unknown:
        raise InvalidScoreError(f"match_id={state.match_id} has no teams numbered {unknown}")

    net_scores = {
        team.team_number: validated[team.team_number] - team.handicap_strokes
        for team in state.teams
    }
    best = min(net_scores.values())

    results = tuple(
        TeamResult(
            team_number=team.team_number,
            gross_score=validated[team.team_number],
            net_score=net_scores[team.team_number],
            is_winner=net_scores[team.team_number] == best,
        )
        for team in state.teams
    )
    return replace(state, status=MatchStatus.COMPLETED, results=results)


def adjustment_input(state: MatchState) -> TwoSidedResult | MultiSidedResult:
    """Reduce a completed match to the payload the skill index adjuster consumes."""
    _require_status(state, MatchStatus.COMPLETED, "adjust skill indices")

    if state.side_count != 2:
        return MultiSidedResult(
            match_id=state.match_id,
            group_id=state.group_id,
            holes_played=state.holes_played,
            side_count=state.side_count,
        )

    nets = {result.team_number: result.net_score for result in state.results}
    side1, side2 = sorted(state.teams, key=lambda team: team.team_number)
    return TwoSidedResult(
        match_id=state.match_id,
        group_id=state.group_id,
        holes_played=state.holes_played,
        side1=SideResult(side_number=1, player_ids=side1.player_ids, net_score=nets[side1.team_number]),
        side2=SideResult(side_number=2, player_ids=side2.player_ids, net_score=nets[side2.team_number]),
    )


def adjust_skill_indices(
    state: MatchState,
    *,
    current_indices: Mapping[int, float],
    matches_played: Mapping[int, int],
    adjuster: SkillIndexAdjuster | None = None,
) -> SkillIndexUpdate | UnsupportedSideCount:
    """Run the adjuster over a completed match's participants."""
    adjuster = adjuster or SkillIndexAdjuster()
    return adjuster.process_match(
        adjustment_input(state),
        current_indices=current_indices,
        matches_played=matches_played,
    )


def _require_status(state: MatchState, expected: MatchStatus, action: str) -> None:
    if state.status != expected:
        raise MatchStateError(
            f"match_id={state.match_id} cannot {action} while {state.status.value}; "
            f"expected {expected.value}"
        )


def _validate_gross(value: object, *, match_id: int | None, team_number: int) -> int:
    if value is None:
        raise InvalidScoreError(f"match_id={match_id} team {team_number} has no gross score")
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidScoreError(
            f"match_id={match_id} team {team_number} gross score must be an integer, got {value!r}"
        )
    if value < 0:
        raise InvalidScoreError(
            f"match_id={match_id} team {team_number} gross score must be >= 0, got {value}"
        )
    return value


def _validate_override(stroke_override: Sequence[int], *, team_count: int) -> list[int]:
    if len(stroke_override) != team_count:
        raise MatchLifecycleError(
            f"stroke override needs {team_count} values, got {len(stroke_override)}"
        )
    strokes: list[int] = []
    for value in stroke_override:
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise MatchLifecycleError(f"stroke override values must be integers >= 0, got {value!r}")
        strokes.append(value)
    return strokes


__all__ = [
    "ALLOWED_HOLES",
    "MatchState",
    "MatchStatus",
    "PlayerSlot",
    "TeamResult",
    "TeamSetup",
    "adjust_skill_indices",
    "adjustment_input",
    "assign_teams",
    "enter_scores",
    "new_match",
]
