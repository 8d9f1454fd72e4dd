"""Match formats and lifecycle sequencing."""

from domain.matches.errors import (
    InvalidScoreError,
    MatchLifecycleError,
    MatchStateError,
    TeamShapeError,
)
from domain.matches.formats import MatchFormat, TeamShape, team_handicap, team_shape, validate_team_shape
from domain.matches.lifecycle import (
    MatchState,
    MatchStatus,
    PlayerSlot,
    TeamResult,
    TeamSetup,
    adjust_skill_indices,
    adjustment_input,
    assign_teams,
    enter_scores,
    new_match,
)

__all__ = [
    "InvalidScoreError",
    "MatchFormat",
    "MatchLifecycleError",
    "MatchState",
    "MatchStateError",
    "MatchStatus",
    "PlayerSlot",
    "TeamResult",
    "TeamSetup",
    "TeamShape",
    "TeamShapeError",
    "adjust_skill_indices",
    "adjustment_input",
    "assign_teams",
    "enter_scores",
    "new_match",
    "team_handicap",
    "team_shape",
    "validate_team_shape",
]
