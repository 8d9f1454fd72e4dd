"""Handicap math: course handicaps, team allowances and skill index updates."""

from domain.handicap.config import (
    HandicapSystemConfig,
    load_handicap_system_config,
    load_handicap_system_configs,
)
from domain.handicap.course import (
    CourseAttributes,
    course_handicap,
    partial_handicap,
    playing_handicap,
    relative_handicaps,
    resolve_skill_index,
)
from domain.handicap.rounding import round1, round_whole, to_decimal
from domain.handicap.skill_index import (
    SkillIndexAdjuster,
    SkillIndexEvent,
    SkillIndexParameters,
    SkillIndexUpdate,
    UnsupportedSideCount,
    adjust_skill_index,
    side_differential,
)
from domain.handicap.team import (
    best_ball_handicap,
    individual_handicap,
    relative_strokes,
    scramble_handicap,
)

__all__ = [
    "CourseAttributes",
    "HandicapSystemConfig",
    "SkillIndexAdjuster",
    "SkillIndexEvent",
    "SkillIndexParameters",
    "SkillIndexUpdate",
    "UnsupportedSideCount",
    "adjust_skill_index",
    "best_ball_handicap",
    "course_handicap",
    "individual_handicap",
    "load_handicap_system_config",
    "load_handicap_system_configs",
    "partial_handicap",
    "playing_handicap",
    "relative_handicaps",
    "relative_strokes",
    "resolve_skill_index",
    "round1",
    "round_whole",
    "scramble_handicap",
    "side_differential",
    "to_decimal",
]
