"""Course handicap, partial-round scaling and skill index resolution."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from domain.handicap.rounding import round1, to_decimal

NEUTRAL_SLOPE = 113
FULL_ROUND_HOLES = 18
DEFAULT_SKILL_INDEX = 20.0


@dataclass(frozen=True)
class CourseAttributes:
    """Immutable rating data for one course."""

    par: int
    course_rating: float
    slope_rating: int

    def course_handicap(self, skill_index: float) -> float:
        return course_handicap(
            skill_index,
            slope_rating=self.slope_rating,
            course_rating=self.course_rating,
            par=self.par,
        )


def course_handicap(
    skill_index: float,
    slope_rating: int,
    course_rating: float,
    par: int,
) -> float:
    """Expected strokes over par for a player of ``skill_index`` on this course."""
    index = to_decimal(skill_index)
    return round1(index * slope_rating / NEUTRAL_SLOPE + (to_decimal(course_rating) - par))


def partial_handicap(full_handicap: float, holes_played: int) -> float:
    """Scale an 18-hole course handicap to the number of holes actually played."""
    return round1(to_decimal(full_handicap) * holes_played / FULL_ROUND_HOLES)


def playing_handicap(skill_index: float, course: CourseAttributes, holes_played: int) -> float:
    """Course handicap adjusted for a partial round; the value frozen per player."""
    full = course.course_handicap(skill_index)
    if holes_played == FULL_ROUND_HOLES:
        return full
    return partial_handicap(full, holes_played)


def resolve_skill_index(
    group_value: float | None,
    profile_value: float | None,
    default: float = DEFAULT_SKILL_INDEX,
) -> float:
    """Pick the group index (GSI), then the profile index (PHI), then ``default``."""
    if group_value is not None:
        return float(group_value)
    if profile_value is not None:
        return float(profile_value)
    return float(default)


def relative_handicaps(skill_indices: Sequence[float]) -> list[float]:
    """Index differences from the best player in a group (best player = 0.0)."""
    if not skill_indices:
        return []
    lowest = to_decimal(min(skill_indices))
    return [round1(to_decimal(index) - lowest) for index in skill_indices]


__all__ = [
    "CourseAttributes",
    "DEFAULT_SKILL_INDEX",
    "FULL_ROUND_HOLES",
    "NEUTRAL_SLOPE",
    "course_handicap",
    "partial_handicap",
    "playing_handicap",
    "relative_handicaps",
    "resolve_skill_index",
]
