"""Unit tests for course handicap, partial rounds and rounding."""

from __future__ import annotations

import pytest

from domain.handicap.course import (
    CourseAttributes,
    course_handicap,
    partial_handicap,
    playing_handicap,
    relative_handicaps,
    resolve_skill_index,
)
from domain.handicap.rounding import round1, round_whole


def test_round1_rounds_ties_up() -> None:
    assert round1(2.25) == pytest.approx(2.3)
    assert round1(1.15) == pytest.approx(1.2)
    assert round1(-2.25) == pytest.approx(-2.2)
    assert round1(6.549) == pytest.approx(6.5)


def test_round_whole_rounds_ties_up() -> None:
    assert round_whole(2.5) == 3
    assert round_whole(3.5) == 4
    assert round_whole(0.49) == 0
    assert round_whole(0.0) == 0


def test_neutral_slope_only_adds_rating_minus_par() -> None:
    for skill_index, rating, par in [(12.3, 70.5, 72), (0.0, 73.1, 72), (-2.4, 69.0, 70), (36.0, 74.2, 72)]:
        assert course_handicap(skill_index, 113, rating, par) == pytest.approx(
            round1(skill_index + (rating - par))
        )


def test_course_handicap_scales_by_slope() -> None:
    # 15.4 * 130 / 113 = 17.717, plus (71.2 - 72)
    assert course_handicap(15.4, 130, 71.2, 72) == pytest.approx(16.9)


def test_course_attributes_delegate_to_formula() -> None:
    course = CourseAttributes(par=72, course_rating=72.0, slope_rating=113)
    assert course.course_handicap(10.0) == pytest.approx(10.0)
    assert course.course_handicap(20.0) == pytest.approx(20.0)


def test_partial_handicap_full_round_is_identity() -> None:
    assert partial_handicap(13.37, 18) == pytest.approx(round1(13.37))
    assert partial_handicap(10.0, 18) == pytest.approx(10.0)


def test_partial_handicap_nine_holes_halves() -> None:
    assert partial_handicap(15.2, 9) == pytest.approx(round1(15.2 / 2))
    assert partial_handicap(20.0, 9) == pytest.approx(10.0)


def test_playing_handicap_applies_partial_round() -> None:
    course = CourseAttributes(par=72, course_rating=72.0, slope_rating=113)
    assert playing_handicap(20.0, course, 18) == pytest.approx(20.0)
    assert playing_handicap(20.0, course, 9) == pytest.approx(10.0)


def test_resolve_skill_index_prefers_group_then_profile_then_default() -> None:
    assert resolve_skill_index(8.2, 14.0) == pytest.approx(8.2)
    assert resolve_skill_index(None, 14.0) == pytest.approx(14.0)
    assert resolve_skill_index(None, None) == pytest.approx(20.0)
    assert resolve_skill_index(0.0, 14.0) == pytest.approx(0.0)
    assert resolve_skill_index(None, None, default=18.0) == pytest.approx(18.0)


def test_relative_handicaps_put_best_player_at_zero() -> None:
    assert relative_handicaps([12.4, 8.0, 20.1]) == pytest.approx([4.4, 0.0, 12.1])
    assert relative_handicaps([]) == []


def test_relative_handicaps_subtract_exactly() -> None:
    # 2.8 - 1.3 and 0.35 - 0.2 both fall just short of the half in binary floats
    assert relative_handicaps([1.3, 2.8]) == pytest.approx([0.0, 1.5])
    assert relative_handicaps([0.2, 0.35]) == pytest.approx([0.0, 0.2])


def test_partial_handicap_half_tenths_round_up() -> None:
    assert partial_handicap(0.5, 9) == pytest.approx(0.3)
    assert partial_handicap(2.9, 9) == pytest.approx(1.5)
