"""Unit tests for team handicap aggregation and relative strokes."""

from __future__ import annotations

import pytest

from domain.handicap.rounding import round1
from domain.handicap.team import (
    best_ball_handicap,
    individual_handicap,
    relative_strokes,
    scramble_handicap,
)


def test_scramble_two_players_weights_low_and_high() -> None:
    assert scramble_handicap([20, 10]) == pytest.approx(round1(10 * 0.35 + 20 * 0.15))
    assert scramble_handicap([20, 10]) == pytest.approx(6.5)


def test_scramble_four_players_uses_weight_table() -> None:
    # 4*0.20 + 8*0.15 + 12*0.10 + 16*0.05
    assert scramble_handicap([16, 4, 12, 8]) == pytest.approx(4.0)


def test_scramble_other_sizes_fall_back_to_mean() -> None:
    assert scramble_handicap([10, 11, 15]) == pytest.approx(12.0)
    assert scramble_handicap([14.3]) == pytest.approx(14.3)


def test_best_ball_two_players_weights_low_and_high() -> None:
    assert best_ball_handicap([20, 10]) == pytest.approx(12.0)


def test_best_ball_four_players_uses_weight_table() -> None:
    # 4*0.80 + 8*0.60 + 12*0.40 + 16*0.20
    assert best_ball_handicap([8, 16, 4, 12]) == pytest.approx(16.0)


def test_best_ball_other_sizes_fall_back_to_lowest() -> None:
    assert best_ball_handicap([15, 9.4, 12]) == pytest.approx(9.4)
    assert best_ball_handicap([7.0]) == pytest.approx(7.0)


def test_individual_handicap_uses_first_player() -> None:
    assert individual_handicap([14.2]) == pytest.approx(14.2)
    assert individual_handicap([14.2, 3.0]) == pytest.approx(14.2)


def test_aggregators_return_zero_for_empty_team() -> None:
    assert scramble_handicap([]) == 0.0
    assert best_ball_handicap([]) == 0.0
    assert individual_handicap([]) == 0.0


def test_relative_strokes_equal_teams_get_nothing() -> None:
    assert relative_strokes([10.0, 10.0]) == [0, 0]


def test_relative_strokes_are_differences_from_best_team() -> None:
    assert relative_strokes([8.0, 12.0]) == [0, 4]
    assert relative_strokes([12.4, 10.0, 13.5]) == [2, 0, 4]


def test_relative_strokes_are_never_negative() -> None:
    strokes = relative_strokes([3.2, -1.4, 18.9, 7.7])
    assert min(strokes) == 0
    assert all(value >= 0 for value in strokes)
    assert strokes[1] == 0


def test_relative_strokes_empty_input() -> None:
    assert relative_strokes([]) == []


def test_scramble_half_tenths_round_up() -> None:
    # 3.0 * 0.15 is 0.44999999999999996 in binary floats
    assert scramble_handicap([3.0, 0.0]) == pytest.approx(0.5)
    assert scramble_handicap([9.0, 0.0]) == pytest.approx(1.4)


def test_best_ball_half_tenths_round_up() -> None:
    # 0.80 * 0.5 + 0.20 * 1.25 = 0.65
    assert best_ball_handicap([1.25, 0.5]) == pytest.approx(0.7)
    assert best_ball_handicap([3.25, 0.0]) == pytest.approx(0.7)


def test_relative_strokes_half_stroke_differences_round_up() -> None:
    assert relative_strokes([0.2, 0.7]) == [0, 1]
    assert relative_strokes([1.3, 2.8]) == [0, 2]
    assert relative_strokes([10.1, 12.6, 10.1]) == [0, 3, 0]
