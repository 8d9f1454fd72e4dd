"""Tests for the match lifecycle: team setup, scoring and adjustment hand-off."""

from __future__ import annotations

import pytest

from domain.common import MultiSidedResult, TwoSidedResult
from domain.handicap.course import CourseAttributes
from domain.handicap.skill_index import SkillIndexUpdate, UnsupportedSideCount
from domain.matches.errors import InvalidScoreError, MatchLifecycleError, MatchStateError
from domain.matches.lifecycle import (
    MatchStatus,
    adjust_skill_indices,
    adjustment_input,
    assign_teams,
    enter_scores,
    new_match,
)

NEUTRAL_COURSE = CourseAttributes(par=72, course_rating=72.0, slope_rating=113)


def _stroke_play(holes_played: int = 18):
    return new_match(
        match_format="stroke_play",
        holes_played=holes_played,
        course=NEUTRAL_COURSE,
        match_id=1,
        group_id=10,
    )


def test_new_match_starts_pending() -> None:
    state = _stroke_play()
    assert state.status is MatchStatus.PENDING
    assert state.teams == ()


def test_new_match_rejects_unsupported_hole_count() -> None:
    with pytest.raises(MatchLifecycleError):
        new_match(match_format="stroke_play", holes_played=12, course=NEUTRAL_COURSE)


def test_stroke_play_end_to_end() -> None:
    ready = assign_teams(_stroke_play(), [[1], [2]], {1: 10.0, 2: 20.0})
    assert ready.status is MatchStatus.TEAMS_READY
    assert [team.players[0].handicap_used for team in ready.teams] == pytest.approx([10.0, 20.0])
    assert [team.handicap_strokes for team in ready.teams] == [0, 10]

    completed = enter_scores(ready, {1: 82, 2: 100})
    assert completed.status is MatchStatus.COMPLETED
    assert [result.net_score for result in completed.results] == [82, 90]
    assert completed.winners() == (1,)

    outcome = adjust_skill_indices(
        completed,
        current_indices={1: 10.0, 2: 20.0},
        matches_played={1: 0, 2: 0},
    )
    assert isinstance(outcome, SkillIndexUpdate)
    assert outcome.new_indices() == pytest.approx({1: 8.7, 2: 21.3})


def test_blowout_end_to_end_is_clamped() -> None:
    ready = assign_teams(_stroke_play(), [[1], [2]], {1: 10.0, 2: 20.0})
    completed = enter_scores(ready, {1: 70, 2: 140})
    outcome = adjust_skill_indices(
        completed,
        current_indices={1: 10.0, 2: 20.0},
        matches_played={1: 0, 2: 0},
    )
    assert isinstance(outcome, SkillIndexUpdate)
    assert outcome.events[0].raw_adjustment == pytest.approx(-10.0)
    assert outcome.events[0].applied_adjustment == pytest.approx(-2.0)
    assert outcome.new_indices() == pytest.approx({1: 8.0, 2: 22.0})


def test_nine_hole_match_freezes_partial_handicaps() -> None:
    ready = assign_teams(_stroke_play(holes_played=9), [[1], [2]], {1: 10.0, 2: 20.0})
    assert [team.players[0].handicap_used for team in ready.teams] == pytest.approx([5.0, 10.0])
    assert [team.handicap_strokes for team in ready.teams] == [0, 5]


def test_best_ball_team_handicaps_and_strokes() -> None:
    state = new_match(match_format="best_ball", holes_played=18, course=NEUTRAL_COURSE)
    ready = assign_teams(state, [[1, 2], [3, 4]], {1: 10.0, 2: 20.0, 3: 15.0, 4: 15.0})
    assert [team.team_handicap for team in ready.teams] == pytest.approx([12.0, 15.0])
    assert [team.handicap_strokes for team in ready.teams] == [0, 3]
    assert ready.teams[0].player_ids == (1, 2)


def test_scramble_allows_uneven_sides() -> None:
    state = new_match(match_format="2v2_scramble", holes_played=18, course=NEUTRAL_COURSE)
    ready = assign_teams(state, [[1, 2], [3]], {1: 10.0, 2: 20.0, 3: 18.0})
    assert [team.team_handicap for team in ready.teams] == pytest.approx([6.5, 18.0])
    assert [team.handicap_strokes for team in ready.teams] == [0, 12]


def test_frozen_handicaps_ignore_later_index_changes() -> None:
    indices = {1: 10.0, 2: 20.0}
    ready = assign_teams(_stroke_play(), [[1], [2]], indices)
    indices[1] = 2.0
    completed = enter_scores(ready, {1: 80, 2: 90})
    assert completed.teams[0].players[0].handicap_used == pytest.approx(10.0)
    assert completed.teams[0].handicap_strokes == 0


def test_stroke_override_replaces_computed_strokes() -> None:
    ready = assign_teams(_stroke_play(), [[1], [2]], {1: 10.0, 2: 20.0}, stroke_override=[0, 6])
    assert [team.handicap_strokes for team in ready.teams] == [0, 6]
    assert all(team.handicap_override for team in ready.teams)

    completed = enter_scores(ready, {1: 82, 2: 100})
    assert [result.net_score for result in completed.results] == [82, 94]


def test_stroke_override_validation() -> None:
    with pytest.raises(MatchLifecycleError):
        assign_teams(_stroke_play(), [[1], [2]], {1: 10.0, 2: 20.0}, stroke_override=[0])
    with pytest.raises(MatchLifecycleError):
        assign_teams(_stroke_play(), [[1], [2]], {1: 10.0, 2: 20.0}, stroke_override=[0, -1])


def test_assign_teams_requires_skill_index_for_every_player() -> None:
    with pytest.raises(MatchLifecycleError, match="no skill index"):
        assign_teams(_stroke_play(), [[1], [2]], {1: 10.0})


def test_assign_teams_only_once() -> None:
    ready = assign_teams(_stroke_play(), [[1], [2]], {1: 10.0, 2: 20.0})
    with pytest.raises(MatchStateError):
        assign_teams(ready, [[1], [2]], {1: 10.0, 2: 20.0})


def test_enter_scores_requires_teams() -> None:
    with pytest.raises(MatchStateError):
        enter_scores(_stroke_play(), {1: 80})


@pytest.mark.parametrize(
    "scores",
    [
        {1: 82},
        {1: 82, 2: None},
        {1: 82, 2: -1},
        {1: 82, 2: "100"},
        {1: 82, 2: 99.5},
        {1: 82, 2: True},
        {1: 82, 2: 100, 3: 90},
    ],
)
def test_invalid_scores_are_rejected(scores: dict[int, object]) -> None:
    ready = assign_teams(_stroke_play(), [[1], [2]], {1: 10.0, 2: 20.0})
    with pytest.raises(InvalidScoreError):
        enter_scores(ready, scores)


def test_tied_net_scores_mark_every_tied_team_as_winner() -> None:
    ready = assign_teams(_stroke_play(), [[1], [2], [3]], {1: 10.0, 2: 20.0, 3: 30.0})
    completed = enter_scores(ready, {1: 80, 2: 90, 3: 101})
    assert completed.winners() == (1, 2)


def test_adjustment_input_for_two_sides() -> None:
    ready = assign_teams(_stroke_play(), [[1], [2]], {1: 10.0, 2: 20.0})
    result = adjustment_input(enter_scores(ready, {1: 82, 2: 100}))
    assert isinstance(result, TwoSidedResult)
    assert result.margin == 8
    assert result.side1.player_ids == (1,)
    assert result.side2.player_ids == (2,)


def test_more_than_two_sides_is_unsupported() -> None:
    ready = assign_teams(_stroke_play(), [[1], [2], [3]], {1: 10.0, 2: 20.0, 3: 30.0})
    completed = enter_scores(ready, {1: 80, 2: 95, 3: 101})
    assert isinstance(adjustment_input(completed), MultiSidedResult)

    outcome = adjust_skill_indices(
        completed,
        current_indices={1: 10.0, 2: 20.0, 3: 30.0},
        matches_played={},
    )
    assert isinstance(outcome, UnsupportedSideCount)
    assert outcome.side_count == 3


def test_adjustment_requires_completed_match() -> None:
    ready = assign_teams(_stroke_play(), [[1], [2]], {1: 10.0, 2: 20.0})
    with pytest.raises(MatchStateError):
        adjustment_input(ready)


def test_half_stroke_difference_gives_the_extra_stroke() -> None:
    ready = assign_teams(_stroke_play(), [[1], [2]], {1: 1.3, 2: 2.8})
    assert [team.handicap_strokes for team in ready.teams] == [0, 2]

    completed = enter_scores(ready, {1: 80, 2: 81})
    assert [result.net_score for result in completed.results] == [80, 79]
    assert completed.winners() == (2,)


def test_scramble_team_handicap_half_tenth_rounds_up() -> None:
    state = new_match(match_format="2v2_scramble", holes_played=18, course=NEUTRAL_COURSE)
    ready = assign_teams(state, [[1, 2], [3, 4]], {1: 3.0, 2: 0.0, 3: 0.0, 4: 0.0})
    assert [team.team_handicap for team in ready.teams] == pytest.approx([0.5, 0.0])
    assert [team.handicap_strokes for team in ready.teams] == [1, 0]
