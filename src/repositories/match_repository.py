"""Persistence helpers translating match rows to and from lifecycle state."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from domain.handicap.course import CourseAttributes
from domain.matches.errors import MatchStateError
from domain.matches.formats import MatchFormat
from domain.matches.lifecycle import (
    MatchState,
    MatchStatus,
    PlayerSlot,
    TeamResult,
    TeamSetup,
    new_match,
)
from models import Course, Match, Team, TeamPlayer


def create_match(
    session: Session,
    *,
    group_id: int,
    course_id: int,
    match_format: MatchFormat | str,
    holes_played: int = 18,
    created_by: int | None = None,
    match_date: datetime | None = None,
) -> Match:
    """Insert a pending match after validating format and holes."""
    course = session.get(Course, course_id)
    if course is None:
        raise ValueError(f"course_id={course_id} does not exist")

    state = new_match(
        match_format=match_format,
        holes_played=holes_played,
        course=course.attributes(),
        group_id=group_id,
    )
    match = Match(
        group_id=group_id,
        course_id=course_id,
        created_by=created_by,
        format=state.match_format.value,
        holes_played=state.holes_played,
        status=state.status.value,
    )
    if match_date is not None:
        match.match_date = match_date
    session.add(match)
    session.flush()
    return match


def _fetch_match(session: Session, match_id: int, *, for_update: bool) -> Match:
    statement = (
        select(Match)
        .where(Match.id == match_id)
        .options(selectinload(Match.teams).selectinload(Team.players))
    )
    if for_update:
        statement = statement.with_for_update(of=Match)
    match = session.execute(statement).scalar_one_or_none()
    if match is None:
        raise ValueError(f"match_id={match_id} does not exist")
    return match


def _course_attributes(session: Session, course_id: int) -> CourseAttributes:
    course = session.get(Course, course_id)
    if course is None:
        raise ValueError(f"course_id={course_id} does not exist")
    return course.attributes()


def _to_state(match: Match, course: CourseAttributes) -> MatchState:
    status = MatchStatus(match.status)
    teams = tuple(
        TeamSetup(
            team_number=team.team_number,
            players=tuple(
                PlayerSlot(player_id=player.user_id, handicap_used=player.handicap_used)
                for player in team.players
            ),
            team_handicap=team.team_handicap,
            handicap_strokes=team.handicap_strokes,
            handicap_override=team.handicap_override,
        )
        for team in match.teams
    )

    results: tuple[TeamResult, ...] = ()
    if status == MatchStatus.COMPLETED:
        results = tuple(
            TeamResult(
                team_number=team.team_number,
                gross_score=int(team.score),
                net_score=int(team.net_score)
                if team.net_score is not None
                else int(team.score) - team.handicap_strokes,
                is_winner=team.is_winner,
            )
            for team in match.teams
            if team.score is not None
        )

    return MatchState(
        match_id=match.id,
        group_id=match.group_id,
        match_format=MatchFormat.parse(match.format),
        holes_played=match.holes_played,
        course=course,
        status=status,
        teams=teams,
        results=results,
    )


def load_match_state(session: Session, match_id: int, *, for_update: bool = False) -> MatchState:
    """Rebuild the lifecycle state of one match from its rows."""
    match = _fetch_match(session, match_id, for_update=for_update)
    return _to_state(match, _course_attributes(session, match.course_id))


def save_team_setup(session: Session, state: MatchState) -> None:
    """Persist teams, strokes and frozen player handicaps for a teams_ready match."""
    if state.match_id is None:
        raise ValueError("cannot save teams for a match without an id")
    if state.status != MatchStatus.TEAMS_READY:
        raise MatchStateError(f"match_id={state.match_id} is {state.status.value}, not teams_ready")

    match = _fetch_match(session, state.match_id, for_update=True)
    if match.status != MatchStatus.PENDING.value or match.teams:
        raise MatchStateError(f"match_id={state.match_id} already has teams assigned")

    for setup in state.teams:
        team = Team(
            team_number=setup.team_number,
            team_handicap=setup.team_handicap,
            handicap_strokes=setup.handicap_strokes,
            handicap_override=setup.handicap_override,
        )
        team.players = [
            TeamPlayer(user_id=slot.player_id, handicap_used=slot.handicap_used)
            for slot in setup.players
        ]
        match.teams.append(team)

    match.status = state.status.value
    session.flush()


def save_match_result(
    session: Session,
    state: MatchState,
    *,
    completed_at: datetime | None = None,
) -> None:
    """Persist gross/net scores and winner flags and mark the match completed.

    ``completed_at`` is kept strictly increasing within a group because replays
    run in completion order.
    """
    if state.match_id is None:
        raise ValueError("cannot save results for a match without an id")
    if state.status != MatchStatus.COMPLETED:
        raise MatchStateError(f"match_id={state.match_id} is {state.status.value}, not completed")

    match = _fetch_match(session, state.match_id, for_update=True)
    if match.status != MatchStatus.TEAMS_READY.value:
        raise MatchStateError(f"match_id={state.match_id} is {match.status}, not teams_ready")

    results = {result.team_number: result for result in state.results}
    for team in match.teams:
        result = results[team.team_number]
        team.score = result.gross_score
        team.net_score = result.net_score
        team.is_winner = result.is_winner

    match.status = state.status.value
    match.completed_at = _next_completion_time(session, match.group_id, completed_at)
    session.flush()


def _next_completion_time(session: Session, group_id: int, requested: datetime | None) -> datetime:
    completed_at = requested or datetime.now(UTC).replace(tzinfo=None)
    latest = session.scalar(
        select(func.max(Match.completed_at)).where(Match.group_id == group_id)
    )
    if latest is not None and completed_at <= latest:
        completed_at = latest + timedelta(microseconds=1)
    return completed_at


def fetch_completed_match_states(session: Session, *, group_id: int) -> list[MatchState]:
    """Completed matches of a group in the order they were completed."""
    statement = (
        select(Match)
        .where(Match.group_id == group_id, Match.status == MatchStatus.COMPLETED.value)
        .options(selectinload(Match.teams).selectinload(Team.players))
        .order_by(Match.completed_at.asc().nulls_first(), Match.match_date, Match.id)
    )
    matches = session.execute(statement).scalars().all()

    courses: dict[int, CourseAttributes] = {}
    states: list[MatchState] = []
    for match in matches:
        if match.course_id not in courses:
            courses[match.course_id] = _course_attributes(session, match.course_id)
        states.append(_to_state(match, courses[match.course_id]))
    return states


__all__ = [
    "create_match",
    "fetch_completed_match_states",
    "load_match_state",
    "save_match_result",
    "save_team_setup",
]
