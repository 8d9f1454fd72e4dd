"""Session-scoped match flows: team setup, completion and skill index replay."""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.orm import Session

from domain.common import TwoSidedResult
from domain.handicap.config import HandicapSystemConfig
from domain.handicap.course import DEFAULT_SKILL_INDEX, resolve_skill_index
from domain.handicap.skill_index import (
    SkillIndexAdjuster,
    SkillIndexEvent,
    SkillIndexParameters,
    SkillIndexUpdate,
    UnsupportedSideCount,
)
from domain.matches.lifecycle import (
    MatchState,
    adjustment_input,
    assign_teams,
    enter_scores,
)
from models import GroupMember, Profile, SkillIndexSystem
from repositories.match_repository import (
    fetch_completed_match_states,
    load_match_state,
    save_match_result,
    save_team_setup,
)
from repositories.roster_repository import (
    count_completed_matches,
    fetch_skill_indices,
    update_group_skill_indices,
)
from repositories.skill_index_repository import (
    count_tracked_players,
    delete_skill_index_events_for_group,
    insert_skill_index_events,
    upsert_skill_index_system,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchCompletion:
    """Completed match state plus what happened to the players' group indices."""

    state: MatchState
    adjustment: SkillIndexUpdate | UnsupportedSideCount


@dataclass(frozen=True)
class RebuildSummary:
    """Outcome of replaying one group's completed matches."""

    group_id: int
    system_name: str
    processed_matches: int
    adjusted_matches: int
    unsupported_matches: int
    inserted_events: int
    tracked_players: int
    dry_run: bool


def _parameters(system_config: HandicapSystemConfig | None) -> tuple[SkillIndexParameters, float]:
    if system_config is None:
        return SkillIndexParameters(), DEFAULT_SKILL_INDEX
    return system_config.parameters, system_config.default_skill_index


def setup_match_teams(
    *,
    session_factory,
    match_id: int,
    rosters: Sequence[Sequence[int]],
    stroke_override: Sequence[int] | None = None,
    system_config: HandicapSystemConfig | None = None,
) -> MatchState:
    """Assign teams to a pending match and freeze every player's handicap."""
    _, default_skill_index = _parameters(system_config)

    with session_factory() as session:
        try:
            state = load_match_state(session, match_id, for_update=True)
            player_ids = [player_id for roster in rosters for player_id in roster]
            skill_indices = fetch_skill_indices(
                session,
                group_id=state.group_id,
                user_ids=player_ids,
                default_skill_index=default_skill_index,
            )
            ready = assign_teams(state, rosters, skill_indices, stroke_override=stroke_override)
            save_team_setup(session, ready)
            session.commit()
        except Exception:
            session.rollback()
            raise

    return ready


def complete_match(
    *,
    session_factory,
    match_id: int,
    gross_scores: Mapping[int, object],
    system_config: HandicapSystemConfig | None = None,
) -> MatchCompletion:
    """Record gross scores, pick winners and adjust group indices in one transaction.

    Scores are validated before anything is written. Group index rows are
    locked for the read-then-write so concurrent completions for the same
    player serialize.
    """
    params, default_skill_index = _parameters(system_config)
    adjuster = SkillIndexAdjuster(params)

    with session_factory() as session:
        try:
            state = load_match_state(session, match_id, for_update=True)
            completed = enter_scores(state, gross_scores)
            save_match_result(session, completed)

            result = adjustment_input(completed)
            if isinstance(result, TwoSidedResult):
                player_ids = [*result.side1.player_ids, *result.side2.player_ids]
                current_indices = fetch_skill_indices(
                    session,
                    group_id=completed.group_id,
                    user_ids=player_ids,
                    default_skill_index=default_skill_index,
                    for_update=True,
                )
                matches_played = count_completed_matches(
                    session,
                    group_id=completed.group_id,
                    user_ids=player_ids,
                    exclude_match_id=match_id,
                )
            else:
                current_indices, matches_played = {}, {}

            adjustment = adjuster.process_match(
                result,
                current_indices=current_indices,
                matches_played=matches_played,
            )

            if isinstance(adjustment, SkillIndexUpdate) and adjustment.events:
                update_group_skill_indices(
                    session,
                    group_id=completed.group_id,
                    new_indices=adjustment.new_indices(),
                )
                system = _upsert_system(session, system_config)
                insert_skill_index_events(
                    session,
                    adjustment.events,
                    skill_index_system_id=system.id,
                )

            session.commit()
        except Exception:
            session.rollback()
            raise

    return MatchCompletion(state=completed, adjustment=adjustment)


def rebuild_group_skill_indices(
    *,
    session_factory,
    group_id: int,
    system_config: HandicapSystemConfig | None = None,
    dry_run: bool = False,
    echo: Callable[[str], None] | None = None,
) -> RebuildSummary:
    """Replay a group's completed matches from each member's join-time seed.

    Matches replay in the order they were completed, which is also the order
    live scoring saw them, so a rebuild reproduces the live indices.
    """
    params, default_skill_index = _parameters(system_config)
    adjuster = SkillIndexAdjuster(params)
    system_name = system_config.name if system_config is not None else "gsi_default"

    with session_factory() as session:
        members = session.execute(
            select(GroupMember, Profile.phi)
            .outerjoin(Profile, Profile.user_id == GroupMember.user_id)
            .where(GroupMember.group_id == group_id)
            .with_for_update(of=GroupMember)
        ).all()
        current: dict[int, float] = {
            member.user_id: resolve_skill_index(member.initial_gsi, phi, default_skill_index)
            for member, phi in members
        }
        played: dict[int, int] = defaultdict(int)

        states = fetch_completed_match_states(session, group_id=group_id)
        events: list[SkillIndexEvent] = []
        adjusted_matches = 0
        unsupported_matches = 0
        for state in states:
            adjustment = adjuster.process_match(
                adjustment_input(state),
                current_indices=current,
                matches_played=played,
            )
            if isinstance(adjustment, UnsupportedSideCount):
                unsupported_matches += 1
            else:
                adjusted_matches += 1
                events.extend(adjustment.events)
                current.update(adjustment.new_indices())

            for team in state.teams:
                for player_id in team.player_ids:
                    played[player_id] += 1

        if dry_run:
            tracked_players = len({event.player_id for event in events})
            if echo is not None:
                echo(
                    f"[dry-run] group_id={group_id} system={system_name} "
                    f"processed_matches={len(states)} adjusted_matches={adjusted_matches} "
                    f"unsupported_matches={unsupported_matches} tracked_players={tracked_players}"
                )
            session.rollback()
            return RebuildSummary(
                group_id=group_id,
                system_name=system_name,
                processed_matches=len(states),
                adjusted_matches=adjusted_matches,
                unsupported_matches=unsupported_matches,
                inserted_events=0,
                tracked_players=tracked_players,
                dry_run=True,
            )

        try:
            system = _upsert_system(session, system_config)
            delete_skill_index_events_for_group(
                session,
                skill_index_system_id=system.id,
                group_id=group_id,
            )
            insert_skill_index_events(session, events, skill_index_system_id=system.id)
            for member, _ in members:
                member.gsi = current[member.user_id]
            session.flush()
            tracked_players = count_tracked_players(
                session,
                group_id=group_id,
                skill_index_system_id=system.id,
            )
            session.commit()
        except Exception:
            session.rollback()
            raise

    if unsupported_matches:
        logger.info(
            "group_id=%s replay left %d matches unadjusted (side count != 2)",
            group_id,
            unsupported_matches,
        )
    if echo is not None:
        echo(
            "completed "
            f"group_id={group_id} system={system_name} "
            f"processed_matches={len(states)} adjusted_matches={adjusted_matches} "
            f"unsupported_matches={unsupported_matches} inserted_events={len(events)} "
            f"tracked_players={tracked_players}"
        )

    return RebuildSummary(
        group_id=group_id,
        system_name=system_name,
        processed_matches=len(states),
        adjusted_matches=adjusted_matches,
        unsupported_matches=unsupported_matches,
        inserted_events=len(events),
        tracked_players=tracked_players,
        dry_run=False,
    )


def _upsert_system(session: Session, system_config: HandicapSystemConfig | None) -> SkillIndexSystem:
    if system_config is None:
        params = SkillIndexParameters()
        return upsert_skill_index_system(
            session,
            name="gsi_default",
            description=None,
            config_json={
                "learning_rate_offset": params.learning_rate_offset,
                "dampening": params.dampening,
                "max_adjustment": params.max_adjustment,
                "full_round_holes": params.full_round_holes,
                "default_skill_index": DEFAULT_SKILL_INDEX,
            },
        )
    return upsert_skill_index_system(
        session,
        name=system_config.name,
        description=system_config.description,
        config_json=system_config.as_config_json(),
    )


__all__ = [
    "MatchCompletion",
    "RebuildSummary",
    "complete_match",
    "rebuild_group_skill_indices",
    "setup_match_teams",
]
