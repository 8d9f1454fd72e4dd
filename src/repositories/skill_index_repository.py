"""Persistence helpers for skill index systems and their adjustment events."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import delete, func, insert, select
from sqlalchemy.orm import Session

from domain.handicap.skill_index import SkillIndexEvent as SkillIndexEventPayload
from models import SkillIndexEvent, SkillIndexSystem


def upsert_skill_index_system(
    session: Session,
    *,
    name: str,
    description: str | None,
    config_json: dict[str, Any],
) -> SkillIndexSystem:
    """Create or update one skill index system definition."""
    system = session.execute(
        select(SkillIndexSystem).where(SkillIndexSystem.name == name)
    ).scalar_one_or_none()
    if system is None:
        system = SkillIndexSystem(name=name, description=description, config_json=config_json)
        session.add(system)
    else:
        system.description = description
        system.config_json = config_json
        system.updated_at = datetime.now(UTC).replace(tzinfo=None)
    session.flush()
    return system


def _event_to_row(
    event: SkillIndexEventPayload,
    *,
    skill_index_system_id: int,
    event_time: datetime | None,
) -> dict[str, Any]:
    if event.group_id is None or event.match_id is None:
        raise ValueError(
            f"Skill index event for player {event.player_id} needs group_id and match_id to persist"
        )
    row: dict[str, Any] = {
        "skill_index_system_id": skill_index_system_id,
        "group_id": event.group_id,
        "user_id": event.player_id,
        "match_id": event.match_id,
        "side_number": event.side_number,
        "won": event.won,
        "score_differential": event.score_differential,
        "matches_played_pre": event.matches_played_pre,
        "holes_played": event.holes_played,
        "learning_rate": event.learning_rate,
        "round_weight": event.round_weight,
        "raw_adjustment": event.raw_adjustment,
        "applied_adjustment": event.applied_adjustment,
        "pre_index": event.pre_index,
        "index_delta": event.index_delta,
        "post_index": event.post_index,
    }
    if event_time is not None:
        row["event_time"] = event_time
    return row


def insert_skill_index_events(
    session: Session,
    events: Sequence[SkillIndexEventPayload],
    *,
    skill_index_system_id: int,
    event_time: datetime | None = None,
) -> None:
    """Bulk insert adjustment events."""
    if not events:
        return
    payload = [
        _event_to_row(event, skill_index_system_id=skill_index_system_id, event_time=event_time)
        for event in events
    ]
    session.execute(insert(SkillIndexEvent), payload)


def delete_skill_index_events_for_group(
    session: Session,
    *,
    skill_index_system_id: int,
    group_id: int,
) -> None:
    """Delete one system's events for a group before a deterministic replay."""
    session.execute(
        delete(SkillIndexEvent).where(
            SkillIndexEvent.skill_index_system_id == skill_index_system_id,
            SkillIndexEvent.group_id == group_id,
        )
    )


def count_tracked_players(
    session: Session,
    *,
    group_id: int,
    skill_index_system_id: int | None = None,
) -> int:
    """Count players with at least one adjustment event in a group."""
    statement = select(func.count(func.distinct(SkillIndexEvent.user_id))).where(
        SkillIndexEvent.group_id == group_id
    )
    if skill_index_system_id is not None:
        statement = statement.where(SkillIndexEvent.skill_index_system_id == skill_index_system_id)
    result = session.scalar(statement)
    return int(result or 0)


__all__ = [
    "count_tracked_players",
    "delete_skill_index_events_for_group",
    "insert_skill_index_events",
    "upsert_skill_index_system",
]
