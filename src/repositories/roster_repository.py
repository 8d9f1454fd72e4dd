"""Persistence helpers for group rosters and group skill indices."""

from __future__ import annotations

from collections.abc import Collection
from dataclasses import dataclass

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from domain.handicap.course import DEFAULT_SKILL_INDEX, resolve_skill_index
from models import GroupMember, Match, Profile, Team, TeamPlayer


@dataclass(frozen=True)
class RosterEntry:
    user_id: int
    display_name: str | None
    gsi: float | None
    phi: float | None


def join_group(
    session: Session,
    *,
    group_id: int,
    user_id: int,
    default_skill_index: float = DEFAULT_SKILL_INDEX,
) -> GroupMember:
    """Add a player to a group, seeding the group index from the profile once.

    An existing membership is returned untouched so a group index is never
    re-seeded from the profile.
    """
    member = session.execute(
        select(GroupMember).where(
            GroupMember.group_id == group_id,
            GroupMember.user_id == user_id,
        )
    ).scalar_one_or_none()
    if member is not None:
        return member

    phi = session.execute(select(Profile.phi).where(Profile.user_id == user_id)).scalar_one_or_none()
    seed = resolve_skill_index(None, phi, default_skill_index)
    member = GroupMember(group_id=group_id, user_id=user_id, gsi=seed, initial_gsi=seed)
    session.add(member)
    session.flush()
    return member


def fetch_group_members(
    session: Session,
    *,
    group_id: int,
    user_ids: Collection[int],
    for_update: bool = False,
) -> dict[int, GroupMember]:
    """Load memberships keyed by user id; ``for_update`` takes row locks."""
    if not user_ids:
        return {}
    statement = select(GroupMember).where(
        GroupMember.group_id == group_id,
        GroupMember.user_id.in_(list(user_ids)),
    )
    if for_update:
        statement = statement.with_for_update()
    members = session.execute(statement).scalars().all()
    return {member.user_id: member for member in members}


def fetch_skill_indices(
    session: Session,
    *,
    group_id: int,
    user_ids: Collection[int],
    default_skill_index: float = DEFAULT_SKILL_INDEX,
    for_update: bool = False,
) -> dict[int, float]:
    """Resolved skill index (GSI, then PHI, then default) per group member.

    Players without a membership in ``group_id`` are left out of the result.
    """
    if not user_ids:
        return {}
    statement = (
        select(GroupMember.user_id, GroupMember.gsi, Profile.phi)
        .select_from(GroupMember)
        .outerjoin(Profile, Profile.user_id == GroupMember.user_id)
        .where(
            GroupMember.group_id == group_id,
            GroupMember.user_id.in_(list(user_ids)),
        )
    )
    if for_update:
        statement = statement.with_for_update(of=GroupMember)

    rows = session.execute(statement).all()
    return {
        row.user_id: resolve_skill_index(row.gsi, row.phi, default_skill_index)
        for row in rows
    }


def count_completed_matches(
    session: Session,
    *,
    group_id: int,
    user_ids: Collection[int],
    exclude_match_id: int | None = None,
) -> dict[int, int]:
    """Count completed group matches per player by scanning match history.

    Called while completing a match, so every match counted was completed
    earlier, which is the order a rebuild replays them in.
    """
    if not user_ids:
        return {}
    statement = (
        select(TeamPlayer.user_id, func.count(func.distinct(Match.id)).label("matches"))
        .select_from(TeamPlayer)
        .join(Team, Team.id == TeamPlayer.team_id)
        .join(Match, Match.id == Team.match_id)
        .where(
            Match.group_id == group_id,
            Match.status == "completed",
            TeamPlayer.user_id.in_(list(user_ids)),
        )
        .group_by(TeamPlayer.user_id)
    )
    if exclude_match_id is not None:
        statement = statement.where(Match.id != exclude_match_id)

    counts = {user_id: 0 for user_id in user_ids}
    for row in session.execute(statement).all():
        counts[row.user_id] = int(row.matches)
    return counts


def update_group_skill_indices(
    session: Session,
    *,
    group_id: int,
    new_indices: dict[int, float],
) -> list[int]:
    """Write new group indices; returns user ids that had no membership."""
    members = fetch_group_members(session, group_id=group_id, user_ids=new_indices.keys())
    missing: list[int] = []
    for user_id, value in new_indices.items():
        member = members.get(user_id)
        if member is None:
            missing.append(user_id)
            continue
        member.gsi = value
    session.flush()
    return missing


def fetch_group_roster(session: Session, *, group_id: int) -> list[RosterEntry]:
    """All members of a group with their raw group and profile indices."""
    statement = (
        select(GroupMember.user_id, Profile.display_name, GroupMember.gsi, Profile.phi)
        .select_from(GroupMember)
        .outerjoin(Profile, Profile.user_id == GroupMember.user_id)
        .where(GroupMember.group_id == group_id)
        .order_by(GroupMember.user_id)
    )
    return [
        RosterEntry(
            user_id=row.user_id,
            display_name=row.display_name,
            gsi=row.gsi,
            phi=row.phi,
        )
        for row in session.execute(statement).all()
    ]


__all__ = [
    "RosterEntry",
    "count_completed_matches",
    "fetch_group_members",
    "fetch_group_roster",
    "fetch_skill_indices",
    "join_group",
    "update_group_skill_indices",
]
