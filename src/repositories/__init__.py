"""Database repository helpers."""

from repositories.match_repository import (
    create_match,
    fetch_completed_match_states,
    load_match_state,
    save_match_result,
    save_team_setup,
)
from repositories.roster_repository import (
    RosterEntry,
    count_completed_matches,
    fetch_group_members,
    fetch_group_roster,
    fetch_skill_indices,
    join_group,
    update_group_skill_indices,
)
from repositories.skill_index_repository import (
    count_tracked_players,
    delete_skill_index_events_for_group,
    insert_skill_index_events,
    upsert_skill_index_system,
)

__all__ = [
    "RosterEntry",
    "count_completed_matches",
    "count_tracked_players",
    "create_match",
    "delete_skill_index_events_for_group",
    "fetch_completed_match_states",
    "fetch_group_members",
    "fetch_group_roster",
    "fetch_skill_indices",
    "insert_skill_index_events",
    "join_group",
    "load_match_state",
    "save_match_result",
    "save_team_setup",
    "update_group_skill_indices",
    "upsert_skill_index_system",
]
