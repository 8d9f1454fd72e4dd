#!/usr/bin/env python3
"""Show a group's members with their skill index and handicap relative to the best player."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

import typer

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from db import DEFAULT_DB_URL, create_db_engine, create_session_factory
from domain.handicap.course import DEFAULT_SKILL_INDEX, relative_handicaps, resolve_skill_index
from repositories.roster_repository import count_completed_matches, fetch_group_roster

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Query group skill indices.",
)


@app.command()
def show_group_handicaps(
    group_id: Annotated[int, typer.Option("--group-id")],
    default_skill_index: Annotated[
        float,
        typer.Option("--default-skill-index", help="Index used when neither GSI nor PHI is set."),
    ] = DEFAULT_SKILL_INDEX,
    db_url: Annotated[
        str,
        typer.Option("--db-url", help="Database URL. Defaults to the local golfgroups postgres instance."),
    ] = DEFAULT_DB_URL,
) -> None:
    """Print members ordered by skill index, best player first."""
    engine = create_db_engine(db_url)
    session_factory = create_session_factory(engine)

    with session_factory() as session:
        roster = fetch_group_roster(session, group_id=group_id)
        played = count_completed_matches(
            session,
            group_id=group_id,
            user_ids=[entry.user_id for entry in roster],
        )

    if not roster:
        typer.echo(f"No members found for group_id={group_id}.")
        return

    indices = [resolve_skill_index(entry.gsi, entry.phi, default_skill_index) for entry in roster]
    relative = relative_handicaps(indices)
    rows = sorted(zip(roster, indices, relative), key=lambda row: (row[1], row[0].user_id))

    typer.echo(f"group_id={group_id} members={len(rows)}")
    for index, (entry, skill_index, strokes) in enumerate(rows, start=1):
        name = entry.display_name or f"user {entry.user_id}"
        typer.echo(
            f"{index:2d}. {name:<20} gsi={skill_index:5.1f} relative={strokes:5.1f} "
            f"matches={played.get(entry.user_id, 0):3d}"
        )


if __name__ == "__main__":
    app()
