#!/usr/bin/env python3
"""Team setup and score entry for one match."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

import typer

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from db import DEFAULT_DB_URL, create_db_engine, create_session_factory, ensure_schema
from domain.handicap.config import load_handicap_system_config
from domain.handicap.skill_index import UnsupportedSideCount
from domain.matches.errors import MatchLifecycleError
from domain.pipeline import complete_match, setup_match_teams

DEFAULT_CONFIG_DIR = ROOT_DIR / "configs" / "handicap"

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Match team setup and score entry.",
)

DbUrlOption = Annotated[
    str,
    typer.Option("--db-url", help="Database URL. Defaults to the local golfgroups postgres instance."),
]
ConfigDirOption = Annotated[
    Path,
    typer.Option("--config-dir", help="Directory of handicap system TOML files."),
]
SystemNameOption = Annotated[
    str | None,
    typer.Option("--system-name", help="Handicap system name when the config dir holds several."),
]


def _parse_roster(value: str) -> list[int]:
    try:
        return [int(part) for part in value.split(",") if part.strip()]
    except ValueError as exc:
        raise typer.BadParameter(f"--team expects comma-separated user ids, got {value!r}") from exc


def _parse_score(value: str) -> tuple[int, int]:
    team_number, sep, gross = value.partition("=")
    if not sep:
        raise typer.BadParameter(f"--score expects TEAM=GROSS, got {value!r}")
    try:
        return int(team_number), int(gross)
    except ValueError as exc:
        raise typer.BadParameter(f"--score expects integers, got {value!r}") from exc


@app.command("setup-teams")
def setup_teams(
    match_id: Annotated[int, typer.Option("--match-id")],
    teams: Annotated[
        list[str],
        typer.Option("--team", help="Comma-separated user ids for one team; repeat per team."),
    ],
    strokes: Annotated[
        list[int] | None,
        typer.Option("--strokes", help="Override strokes per team, in team order."),
    ] = None,
    db_url: DbUrlOption = DEFAULT_DB_URL,
    config_dir: ConfigDirOption = DEFAULT_CONFIG_DIR,
    system_name: SystemNameOption = None,
) -> None:
    """Assign teams, freeze player handicaps and allot relative strokes."""
    rosters = [_parse_roster(team) for team in teams]
    system_config = load_handicap_system_config(config_dir, system_name)

    engine = create_db_engine(db_url)
    ensure_schema(engine)
    session_factory = create_session_factory(engine)

    try:
        state = setup_match_teams(
            session_factory=session_factory,
            match_id=match_id,
            rosters=rosters,
            stroke_override=strokes or None,
            system_config=system_config,
        )
    except MatchLifecycleError as exc:
        raise typer.BadParameter(str(exc)) from exc

    typer.echo(f"match_id={match_id} status={state.status.value} format={state.match_format.value}")
    for team in state.teams:
        players = " ".join(
            f"{slot.player_id}:{slot.handicap_used:.1f}" for slot in team.players
        )
        typer.echo(
            f"team={team.team_number} team_handicap={team.team_handicap:.1f} "
            f"strokes={team.handicap_strokes} override={team.handicap_override} players=[{players}]"
        )


@app.command("enter-scores")
def enter_scores(
    match_id: Annotated[int, typer.Option("--match-id")],
    scores: Annotated[
        list[str],
        typer.Option("--score", help="TEAM=GROSS for one team; repeat per team."),
    ],
    db_url: DbUrlOption = DEFAULT_DB_URL,
    config_dir: ConfigDirOption = DEFAULT_CONFIG_DIR,
    system_name: SystemNameOption = None,
) -> None:
    """Record gross scores, mark winners and adjust group skill indices."""
    gross_scores = dict(_parse_score(score) for score in scores)
    system_config = load_handicap_system_config(config_dir, system_name)

    engine = create_db_engine(db_url)
    ensure_schema(engine)
    session_factory = create_session_factory(engine)

    try:
        completion = complete_match(
            session_factory=session_factory,
            match_id=match_id,
            gross_scores=gross_scores,
            system_config=system_config,
        )
    except MatchLifecycleError as exc:
        raise typer.BadParameter(str(exc)) from exc

    for result in completion.state.results:
        typer.echo(
            f"team={result.team_number} gross={result.gross_score} net={result.net_score} "
            f"winner={result.is_winner}"
        )

    adjustment = completion.adjustment
    if isinstance(adjustment, UnsupportedSideCount):
        typer.echo(f"skill indices unchanged: {adjustment.reason}")
        return

    for event in adjustment.events:
        typer.echo(
            f"player={event.player_id} gsi {event.pre_index:.1f} -> {event.post_index:.1f} "
            f"(differential={event.score_differential:+g} matches_played={event.matches_played_pre})"
        )
    if adjustment.skipped_player_ids:
        typer.echo(f"skipped players without a group membership: {list(adjustment.skipped_player_ids)}")


if __name__ == "__main__":
    app()
