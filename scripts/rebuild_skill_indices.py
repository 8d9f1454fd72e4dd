#!/usr/bin/env python3
"""Replay a group's completed matches into group skill indices."""

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
from domain.handicap.config import load_handicap_system_configs
from domain.pipeline import rebuild_group_skill_indices

DEFAULT_CONFIG_DIR = ROOT_DIR / "configs" / "handicap"

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Group skill index rebuild jobs.",
)


@app.command("rebuild")
def rebuild(
    group_id: Annotated[int, typer.Option("--group-id")],
    db_url: Annotated[
        str,
        typer.Option("--db-url", help="Database URL. Defaults to the local golfgroups postgres instance."),
    ] = DEFAULT_DB_URL,
    config_dir: Annotated[
        Path,
        typer.Option("--config-dir", help="Directory of handicap system TOML files."),
    ] = DEFAULT_CONFIG_DIR,
    config_name: Annotated[
        str | None,
        typer.Option("--config-name", help="Only rebuild this config file (e.g. default.toml)."),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Replay without writing group indices or events."),
    ] = False,
) -> None:
    """Recompute group skill indices from join-time seeds in match order."""
    configs = load_handicap_system_configs(config_dir)
    if config_name is not None:
        configs = [config for config in configs if config.file_path.name == config_name]
        if not configs:
            raise typer.BadParameter(
                f"No config named '{config_name}' found in {config_dir}",
                param_hint="--config-name",
            )
    if not dry_run and len(configs) > 1:
        raise typer.BadParameter(
            "Several configs would overwrite the same group indices; pick one with --config-name",
            param_hint="--config-name",
        )

    engine = create_db_engine(db_url)
    ensure_schema(engine)
    session_factory = create_session_factory(engine)

    typer.echo(f"loaded_configs={len(configs)} config_dir={config_dir} group_id={group_id}")
    for config in configs:
        rebuild_group_skill_indices(
            session_factory=session_factory,
            group_id=group_id,
            system_config=config,
            dry_run=dry_run,
            echo=typer.echo,
        )


if __name__ == "__main__":
    app()
