"""Config file command."""

from __future__ import annotations

import asyncio
from pathlib import Path

import click

from teamboard.config import TeamboardConfig
from teamboard.paths import get_config_path


@click.command(name="config")
@click.option(
    "--path",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Config file location (defaults to the user config directory)",
)
@click.option("--force", is_flag=True, help="Overwrite an existing file with defaults")
def config_cmd(config_path: Path | None, force: bool) -> None:
    """Write a config file with default settings."""
    path = config_path or get_config_path()
    if path.exists() and not force:
        click.echo(f"Config already exists: {path}")
        return
    asyncio.run(TeamboardConfig().save(path))
    click.secho(f"Wrote {path}", fg="green")
