"""Root CLI command registration."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from teamboard.debug_log import export_logs_to_file, setup_debug_logging
from teamboard.paths import get_debug_log_path
from teamboard.version import get_teamboard_version

from .board import move, show
from .config import config_cmd


@click.group(invoke_without_command=True)
@click.option("--version", is_flag=True, help="Show version and exit")
@click.option(
    "--debug",
    is_flag=True,
    help="Capture debug logs and write them to the data directory on exit",
)
@click.option(
    "--debug-log",
    "debug_log_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Write captured debug logs to this file on exit (implies --debug)",
)
@click.pass_context
def cli(ctx: click.Context, version: bool, debug: bool, debug_log_path: Path | None) -> None:
    """Kanban board for team projects, synchronized with the portal backend."""
    if version:
        click.echo(f"teamboard {get_teamboard_version()}")
        ctx.exit(0)

    if debug and debug_log_path is None:
        debug_log_path = get_debug_log_path()
    if debug_log_path is not None:
        setup_debug_logging(logging.DEBUG)
        ctx.call_on_close(lambda: export_logs_to_file(debug_log_path))

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


cli.add_command(show)
cli.add_command(move)
cli.add_command(config_cmd)
