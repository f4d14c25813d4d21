"""Board commands: show a project board and move a task."""

from __future__ import annotations

import asyncio
from itertools import zip_longest
from pathlib import Path
from typing import TYPE_CHECKING

import click
from rich.console import Console
from rich.table import Table

from teamboard.config import TeamboardConfig
from teamboard.remote import HttpBoardAPI
from teamboard.session import BoardSession
from teamboard.transitions import TransitionResult

if TYPE_CHECKING:
    from teamboard.errors import BoardError
    from teamboard.models import Project, Task, WorkflowState


_project_option = click.option("--project", "project_id", type=int, required=True)
_team_option = click.option("--team", "team_id", type=int, required=True)
_config_option = click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False, exists=True),
    default=None,
    help="Config file (defaults to the user config directory)",
)


def _task_label(task: Task) -> str:
    title = task.request_title or ""
    return f"#{task.id} {title}".strip()


def _render_board(
    project: Project | None,
    columns: list[tuple[WorkflowState, list[Task]]],
) -> Table:
    title = project.name if project is not None else "Project not found"
    if project is not None and project.duration_days is not None:
        title = f"{title} ({project.duration_days} days)"
    table = Table(title=title)
    for state, tasks in columns:
        table.add_column(f"{state.state_name} ({len(tasks)})")
    for row in zip_longest(*(tasks for _, tasks in columns)):
        table.add_row(*(_task_label(task) if task is not None else "" for task in row))
    return table


def _echo_errors(errors: list[BoardError]) -> None:
    for error in errors:
        click.secho(f"[{error.code}] {error}", fg="red", err=True)


async def _show(
    config: TeamboardConfig, project_id: int, team_id: int, errors: list[BoardError]
) -> tuple[Project | None, list[tuple[WorkflowState, list[Task]]]]:
    async with HttpBoardAPI.from_config(config.remote) as api:
        session = BoardSession(
            api,
            project_id=project_id,
            team_id=team_id,
            config=config.board,
            report_error=errors.append,
        )
        try:
            await session.mount()
            return session.project, session.columns()
        finally:
            session.unmount()


async def _move(
    config: TeamboardConfig,
    project_id: int,
    team_id: int,
    task_id: int,
    state_id: int,
    errors: list[BoardError],
) -> TransitionResult | None:
    async with HttpBoardAPI.from_config(config.remote) as api:
        session = BoardSession(
            api,
            project_id=project_id,
            team_id=team_id,
            config=config.board,
            report_error=errors.append,
        )
        try:
            await session.mount()
            if errors:
                return None
            return await session.move_task(task_id, state_id)
        finally:
            session.unmount()


@click.command(name="show")
@_project_option
@_team_option
@_config_option
def show(project_id: int, team_id: int, config_path: Path | None) -> None:
    """Print a project's board, one column per workflow state."""
    config = TeamboardConfig.load(config_path)
    errors: list[BoardError] = []
    project, columns = asyncio.run(_show(config, project_id, team_id, errors))
    if errors:
        _echo_errors(errors)
        raise SystemExit(1)
    if not columns:
        click.echo("No workflow configured for this team.")
        return
    Console().print(_render_board(project, columns))


@click.command(name="move")
@click.argument("task_id", type=int)
@click.argument("state_id", type=int)
@_project_option
@_team_option
@_config_option
def move(
    task_id: int, state_id: int, project_id: int, team_id: int, config_path: Path | None
) -> None:
    """Move TASK_ID to workflow state STATE_ID."""
    config = TeamboardConfig.load(config_path)
    errors: list[BoardError] = []
    outcome = asyncio.run(_move(config, project_id, team_id, task_id, state_id, errors))
    if errors:
        _echo_errors(errors)
        raise SystemExit(1)
    if outcome is TransitionResult.MOVED:
        click.secho(f"Moved task {task_id} to state {state_id}", fg="green")
    else:
        click.secho(
            f"Task {task_id} was not moved (not on the board or already there)", fg="yellow"
        )
