"""Operations the board core needs from the remote system of record."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Sequence

    from teamboard.models import (
        Pagination,
        Project,
        ProjectId,
        QueryFilter,
        StateId,
        Task,
        TaskId,
        TaskPage,
        TeamId,
        WorkflowDetail,
    )


class RemoteBoardAPI(Protocol):
    """Async collaborator interface.

    Implementations raise :class:`teamboard.errors.RemoteError` (or any other
    exception) on failure; the board core catches and reports every failure.
    """

    async def fetch_project(self, project_id: ProjectId) -> Project | None: ...

    async def fetch_workflow_for_team(self, team_id: TeamId) -> WorkflowDetail | None: ...

    async def fetch_tasks_page(
        self, filters: Sequence[QueryFilter], pagination: Pagination
    ) -> TaskPage: ...

    async def update_task(self, task_id: TaskId, task: Task) -> Task: ...

    async def update_task_state(self, task_id: TaskId, target_state_id: StateId) -> None: ...
