"""REST adapter for the portal backend."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from teamboard.errors import RemoteError
from teamboard.models import Project, Task, TaskPage, WorkflowDetail

if TYPE_CHECKING:
    from collections.abc import Sequence

    from teamboard.config import RemoteConfig
    from teamboard.models import (
        Pagination,
        ProjectId,
        QueryFilter,
        StateId,
        TaskId,
        TeamId,
    )

logger = logging.getLogger(__name__)


class HttpBoardAPI:
    """``RemoteBoardAPI`` over an ``httpx.AsyncClient``.

    Usage::

        async with HttpBoardAPI.from_config(config.remote) as api:
            page = await api.fetch_tasks_page(filters, pagination)

    A caller-supplied client is used as-is and never closed by this adapter.
    """

    def __init__(self, client: httpx.AsyncClient, *, owns_client: bool = False) -> None:
        self._client = client
        self._owns_client = owns_client

    @classmethod
    def from_config(cls, config: RemoteConfig) -> HttpBoardAPI:
        headers = {"Accept": "application/json"}
        if config.api_token:
            headers["Authorization"] = f"Bearer {config.api_token}"
        client = httpx.AsyncClient(
            base_url=config.base_url,
            headers=headers,
            timeout=config.timeout_seconds,
        )
        return cls(client, owns_client=True)

    async def __aenter__(self) -> HttpBoardAPI:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def fetch_project(self, project_id: ProjectId) -> Project | None:
        payload = await self._request("GET", f"/api/projects/{project_id}", allow_missing=True)
        if not payload:
            return None
        return Project.model_validate(payload)

    async def fetch_workflow_for_team(self, team_id: TeamId) -> WorkflowDetail | None:
        payload = await self._request(
            "GET",
            f"/api/workflows/teams/{team_id}/project-workflow",
            allow_missing=True,
        )
        if not payload:
            return None
        return WorkflowDetail.model_validate(payload)

    async def fetch_tasks_page(
        self, filters: Sequence[QueryFilter], pagination: Pagination
    ) -> TaskPage:
        params: dict[str, Any] = {"page": pagination.page, "size": pagination.size}
        if pagination.sort:
            params["sort"] = pagination.sort_param()
        payload = await self._request(
            "POST",
            "/api/team-requests/search",
            params=params,
            json={"filters": [item.to_wire() for item in filters]},
        )
        return TaskPage.model_validate(payload or {})

    async def update_task(self, task_id: TaskId, task: Task) -> Task:
        payload = await self._request("PUT", f"/api/team-requests/{task_id}", json=task.to_wire())
        if not payload:
            return task
        return Task.model_validate(payload)

    async def update_task_state(self, task_id: TaskId, target_state_id: StateId) -> None:
        await self._request(
            "PUT",
            f"/api/team-requests/{task_id}/states",
            params={"stateId": target_state_id},
        )

    async def _request(
        self,
        method: str,
        url: str,
        *,
        allow_missing: bool = False,
        **kwargs: Any,
    ) -> Any:
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise RemoteError(f"{method} {url} failed: {exc}") from exc

        if allow_missing and response.status_code == httpx.codes.NOT_FOUND:
            logger.debug("%s %s -> 404", method, url)
            return None
        if response.is_error:
            detail = _error_detail(response)
            logger.warning("%s %s -> %s %s", method, url, response.status_code, detail)
            raise RemoteError(
                f"{method} {url} returned {response.status_code}: {detail}",
                status_code=response.status_code,
            )

        if response.status_code == httpx.codes.NO_CONTENT or not response.content:
            return None
        return response.json()


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text[:200]
    if isinstance(body, dict):
        for key in ("message", "detail", "error"):
            if body.get(key):
                return str(body[key])
    return str(body)[:200]
