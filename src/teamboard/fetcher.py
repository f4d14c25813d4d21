"""Paginated retrieval of every task in a project."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from teamboard.limits import DEFAULT_PAGE_SIZE, FIRST_PAGE, MAX_PAGE_REQUESTS
from teamboard.models import Pagination, QueryFilter, SortDirection, SortOrder

if TYPE_CHECKING:
    from teamboard.models import ProjectId, Task, TaskId
    from teamboard.remote import RemoteBoardAPI

logger = logging.getLogger(__name__)


class TaskFetcher:
    """Aggregates task pages until the server-reported total is reached.

    Pages are ordered by ``id`` descending. The loop also stops on an empty
    page and after ``max_pages`` requests, so a server that misreports its
    total can't keep it spinning.
    """

    def __init__(
        self,
        api: RemoteBoardAPI,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        max_pages: int = MAX_PAGE_REQUESTS,
    ) -> None:
        self._api = api
        self.page_size = page_size
        self.max_pages = max_pages

    async def fetch_all(self, project_id: ProjectId) -> list[Task]:
        """Return all tasks of ``project_id``.

        Raises whatever the remote call raises; a failed page aborts the whole
        fetch so callers never see a partial board.
        """
        filters = [QueryFilter(field="project.id", value=project_id, operator="eq")]
        tasks: list[Task] = []
        seen: set[TaskId] = set()
        fetched = 0
        total = 0
        requests = 0
        page = FIRST_PAGE

        while True:
            pagination = Pagination(
                page=page,
                size=self.page_size,
                sort=[SortOrder(field="id", direction=SortDirection.DESC)],
            )
            result = await self._api.fetch_tasks_page(filters, pagination)
            requests += 1
            total = result.total_elements
            fetched += len(result.content)

            for task in result.content:
                if task.id in seen:
                    logger.debug("Dropping duplicate task %s from page %d", task.id, page)
                    continue
                seen.add(task.id)
                tasks.append(task)

            if fetched >= total:
                break
            if not result.content:
                logger.warning(
                    "Empty page %d for project %s with %d/%d tasks fetched",
                    page,
                    project_id,
                    fetched,
                    total,
                )
                break
            if requests >= self.max_pages:
                logger.warning(
                    "Stopped after %d page requests for project %s (%d/%d tasks fetched)",
                    requests,
                    project_id,
                    fetched,
                    total,
                )
                break
            page += 1

        logger.debug(
            "Fetched %d tasks for project %s in %d request(s)", len(tasks), project_id, requests
        )
        return tasks
