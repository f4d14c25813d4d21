"""Board domain models.

Wire payloads are camelCase (``currentStateId``); attributes are snake_case.
Both spellings are accepted when validating.
"""

from __future__ import annotations

from datetime import UTC, date, datetime  # noqa: TC003 - Pydantic needs runtime access
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

type TaskId = int
type StateId = int
type ProjectId = int
type TeamId = int


class WireModel(BaseModel):
    """Base model with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    def to_wire(self) -> dict[str, object]:
        """Dump to a JSON-compatible dict using wire names."""
        return self.model_dump(mode="json", by_alias=True)


class WorkflowState(WireModel):
    """One workflow state, i.e. one board column."""

    model_config = ConfigDict(frozen=True)

    id: StateId
    state_name: str = ""
    is_initial: bool = False
    is_final: bool = False


class WorkflowDetail(WireModel):
    """Workflow attached to a team, with its states in fetch order."""

    id: int | None = None
    name: str = ""
    states: list[WorkflowState] = Field(default_factory=list)


class Task(WireModel):
    """A team request shown as a card on the board.

    Fields the board does not know about are kept and sent back on update.
    """

    model_config = ConfigDict(extra="allow")

    id: TaskId
    current_state_id: StateId
    current_state_name: str | None = None
    request_title: str | None = None
    request_description: str | None = None
    priority: str | None = None
    project_id: ProjectId | None = None
    assign_user_id: int | None = None
    modified_at: datetime | None = None

    def with_state(self, state: WorkflowState) -> Task:
        """Return a copy moved to ``state`` with a refreshed modification time."""
        return self.model_copy(
            update={
                "current_state_id": state.id,
                "current_state_name": state.state_name,
                "modified_at": utc_now(),
            }
        )

    def touched(self) -> Task:
        """Return a copy with a refreshed modification time."""
        return self.model_copy(update={"modified_at": utc_now()})


class TaskPage(WireModel):
    content: list[Task] = Field(default_factory=list)
    total_elements: int = 0


class SortDirection(StrEnum):
    ASC = "asc"
    DESC = "desc"


class SortOrder(WireModel):
    field: str
    direction: SortDirection = SortDirection.ASC


class Pagination(WireModel):
    """Page request. Page numbers start at 1."""

    page: int = 1
    size: int = 100
    sort: list[SortOrder] = Field(default_factory=list)

    def sort_param(self) -> list[str]:
        """Render sort orders as ``field,direction`` query values."""
        return [f"{order.field},{order.direction.value}" for order in self.sort]


class QueryFilter(WireModel):
    field: str
    value: Any
    operator: str = "eq"


class Project(WireModel):
    """Project metadata shown above the board."""

    model_config = ConfigDict(extra="allow")

    id: ProjectId
    team_id: TeamId | None = None
    name: str = ""
    description: str | None = None
    status: str | None = None
    start_date: date | None = None
    end_date: date | None = None

    @property
    def duration_days(self) -> int | None:
        """Days between start and end date, or None when either is missing."""
        if self.start_date is None or self.end_date is None:
            return None
        return (self.end_date - self.start_date).days


def utc_now() -> datetime:
    return datetime.now(UTC)


__all__ = [
    "Pagination",
    "Project",
    "ProjectId",
    "QueryFilter",
    "SortDirection",
    "SortOrder",
    "StateId",
    "Task",
    "TaskId",
    "TaskPage",
    "TeamId",
    "WorkflowDetail",
    "WorkflowState",
    "utc_now",
]
