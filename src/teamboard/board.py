"""Client-side board: tasks grouped into columns by workflow state."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from teamboard.models import StateId, Task, TaskId, WorkflowState

logger = logging.getLogger(__name__)


class BoardStore:
    """Mapping from state id to the ordered tasks in that state.

    Every task lives in exactly one column, and that column's key equals the
    task's ``current_state_id``. A reverse index (task id -> state id) is
    updated with every mutation so lookups never scan all columns.

    Once :meth:`discard` is called the store is closed and all mutations are
    ignored, which keeps late remote completions from touching an unmounted
    board.
    """

    def __init__(self) -> None:
        self._states: dict[StateId, WorkflowState] = {}
        self._columns: dict[StateId, list[Task]] = {}
        self._index: dict[TaskId, StateId] = {}
        self._closed = False

    # -- read access -----------------------------------------------------

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def states(self) -> list[WorkflowState]:
        """Workflow states in column order."""
        return list(self._states.values())

    @property
    def state_ids(self) -> list[StateId]:
        return list(self._columns)

    @property
    def task_count(self) -> int:
        return len(self._index)

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._index

    def column(self, state_id: StateId) -> list[Task]:
        """Tasks in ``state_id`` (empty for unknown states)."""
        return list(self._columns.get(state_id, ()))

    def columns(self) -> dict[StateId, list[Task]]:
        return {state_id: list(tasks) for state_id, tasks in self._columns.items()}

    def column_of(self, task_id: TaskId) -> StateId | None:
        return self._index.get(task_id)

    def get(self, task_id: TaskId) -> Task | None:
        state_id = self._index.get(task_id)
        if state_id is None:
            return None
        return self._columns[state_id][self._position(state_id, task_id)]

    def snapshot(self) -> dict[StateId, list[TaskId]]:
        """Task ids per column, for logging and comparisons."""
        return {state_id: [t.id for t in tasks] for state_id, tasks in self._columns.items()}

    # -- mutations -------------------------------------------------------

    def rebuild(self, tasks: Iterable[Task], states: Iterable[WorkflowState]) -> None:
        """Reset the board from a full fetch.

        Tasks referencing an unknown state, and repeated task ids, are dropped.
        """
        if self._closed:
            logger.debug("Ignoring rebuild on a discarded board")
            return

        self._states = {state.id: state for state in states}
        self._columns = {state_id: [] for state_id in self._states}
        self._index = {}

        dropped = 0
        for task in tasks:
            column = self._columns.get(task.current_state_id)
            if column is None or task.id in self._index:
                dropped += 1
                continue
            column.append(task)
            self._index[task.id] = task.current_state_id

        if dropped:
            logger.debug("Dropped %d task(s) with unknown state or duplicate id", dropped)

    def move_task(
        self,
        task_id: TaskId,
        from_state: StateId,
        to_state: StateId,
        *,
        replacement: Task | None = None,
    ) -> bool:
        """Move a task to the end of ``to_state``.

        ``replacement`` is stored instead of the current record when given.
        The stored record always carries the target state's id and name.
        Returns False (board unchanged) when the task is not in ``from_state``,
        the states are equal, or ``to_state`` is not a column.
        """
        if self._closed:
            logger.debug("Ignoring move of task %s on a discarded board", task_id)
            return False
        if from_state == to_state:
            return False
        if self._index.get(task_id) != from_state:
            logger.debug("Task %s is not in state %s; move skipped", task_id, from_state)
            return False
        target = self._states.get(to_state)
        if target is None:
            logger.debug("Unknown target state %s for task %s; move skipped", to_state, task_id)
            return False

        source = self._columns[from_state]
        current = source.pop(self._position(from_state, task_id))
        record = (replacement or current).model_copy(
            update={"current_state_id": target.id, "current_state_name": target.state_name}
        )
        self._columns[to_state].append(record)
        self._index[task_id] = to_state
        return True

    def update_task_in_place(self, task: Task) -> bool:
        """Replace a task keeping its position; a changed state becomes a move."""
        if self._closed:
            logger.debug("Ignoring update of task %s on a discarded board", task.id)
            return False
        state_id = self._index.get(task.id)
        if state_id is None:
            logger.debug("Task %s not on board; update skipped", task.id)
            return False
        if task.current_state_id != state_id:
            return self.move_task(task.id, state_id, task.current_state_id, replacement=task)

        column = self._columns[state_id]
        column[self._position(state_id, task.id)] = task
        return True

    def add_task(self, task: Task) -> bool:
        """Append a newly created task to its state's column."""
        if self._closed:
            logger.debug("Ignoring created task %s on a discarded board", task.id)
            return False
        if task.id in self._index:
            return False
        column = self._columns.get(task.current_state_id)
        if column is None:
            logger.debug("Created task %s has unknown state %s", task.id, task.current_state_id)
            return False
        column.append(task)
        self._index[task.id] = task.current_state_id
        return True

    def discard(self) -> None:
        """Drop all contents and refuse further mutations."""
        self._closed = True
        self._states.clear()
        self._columns.clear()
        self._index.clear()

    def _position(self, state_id: StateId, task_id: TaskId) -> int:
        for position, task in enumerate(self._columns[state_id]):
            if task.id == task_id:
                return position
        raise LookupError(f"index points task {task_id} at state {state_id} but it is not there")
