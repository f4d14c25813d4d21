"""Cross-column moves confirmed by the remote system before they are shown."""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import TYPE_CHECKING

from teamboard.errors import TransitionError, report_error

if TYPE_CHECKING:
    from teamboard.board import BoardStore
    from teamboard.errors import ErrorReporter
    from teamboard.models import StateId, TaskId
    from teamboard.remote import RemoteBoardAPI

logger = logging.getLogger(__name__)


class TransitionResult(StrEnum):
    MOVED = "moved"
    SKIPPED = "skipped"
    FAILED = "failed"


class TransitionEngine:
    """Moves a task to another state, pessimistic on confirmation.

    The board is only mutated after ``update_task_state`` succeeds, so a
    rejected move never shows. On confirmation the current board record is
    re-read: an edit applied while the move was in flight keeps its fields,
    and the state change lands on top of it (last write wins).
    """

    def __init__(
        self,
        api: RemoteBoardAPI,
        board: BoardStore,
        *,
        report_error: ErrorReporter | None = None,
    ) -> None:
        self._api = api
        self._board = board
        self._report_error = report_error

    async def move(self, task_id: TaskId, target_state_id: StateId) -> TransitionResult:
        source_state_id = self._board.column_of(task_id)
        if source_state_id is None:
            logger.debug("Task %s vanished before its move; skipping", task_id)
            return TransitionResult.SKIPPED
        if source_state_id == target_state_id:
            return TransitionResult.SKIPPED
        target = next((s for s in self._board.states if s.id == target_state_id), None)
        if target is None:
            logger.debug("Unknown target state %s for task %s", target_state_id, task_id)
            return TransitionResult.SKIPPED

        try:
            await self._api.update_task_state(task_id, target_state_id)
        except Exception as exc:
            error = TransitionError(task_id, target_state_id, exc)
            logger.warning("%s", error)
            if self._board.closed:
                logger.debug("Board discarded; not reporting failed move of task %s", task_id)
            else:
                report_error(self._report_error, error)
            return TransitionResult.FAILED

        current_state_id = self._board.column_of(task_id)
        current = self._board.get(task_id)
        if current is None or current_state_id is None:
            logger.debug("Task %s left the board while its move was confirmed", task_id)
            return TransitionResult.SKIPPED

        updated = current.with_state(target)
        if current_state_id == target_state_id:
            applied = self._board.update_task_in_place(updated)
        else:
            applied = self._board.move_task(
                task_id, current_state_id, target_state_id, replacement=updated
            )
        if applied:
            logger.info(
                "Moved task %s from state %s to %s", task_id, source_state_id, target_state_id
            )
            return TransitionResult.MOVED
        return TransitionResult.SKIPPED
