"""Task edits shown immediately and reconciled by re-fetching on failure."""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import TYPE_CHECKING

from teamboard.errors import EditError, report_error

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from teamboard.board import BoardStore
    from teamboard.errors import ErrorReporter
    from teamboard.models import Task
    from teamboard.remote import RemoteBoardAPI

logger = logging.getLogger(__name__)


class EditResult(StrEnum):
    SAVED = "saved"
    SKIPPED = "skipped"
    FAILED = "failed"


class EditReconciler:
    """Applies a detail-view edit locally, then saves it remotely.

    There is no field-level rollback: when the save fails the whole board is
    re-fetched through ``refetch`` and the server's state replaces the local
    edit. A snapshot-and-restore alternative would also satisfy that contract
    but would not pick up other changes the server made meanwhile.
    """

    def __init__(
        self,
        api: RemoteBoardAPI,
        board: BoardStore,
        *,
        refetch: Callable[[], Awaitable[object]],
        report_error: ErrorReporter | None = None,
    ) -> None:
        self._api = api
        self._board = board
        self._refetch = refetch
        self._report_error = report_error

    def apply_local(self, task: Task) -> Task:
        """Stamp ``modified_at`` and put the task on the board without suspending."""
        stamped = task.touched()
        previous_state_id = self._board.column_of(stamped.id)
        if previous_state_id is None:
            logger.debug("Edited task %s is not on the board", stamped.id)
        elif previous_state_id != stamped.current_state_id:
            self._board.move_task(
                stamped.id, previous_state_id, stamped.current_state_id, replacement=stamped
            )
        else:
            self._board.update_task_in_place(stamped)
        return stamped

    async def apply(self, task: Task) -> EditResult:
        return await self.save(self.apply_local(task))

    async def save(self, stamped: Task) -> EditResult:
        """Send a locally applied edit; re-fetch the board if the server rejects it."""
        shown = self._board.get(stamped.id)

        try:
            saved = await self._api.update_task(stamped.id, stamped)
        except Exception as exc:
            error = EditError(stamped.id, exc)
            if self._board.closed:
                logger.warning("%s; board discarded, not reloading", error)
                return EditResult.FAILED
            logger.warning("%s; reloading board", error)
            report_error(self._report_error, error)
            await self._refetch()
            return EditResult.FAILED

        # Only take the server echo when nothing newer was written locally meanwhile.
        if shown is not None and self._board.get(stamped.id) == shown:
            self._board.update_task_in_place(saved)
        return EditResult.SAVED
