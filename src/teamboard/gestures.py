"""Telling a drag between columns from a click on a card.

The board surface is drag-capable, so a click arrives as a very short drag
that ends where it started. A gesture that ends in its own column in less
than the click threshold opens the task; a longer one is a drop back in
place; ending in another column is always a move.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Literal

from teamboard.limits import CLICK_THRESHOLD_MS

if TYPE_CHECKING:
    from collections.abc import Callable

    from teamboard.board import BoardStore
    from teamboard.models import StateId, Task, TaskId

logger = logging.getLogger(__name__)


class PointerKind(StrEnum):
    """Input device that started the gesture."""

    POINTER = "pointer"
    TOUCH = "touch"


class GesturePhase(StrEnum):
    IDLE = "idle"
    DRAGGING = "dragging"


class GestureOutcome(StrEnum):
    NONE = "none"
    OPEN_DETAIL = "open_detail"
    MOVE = "move"


@dataclass(frozen=True, slots=True)
class DropTarget:
    """What the gesture was released over: a column or another card."""

    kind: Literal["column", "task"]
    id: int

    @classmethod
    def column(cls, state_id: StateId) -> DropTarget:
        return cls("column", state_id)

    @classmethod
    def task(cls, task_id: TaskId) -> DropTarget:
        return cls("task", task_id)


@dataclass(frozen=True, slots=True)
class GestureResult:
    outcome: GestureOutcome
    task_id: TaskId | None = None
    task: Task | None = None
    source_state_id: StateId | None = None
    target_state_id: StateId | None = None
    elapsed_ms: float = 0.0


_NO_GESTURE = GestureResult(GestureOutcome.NONE)


class GestureClassifier:
    """Idle/Dragging state machine for a single drag gesture at a time."""

    def __init__(
        self,
        board: BoardStore,
        *,
        click_threshold_ms: float = CLICK_THRESHOLD_MS,
        touch_click_threshold_ms: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._board = board
        self.click_threshold_ms = click_threshold_ms
        self.touch_click_threshold_ms = touch_click_threshold_ms
        self._clock = clock
        self._phase = GesturePhase.IDLE
        self._task_id: TaskId | None = None
        self._active_task: Task | None = None
        self._pointer = PointerKind.POINTER
        self._started_at = 0.0

    @property
    def phase(self) -> GesturePhase:
        return self._phase

    @property
    def active_task(self) -> Task | None:
        """Task being dragged, for the drag overlay."""
        return self._active_task

    def threshold_for(self, pointer: PointerKind) -> float:
        if pointer is PointerKind.TOUCH and self.touch_click_threshold_ms is not None:
            return self.touch_click_threshold_ms
        return self.click_threshold_ms

    def start(self, task_id: TaskId, *, pointer: PointerKind = PointerKind.POINTER) -> Task | None:
        """Enter Dragging for ``task_id`` and return the task if it is on the board."""
        if self._phase is GesturePhase.DRAGGING:
            logger.debug("Gesture on task %s replaced by task %s", self._task_id, task_id)
        self._phase = GesturePhase.DRAGGING
        self._task_id = task_id
        self._pointer = pointer
        self._started_at = self._clock()
        self._active_task = self._board.get(task_id)
        return self._active_task

    def end(self, target: DropTarget | None) -> GestureResult:
        """Leave Dragging and classify the gesture."""
        if self._phase is GesturePhase.IDLE or self._task_id is None:
            return _NO_GESTURE

        task_id = self._task_id
        elapsed_ms = round((self._clock() - self._started_at) * 1000.0, 3)
        threshold = self.threshold_for(self._pointer)
        self.reset()

        if target is None:
            return GestureResult(GestureOutcome.NONE, task_id=task_id, elapsed_ms=elapsed_ms)

        target_state = self._resolve_target(target)
        source_state = self._board.column_of(task_id)
        if target_state is None or source_state is None:
            logger.debug(
                "Gesture on task %s ended without source or target (target=%s)", task_id, target
            )
            return GestureResult(GestureOutcome.NONE, task_id=task_id, elapsed_ms=elapsed_ms)

        if source_state == target_state:
            if elapsed_ms < threshold:
                return GestureResult(
                    GestureOutcome.OPEN_DETAIL,
                    task_id=task_id,
                    task=self._board.get(task_id),
                    source_state_id=source_state,
                    target_state_id=target_state,
                    elapsed_ms=elapsed_ms,
                )
            return GestureResult(
                GestureOutcome.NONE,
                task_id=task_id,
                source_state_id=source_state,
                target_state_id=target_state,
                elapsed_ms=elapsed_ms,
            )

        return GestureResult(
            GestureOutcome.MOVE,
            task_id=task_id,
            task=self._board.get(task_id),
            source_state_id=source_state,
            target_state_id=target_state,
            elapsed_ms=elapsed_ms,
        )

    def reset(self) -> None:
        """Back to Idle, forgetting the active task."""
        self._phase = GesturePhase.IDLE
        self._task_id = None
        self._active_task = None
        self._pointer = PointerKind.POINTER
        self._started_at = 0.0

    def _resolve_target(self, target: DropTarget) -> StateId | None:
        if target.kind == "column":
            return target.id if target.id in self._board.state_ids else None
        return self._board.column_of(target.id)
