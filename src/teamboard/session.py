"""Project board session: one mounted project view and its board."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from teamboard.board import BoardStore
from teamboard.config import BoardConfig
from teamboard.edits import EditReconciler, EditResult
from teamboard.errors import FetchError, report_error
from teamboard.events import (
    BoardUpdated,
    InMemoryEventBus,
    LoadingChanged,
    TaskDetailRequested,
)
from teamboard.fetcher import TaskFetcher
from teamboard.gestures import GestureClassifier, GestureOutcome, GestureResult, PointerKind
from teamboard.transitions import TransitionEngine, TransitionResult
from teamboard.workflow import load_workflow

if TYPE_CHECKING:
    from collections.abc import Callable

    from teamboard.errors import ErrorReporter
    from teamboard.events import BoardEvent, EventBus
    from teamboard.gestures import DropTarget
    from teamboard.models import (
        Project,
        ProjectId,
        StateId,
        Task,
        TaskId,
        TeamId,
        WorkflowDetail,
        WorkflowState,
    )
    from teamboard.remote import RemoteBoardAPI

logger = logging.getLogger(__name__)


class BoardSession:
    """Owns the board of one project while its view is mounted.

    Usage::

        session = BoardSession(api, project_id=7, team_id=3, report_error=show_toast)
        await session.mount()
        session.start_gesture(42)
        await session.end_gesture(DropTarget.column(3))
        session.unmount()

    Every remote failure goes to ``report_error``; nothing raised by the
    remote system escapes these methods.
    """

    def __init__(
        self,
        api: RemoteBoardAPI,
        *,
        project_id: ProjectId,
        team_id: TeamId,
        config: BoardConfig | None = None,
        event_bus: EventBus | None = None,
        report_error: ErrorReporter | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self._api = api
        self._config = config or BoardConfig()
        self.events: EventBus = event_bus or InMemoryEventBus()
        self._report_error = report_error
        self._clock = clock or time.monotonic
        self._team_id = team_id
        self._project_id = project_id
        self._is_mounted = False
        self._loading = False
        self._project: Project | None = None
        self._workflow: WorkflowDetail | None = None
        self._selected_task: Task | None = None
        self._fetcher = TaskFetcher(
            api,
            page_size=self._config.page_size,
            max_pages=self._config.max_page_requests,
        )
        self._new_board()

    # -- state -----------------------------------------------------------

    @property
    def project_id(self) -> ProjectId:
        return self._project_id

    @property
    def is_mounted(self) -> bool:
        return self._is_mounted

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def board(self) -> BoardStore:
        return self._board

    @property
    def project(self) -> Project | None:
        return self._project

    @property
    def workflow(self) -> WorkflowDetail | None:
        return self._workflow

    @property
    def selected_task(self) -> Task | None:
        """Task whose detail view is open."""
        return self._selected_task

    @property
    def active_task(self) -> Task | None:
        """Task currently being dragged."""
        return self._gestures.active_task

    def columns(self) -> list[tuple[WorkflowState, list[Task]]]:
        """Columns in display order with their tasks."""
        return [(state, self._board.column(state.id)) for state in self._board.states]

    # -- lifecycle -------------------------------------------------------

    async def mount(self) -> None:
        if self._is_mounted:
            return
        self._is_mounted = True
        if self._board.closed:
            self._new_board()
        await self.reload()

    def unmount(self) -> None:
        """Stop consuming updates; in-flight calls finish without touching state."""
        self._is_mounted = False
        self._gestures.reset()
        self._selected_task = None
        self._board.discard()

    async def change_project(self, project_id: ProjectId, team_id: TeamId | None = None) -> None:
        """Discard the current board and load another project."""
        self._board.discard()
        self._project_id = project_id
        if team_id is not None:
            self._team_id = team_id
        self._project = None
        self._workflow = None
        self._selected_task = None
        self._new_board()
        if self._is_mounted:
            await self.reload()

    async def reload(self) -> None:
        """Fetch project, workflow and tasks and rebuild the board.

        On failure the board keeps its last valid contents. The loading flag
        is cleared either way.
        """
        if not self._is_mounted:
            return
        board = self._board
        project_id = self._project_id
        self._loads_in_flight += 1
        if self._loads_in_flight == 1:
            await self._set_loading(True)
        try:
            project = await self._api.fetch_project(project_id)
            workflow = await load_workflow(self._api, self._team_id)
            tasks = await self._fetcher.fetch_all(project_id) if workflow is not None else []
        except Exception as exc:
            error = FetchError(project_id, exc)
            logger.warning("%s", error)
            if self._is_current(board):
                report_error(self._report_error, error)
            return
        finally:
            # The flag belongs to the current board and clears with its last load.
            if self._is_current(board):
                self._loads_in_flight -= 1
                if self._loads_in_flight == 0:
                    await self._set_loading(False)
            elif not self._is_mounted:
                await self._set_loading(False, publish=False)

        if not self._is_current(board):
            logger.debug("Dropping stale load for project %s", project_id)
            return

        self._project = project
        self._workflow = workflow
        board.rebuild(tasks, workflow.states if workflow is not None else [])
        self._sync_selected_task()
        logger.info(
            "Loaded project %s: %d task(s) in %d column(s)",
            project_id,
            board.task_count,
            len(board.state_ids),
        )
        await self._publish(BoardUpdated(project_id=project_id, reason="load"))

    # -- gestures --------------------------------------------------------

    def start_gesture(
        self, task_id: TaskId, *, pointer: PointerKind = PointerKind.POINTER
    ) -> Task | None:
        if not self._is_mounted:
            return None
        return self._gestures.start(task_id, pointer=pointer)

    async def end_gesture(self, target: DropTarget | None) -> GestureResult:
        """Classify the finished gesture and act on it."""
        result = self._gestures.end(target)
        if not self._is_mounted:
            return result
        if result.outcome is GestureOutcome.OPEN_DETAIL and result.task is not None:
            self._selected_task = result.task
            await self._publish(TaskDetailRequested(project_id=self._project_id, task=result.task))
        elif (
            result.outcome is GestureOutcome.MOVE
            and result.task_id is not None
            and result.target_state_id is not None
        ):
            await self.move_task(result.task_id, result.target_state_id)
        return result

    async def move_task(self, task_id: TaskId, target_state_id: StateId) -> TransitionResult:
        board = self._board
        outcome = await self._transitions.move(task_id, target_state_id)
        if outcome is TransitionResult.MOVED and self._is_current(board):
            self._sync_selected_task()
            await self._publish(
                BoardUpdated(project_id=self._project_id, reason="move", task_id=task_id)
            )
        return outcome

    # -- edits -----------------------------------------------------------

    async def apply_edit(self, task: Task) -> EditResult:
        """Apply an edit from the task detail view; skipped once unmounted."""
        if not self._is_mounted:
            logger.debug("Ignoring edit of task %s on an unmounted board", task.id)
            return EditResult.SKIPPED
        board = self._board
        if self._selected_task is not None and self._selected_task.id == task.id:
            self._selected_task = task
        stamped = self._edits.apply_local(task)
        if self._is_current(board):
            await self._publish(
                BoardUpdated(project_id=self._project_id, reason="edit", task_id=task.id)
            )
        outcome = await self._edits.save(stamped)
        if outcome is EditResult.SAVED and self._is_current(board):
            self._sync_selected_task()
        return outcome

    async def add_task(self, task: Task) -> bool:
        """Show a task created by the surrounding editor."""
        if not self._is_mounted or not self._board.add_task(task):
            return False
        await self._publish(
            BoardUpdated(project_id=self._project_id, reason="create", task_id=task.id)
        )
        return True

    def close_detail(self) -> None:
        self._selected_task = None

    # -- internals -------------------------------------------------------

    def _new_board(self) -> None:
        board = BoardStore()
        self._board = board
        self._loads_in_flight = 0
        self._gestures = GestureClassifier(
            self._board,
            click_threshold_ms=self._config.click_threshold_ms,
            touch_click_threshold_ms=self._config.touch_click_threshold_ms,
            clock=self._clock,
        )
        self._transitions = TransitionEngine(
            self._api, self._board, report_error=self._report_error
        )
        self._edits = EditReconciler(
            self._api,
            self._board,
            refetch=lambda: self._reload_if_current(board),
            report_error=self._report_error,
        )

    async def _reload_if_current(self, board: BoardStore) -> None:
        if self._is_current(board):
            await self.reload()

    def _is_current(self, board: BoardStore) -> bool:
        return self._is_mounted and board is self._board and not board.closed

    def _sync_selected_task(self) -> None:
        if self._selected_task is None:
            return
        current = self._board.get(self._selected_task.id)
        if current is not None:
            self._selected_task = current

    async def _set_loading(self, loading: bool, *, publish: bool = True) -> None:
        self._loading = loading
        if publish:
            await self._publish(LoadingChanged(project_id=self._project_id, loading=loading))

    async def _publish(self, event: BoardEvent) -> None:
        await self.events.publish(event)
