"""Board error taxonomy and the error reporter contract."""

from __future__ import annotations

import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)


class BoardError(Exception):
    """Base for board errors with a machine-readable code."""

    def __init__(self, message: str, *, code: str) -> None:
        super().__init__(message)
        self.code = code


class RemoteError(BoardError):
    """Raised by remote adapters when a request fails in transport or status."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message, code="REMOTE_FAILURE")
        self.status_code = status_code


class FetchError(BoardError):
    """Loading the project, workflow or a task page failed."""

    def __init__(self, project_id: int, cause: Exception) -> None:
        super().__init__(
            f"Failed to load board for project {project_id}: {cause}",
            code="FETCH_FAILED",
        )
        self.project_id = project_id
        self.__cause__ = cause


class TransitionError(BoardError):
    """The remote system rejected a state change."""

    def __init__(self, task_id: int, target_state_id: int, cause: Exception) -> None:
        super().__init__(
            f"Failed to move task {task_id} to state {target_state_id}: {cause}",
            code="TRANSITION_FAILED",
        )
        self.task_id = task_id
        self.target_state_id = target_state_id
        self.__cause__ = cause


class EditError(BoardError):
    """The remote system rejected a task update that was already shown locally."""

    def __init__(self, task_id: int, cause: Exception) -> None:
        super().__init__(f"Failed to update task {task_id}: {cause}", code="EDIT_FAILED")
        self.task_id = task_id
        self.__cause__ = cause


type ErrorReporter = Callable[[BoardError], None]


def report_error(reporter: ErrorReporter | None, error: BoardError) -> None:
    """Hand ``error`` to the reporter; a failing reporter is logged, never raised."""
    if reporter is None:
        return
    try:
        reporter(error)
    except Exception:
        logger.exception("Error reporter failed while reporting %s", error.code)


__all__ = [
    "BoardError",
    "EditError",
    "ErrorReporter",
    "FetchError",
    "RemoteError",
    "TransitionError",
    "report_error",
]
