"""teamboard: Kanban board synchronization for team projects."""

from teamboard.board import BoardStore
from teamboard.config import BoardConfig, RemoteConfig, TeamboardConfig
from teamboard.edits import EditReconciler, EditResult
from teamboard.errors import (
    BoardError,
    EditError,
    ErrorReporter,
    FetchError,
    RemoteError,
    TransitionError,
)
from teamboard.fetcher import TaskFetcher
from teamboard.gestures import (
    DropTarget,
    GestureClassifier,
    GestureOutcome,
    GestureResult,
    PointerKind,
)
from teamboard.models import Project, Task, WorkflowDetail, WorkflowState
from teamboard.session import BoardSession
from teamboard.transitions import TransitionEngine, TransitionResult
from teamboard.workflow import load_workflow, order_states

__version__ = "0.1.0"

__all__ = [
    "BoardConfig",
    "BoardError",
    "BoardSession",
    "BoardStore",
    "DropTarget",
    "EditError",
    "EditReconciler",
    "EditResult",
    "ErrorReporter",
    "FetchError",
    "GestureClassifier",
    "GestureOutcome",
    "GestureResult",
    "PointerKind",
    "Project",
    "RemoteConfig",
    "RemoteError",
    "Task",
    "TaskFetcher",
    "TeamboardConfig",
    "TransitionEngine",
    "TransitionError",
    "TransitionResult",
    "WorkflowDetail",
    "WorkflowState",
    "load_workflow",
    "order_states",
]
