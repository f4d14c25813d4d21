"""Test helpers package."""

from tests.helpers.mocks import (
    FakeBoardAPI,
    FakeClock,
    assert_board_invariant,
    build_board,
    make_project,
    make_task,
    make_tasks,
    make_workflow,
)

__all__ = [
    "FakeBoardAPI",
    "FakeClock",
    "assert_board_invariant",
    "build_board",
    "make_project",
    "make_task",
    "make_tasks",
    "make_workflow",
]
