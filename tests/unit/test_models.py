"""Unit tests for wire models."""

from __future__ import annotations

from datetime import date

import pytest

from teamboard.models import Pagination, Project, SortDirection, SortOrder, Task, WorkflowState

pytestmark = pytest.mark.unit


class TestTask:
    def test_parses_camel_case_payload(self) -> None:
        task = Task.model_validate(
            {
                "id": 42,
                "currentStateId": 3,
                "currentStateName": "Done",
                "requestTitle": "Fix login",
                "projectId": 7,
                "modifiedAt": "2026-01-02T03:04:05Z",
            }
        )

        assert (task.id, task.current_state_id, task.request_title) == (42, 3, "Fix login")
        assert task.modified_at is not None and task.modified_at.year == 2026

    def test_unknown_fields_survive_a_round_trip_to_the_wire(self) -> None:
        task = Task.model_validate({"id": 1, "currentStateId": 1, "estimate": 8})

        wire = task.to_wire()

        assert wire["estimate"] == 8
        assert wire["currentStateId"] == 1

    def test_with_state_copies_and_stamps(self) -> None:
        task = Task(id=1, current_state_id=1, current_state_name="To Do")

        moved = task.with_state(WorkflowState(id=3, state_name="Done"))

        assert (moved.current_state_id, moved.current_state_name) == (3, "Done")
        assert moved.modified_at is not None
        assert task.current_state_id == 1
        assert task.modified_at is None


class TestPagination:
    def test_sort_param_renders_field_and_direction(self) -> None:
        pagination = Pagination(
            page=2,
            size=50,
            sort=[SortOrder(field="id", direction=SortDirection.DESC), SortOrder(field="title")],
        )

        assert pagination.sort_param() == ["id,desc", "title,asc"]


class TestProject:
    @pytest.mark.parametrize(
        ("start", "end", "expected"),
        [
            (date(2026, 1, 1), date(2026, 1, 31), 30),
            (None, date(2026, 1, 31), None),
            (date(2026, 1, 1), None, None),
        ],
    )
    def test_duration_days(self, start: date | None, end: date | None, expected: int | None):
        project = Project(id=7, start_date=start, end_date=end)

        assert project.duration_days == expected
