"""Integration tests for the teamboard CLI."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

import pytest
from click.testing import CliRunner

from teamboard.cli import cli
from teamboard.debug_log import clear_log_buffer, teardown_debug_logging
from teamboard.paths import get_debug_log_path

if TYPE_CHECKING:
    from pathlib import Path

    from pytest_httpx import HTTPXMock

pytestmark = pytest.mark.integration

BASE_URL = "http://portal.test"
SEARCH_URL = re.compile(r"http://portal\.test/api/team-requests/search(\?.*)?$")

WORKFLOW = {
    "id": 1,
    "name": "Delivery",
    "states": [
        {"id": 3, "stateName": "Done", "isFinal": True},
        {"id": 2, "stateName": "Doing"},
        {"id": 1, "stateName": "To Do", "isInitial": True},
    ],
}


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "config.toml"
    path.write_text(f'[remote]\nbase_url = "{BASE_URL}"\n')
    return path


def _mock_board(httpx_mock: HTTPXMock) -> None:
    httpx_mock.add_response(
        url=f"{BASE_URL}/api/projects/7",
        json={
            "id": 7,
            "teamId": 3,
            "name": "Relaunch",
            "startDate": "2026-03-01",
            "endDate": "2026-03-31",
        },
    )
    httpx_mock.add_response(url=f"{BASE_URL}/api/workflows/teams/3/project-workflow", json=WORKFLOW)
    httpx_mock.add_response(
        method="POST",
        url=SEARCH_URL,
        json={
            "content": [
                {"id": 12, "currentStateId": 1, "requestTitle": "Docs"},
                {"id": 11, "currentStateId": 3, "requestTitle": "Login"},
                {"id": 10, "currentStateId": 1, "requestTitle": "Logo"},
            ],
            "totalElements": 3,
        },
    )


class TestShow:
    def test_prints_columns_in_workflow_order(
        self, httpx_mock: HTTPXMock, config_file: Path
    ) -> None:
        _mock_board(httpx_mock)

        result = CliRunner().invoke(
            cli, ["show", "--project", "7", "--team", "3", "--config", str(config_file)]
        )

        assert result.exit_code == 0, result.output
        assert "Relaunch (30 days)" in result.output
        assert result.output.index("To Do (2)") < result.output.index("Doing (0)")
        assert result.output.index("Doing (0)") < result.output.index("Done (1)")
        assert "#12 Docs" in result.output
        assert "#11 Login" in result.output

    def test_team_without_workflow(self, httpx_mock: HTTPXMock, config_file: Path) -> None:
        httpx_mock.add_response(url=f"{BASE_URL}/api/projects/7", json={"id": 7, "name": "X"})
        httpx_mock.add_response(
            url=f"{BASE_URL}/api/workflows/teams/3/project-workflow", status_code=404
        )

        result = CliRunner().invoke(
            cli, ["show", "--project", "7", "--team", "3", "--config", str(config_file)]
        )

        assert result.exit_code == 0, result.output
        assert "No workflow configured for this team." in result.output

    def test_backend_failure_exits_non_zero(
        self, httpx_mock: HTTPXMock, config_file: Path
    ) -> None:
        httpx_mock.add_response(
            url=f"{BASE_URL}/api/projects/7", status_code=500, json={"error": "database down"}
        )

        result = CliRunner().invoke(
            cli, ["show", "--project", "7", "--team", "3", "--config", str(config_file)]
        )

        assert result.exit_code == 1
        assert "[FETCH_FAILED]" in result.output
        assert "database down" in result.output


class TestMove:
    def test_moves_task_after_confirmation(
        self, httpx_mock: HTTPXMock, config_file: Path
    ) -> None:
        _mock_board(httpx_mock)
        httpx_mock.add_response(
            method="PUT", url=f"{BASE_URL}/api/team-requests/12/states?stateId=3"
        )

        result = CliRunner().invoke(
            cli,
            ["move", "12", "3", "--project", "7", "--team", "3", "--config", str(config_file)],
        )

        assert result.exit_code == 0, result.output
        assert "Moved task 12 to state 3" in result.output

    def test_rejected_move_exits_non_zero(
        self, httpx_mock: HTTPXMock, config_file: Path
    ) -> None:
        _mock_board(httpx_mock)
        httpx_mock.add_response(
            method="PUT",
            url=f"{BASE_URL}/api/team-requests/12/states?stateId=3",
            status_code=409,
            json={"message": "Transition not allowed"},
        )

        result = CliRunner().invoke(
            cli,
            ["move", "12", "3", "--project", "7", "--team", "3", "--config", str(config_file)],
        )

        assert result.exit_code == 1
        assert "[TRANSITION_FAILED]" in result.output

    def test_task_already_in_state_is_not_moved(
        self, httpx_mock: HTTPXMock, config_file: Path
    ) -> None:
        _mock_board(httpx_mock)

        result = CliRunner().invoke(
            cli,
            ["move", "11", "3", "--project", "7", "--team", "3", "--config", str(config_file)],
        )

        assert result.exit_code == 0, result.output
        assert "Task 11 was not moved" in result.output


class TestRoot:
    def test_version(self) -> None:
        result = CliRunner().invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert result.output.startswith("teamboard ")

    def test_no_subcommand_prints_help(self) -> None:
        result = CliRunner().invoke(cli, [])

        assert result.exit_code == 0
        assert "show" in result.output
        assert "move" in result.output

    def test_config_writes_defaults_once(self, tmp_path: Path) -> None:
        path = tmp_path / "teamboard.toml"
        runner = CliRunner()

        first = runner.invoke(cli, ["config", "--path", str(path)])
        second = runner.invoke(cli, ["config", "--path", str(path)])

        assert first.exit_code == 0, first.output
        assert f"Wrote {path}" in first.output
        assert "[board]" in path.read_text()
        assert f"Config already exists: {path}" in second.output

    def test_debug_log_is_exported_on_exit(self, tmp_path: Path) -> None:
        log_path = tmp_path / "debug.log"
        try:
            result = CliRunner().invoke(
                cli,
                ["--debug-log", str(log_path), "config", "--path", str(tmp_path / "c.toml")],
            )
        finally:
            teardown_debug_logging()
            clear_log_buffer()

        assert result.exit_code == 0, result.output
        content = log_path.read_text(encoding="utf-8")
        assert content.startswith("# teamboard Debug Log Export")
        assert "Debug logging initialized" in content

    def test_debug_flag_exports_to_data_dir(self, tmp_path: Path) -> None:
        try:
            result = CliRunner().invoke(
                cli, ["--debug", "config", "--path", str(tmp_path / "c.toml")]
            )
        finally:
            teardown_debug_logging()
            clear_log_buffer()

        assert result.exit_code == 0, result.output
        assert get_debug_log_path().read_text(encoding="utf-8").startswith(
            "# teamboard Debug Log Export"
        )
