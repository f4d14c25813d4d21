"""Unit tests for path helpers."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from teamboard.paths import (
    ensure_directories,
    get_config_dir,
    get_config_path,
    get_data_dir,
    get_debug_log_path,
)

if TYPE_CHECKING:
    from pathlib import Path

pytestmark = pytest.mark.unit


def test_env_overrides_are_honoured(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TEAMBOARD_CONFIG_DIR", str(tmp_path / "cfg"))
    monkeypatch.setenv("TEAMBOARD_DATA_DIR", str(tmp_path / "data"))

    assert get_config_path() == tmp_path / "cfg" / "config.toml"
    assert get_debug_log_path() == tmp_path / "data" / "debug.log"


def test_ensure_directories_creates_both(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setenv("TEAMBOARD_CONFIG_DIR", str(tmp_path / "cfg"))
    monkeypatch.setenv("TEAMBOARD_DATA_DIR", str(tmp_path / "data"))

    ensure_directories()

    assert get_config_dir().is_dir()
    assert get_data_dir().is_dir()
