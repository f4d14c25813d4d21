"""Pytest fixtures for teamboard tests."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from hypothesis import Phase, Verbosity, settings

_TEST_BASE_DIR = Path(tempfile.mkdtemp(prefix="teamboard-tests-"))
os.environ["TEAMBOARD_DATA_DIR"] = str(_TEST_BASE_DIR / "data")
os.environ["TEAMBOARD_CONFIG_DIR"] = str(_TEST_BASE_DIR / "config")

from teamboard.events import InMemoryEventBus  # noqa: E402
from tests.helpers.mocks import (  # noqa: E402
    FakeBoardAPI,
    FakeClock,
    make_project,
    make_workflow,
)

if TYPE_CHECKING:
    from teamboard.errors import BoardError
    from teamboard.events import BoardEvent


settings.register_profile(
    "ci",
    max_examples=100,
    deadline=None,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
)
settings.register_profile(
    "dev",
    max_examples=20,
    deadline=500,
)
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    deadline=None,
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


@pytest.fixture
def fake_api() -> FakeBoardAPI:
    """Backend with the default project and a three-state workflow, no tasks."""
    return FakeBoardAPI(project=make_project(), workflow=make_workflow())


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def reported_errors() -> list[BoardError]:
    """Collects errors; pass ``reported_errors.append`` as the reporter."""
    return []


@pytest.fixture
def event_bus() -> InMemoryEventBus:
    return InMemoryEventBus()


@pytest.fixture
def published_events(event_bus: InMemoryEventBus) -> list[BoardEvent]:
    """Every event published on ``event_bus``, in order."""
    events: list[BoardEvent] = []
    event_bus.add_handler(events.append)
    return events
