"""Configuration loader for teamboard."""

from __future__ import annotations

import asyncio
import tomllib
from typing import TYPE_CHECKING

import tomlkit
from pydantic import BaseModel, Field, field_validator

from teamboard.atomic import atomic_write
from teamboard.limits import (
    CLICK_THRESHOLD_MS,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_REQUESTS,
    REQUEST_TIMEOUT,
)
from teamboard.paths import ensure_directories, get_config_path

if TYPE_CHECKING:
    from pathlib import Path


class BoardConfig(BaseModel):
    """Board loading and gesture settings."""

    page_size: int = Field(
        default=DEFAULT_PAGE_SIZE, description="Tasks requested per page when loading a board"
    )
    max_page_requests: int = Field(
        default=MAX_PAGE_REQUESTS,
        description="Upper bound on page requests for one board load",
    )
    click_threshold_ms: int = Field(
        default=CLICK_THRESHOLD_MS,
        description="Same-column drops shorter than this open the task detail view",
    )
    touch_click_threshold_ms: int | None = Field(
        default=None,
        description="Click threshold for touch input (None = use click_threshold_ms)",
    )

    @field_validator("page_size", "max_page_requests", mode="before")
    @classmethod
    def validate_positive(cls, value: object) -> object:
        """Coerce non-positive counts back to 1."""
        if isinstance(value, int) and value < 1:
            return 1
        return value

    @field_validator("click_threshold_ms", "touch_click_threshold_ms", mode="before")
    @classmethod
    def validate_threshold(cls, value: object) -> object:
        if isinstance(value, int) and value < 0:
            return 0
        return value


class RemoteConfig(BaseModel):
    """Connection settings for the remote system of record."""

    base_url: str = Field(default="http://localhost:8080", description="Portal API base URL")
    api_token: str | None = Field(default=None, description="Bearer token sent with requests")
    timeout_seconds: float = Field(default=REQUEST_TIMEOUT)

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


class TeamboardConfig(BaseModel):
    """Root configuration model."""

    board: BoardConfig = Field(default_factory=BoardConfig)
    remote: RemoteConfig = Field(default_factory=RemoteConfig)

    @classmethod
    def load(cls, config_path: Path | None = None) -> TeamboardConfig:
        """Load configuration from TOML file or use defaults."""
        if config_path is None:
            ensure_directories()
            config_path = get_config_path()

        if config_path.exists():
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
            return cls.model_validate(data)

        return cls()

    async def save(self, path: Path) -> None:
        """Serialize current config to TOML file.

        Args:
            path: Path to write config file (created if missing)
        """
        doc = tomlkit.document()

        for section, model in (("board", self.board), ("remote", self.remote)):
            table = tomlkit.table()
            for key, value in model.model_dump().items():
                if value is not None:
                    table[key] = value
            doc[section] = table

        content = tomlkit.dumps(doc)
        await asyncio.to_thread(atomic_write, path, content)
