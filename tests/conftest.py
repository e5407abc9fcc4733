"""Shared test fixtures for extragrid."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from loguru import logger

from extragrid.config import Settings
from extragrid.editor import GridEditor


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    """Drop any sinks a test installed and disable library logging again."""
    yield
    logger.remove()
    logger.disable("extragrid")


@pytest.fixture
def settings() -> Settings:
    return Settings(show_coords=True, log_level="WARNING", log_json=False)


@pytest.fixture
def editor(settings: Settings) -> GridEditor:
    """Editor whose resets fill each cell with its own "r,c"."""
    return GridEditor(settings)
