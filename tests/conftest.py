# tests/conftest.py

"""Shared pytest fixtures for all reconciler tests."""

from collections.abc import Generator
from pathlib import Path
from unittest.mock import patch

import pytest

from src.matching.label_matcher import build_label_pattern


@pytest.fixture(autouse=True)
def isolated_logs_dir(tmp_path: Path) -> Generator[Path, None, None]:
    """Send run logs to a temp ``logs/`` dir instead of the repo."""
    logs_dir = tmp_path / "logs"
    with patch("src.config.settings.Settings.LOGS_DIR", logs_dir):
        yield logs_dir


@pytest.fixture(autouse=True)
def clear_pattern_cache() -> Generator[None, None, None]:
    """Start every test with an empty label pattern cache."""
    build_label_pattern.cache_clear()
    yield
