"""Shared test fixtures.

Everything runs in-process: file-backed stores live under ``tmp_path`` and
settings are read from environment variables set per test.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from loguru import logger

from devcore.shell.settings import _get_settings_cached


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Point settings at a temporary data root and keep logs quiet."""
    monkeypatch.setenv("DEVCORE_DATA_ROOT", str(tmp_path / "data"))
    monkeypatch.setenv("DEVCORE_LOG_LEVEL", "ERROR")
    _get_settings_cached.cache_clear()
    yield
    _get_settings_cached.cache_clear()
    # CLI tests install a sink bound to the runner's captured stderr.
    logger.remove()
