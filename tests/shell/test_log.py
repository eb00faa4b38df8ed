"""Tests for shell logging setup."""

from __future__ import annotations

import logging

from loguru import logger

from devcore.shell.log import setup_logging
from devcore.shell.settings import DevcoreSettings


def test_file_sink_tags_records_with_component(tmp_path) -> None:
    log_file = tmp_path / "shell.log"
    setup_logging(DevcoreSettings(log_level="DEBUG", log_file=str(log_file)))

    logger.bind(component="writer").info("snapshot scheduled")
    logger.bind(component="persistence").warning("write failed")
    logger.info("unbound record")
    logger.remove()

    lines = log_file.read_text(encoding="utf-8").splitlines()
    assert any("writer" in line and "snapshot scheduled" in line for line in lines)
    assert any("persistence" in line and "WARNING" in line for line in lines)
    assert any("shell" in line and "unbound record" in line for line in lines)


def test_level_filters_file_sink(tmp_path) -> None:
    log_file = tmp_path / "shell.log"
    setup_logging(DevcoreSettings(log_level="warning", log_file=str(log_file)))

    logger.bind(component="store").debug("applied OpenApp")
    logger.bind(component="store").error("boom")
    logger.remove()

    content = log_file.read_text(encoding="utf-8")
    assert "applied OpenApp" not in content
    assert "boom" in content


def test_stdlib_records_are_forwarded(tmp_path) -> None:
    log_file = tmp_path / "shell.log"
    setup_logging(DevcoreSettings(log_level="INFO", log_file=str(log_file)))

    logging.getLogger("asyncio").error("Task exception was never retrieved")
    logger.remove()

    content = log_file.read_text(encoding="utf-8")
    assert "asyncio" in content
    assert "Task exception was never retrieved" in content
