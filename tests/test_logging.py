"""Tests for repolens.logging."""

from __future__ import annotations

import logging
from pathlib import Path

from repolens.logging import configure_logging, get_logger


def test_get_logger_nests_under_package() -> None:
    assert get_logger().name == "repolens"
    assert get_logger("engine").name == "repolens.engine"


def test_configure_logging_replaces_handlers_on_repeat() -> None:
    configure_logging()
    logger = configure_logging(verbose=True)

    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG
    assert logger.propagate is False


def test_quiet_logging_only_warns() -> None:
    assert configure_logging(quiet=True).level == logging.WARNING
    assert configure_logging(verbose=True, quiet=True).level == logging.DEBUG


def test_log_file_sink(tmp_path: Path) -> None:
    log_file = tmp_path / "repolens.log"
    logger = configure_logging(log_file=log_file)

    get_logger("engine").info("scanned %d files", 3)
    for handler in logger.handlers:
        handler.flush()

    assert "repolens.engine: scanned 3 files" in log_file.read_text(encoding="utf-8")
    configure_logging()
