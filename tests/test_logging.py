"""Tests for oasgen.logging."""

from __future__ import annotations

import logging
from pathlib import Path

from oasgen.logging import configure_logging, get_logger


def test_get_logger_is_namespaced() -> None:
    assert get_logger().name == "oasgen"
    assert get_logger("generator").name == "oasgen.generator"


def test_configure_logging_replaces_handlers(tmp_path: Path) -> None:
    log_file = tmp_path / "oasgen.log"
    configure_logging(verbose=False)
    logger = configure_logging(verbose=True, log_file=log_file)

    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 2

    get_logger("generator").debug("translating archive")
    for handler in logger.handlers:
        handler.flush()
    assert "translating archive" in log_file.read_text(encoding="utf-8")

    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
