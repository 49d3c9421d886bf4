"""Tests for CLI logging setup."""

from __future__ import annotations

import logging

import pytest

from calendar_widget.utils.logging import setup_logging

pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def _reset_logger():
    yield
    logger = logging.getLogger("calendar_widget")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()


def test_console_handler_follows_level():
    logger = setup_logging(level="debug")

    assert logger.level == logging.DEBUG
    assert [h.level for h in logger.handlers] == [logging.DEBUG]


def test_file_handler_records_debug(tmp_path):
    log_file = tmp_path / "widget.log"

    logger = setup_logging(level="WARNING", log_file=log_file)
    logger.warning("skipped record")

    assert [h.level for h in logger.handlers] == [logging.WARNING, logging.DEBUG]
    assert "skipped record" in log_file.read_text(encoding="utf-8")


def test_repeated_setup_does_not_stack_handlers():
    setup_logging()
    logger = setup_logging()

    assert len(logger.handlers) == 1
