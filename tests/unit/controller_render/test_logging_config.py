"""Tests for logging configuration."""

import json
import logging
from logging.handlers import RotatingFileHandler

import pytest

from controller_render.logging_config import get_logger, log_with_context, setup_logging


@pytest.fixture
def restore_root_logger():
    """Restore root logger handlers and level after a test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_setup_logging_console_only(restore_root_logger):
    """Test console-only logging installs a single stream handler."""
    root = setup_logging("warning")

    assert root.level == logging.WARNING
    assert len(root.handlers) == 1
    assert not isinstance(root.handlers[0], RotatingFileHandler)


def test_setup_logging_json_file(tmp_path, restore_root_logger):
    """Test structured fields land in the JSON log file."""
    log_file = tmp_path / "logs" / "render.log"
    setup_logging("DEBUG", log_file)

    logger = get_logger("controller_render.test")
    log_with_context(logger, "info", "Layout resolved", layout_path="layout/application.html", event_type="layout_resolved")
    for handler in logging.getLogger().handlers:
        handler.flush()

    record = json.loads(log_file.read_text(encoding="utf-8").strip().splitlines()[-1])

    assert record["message"] == "Layout resolved"
    assert record["layout_path"] == "layout/application.html"
    assert record["event_type"] == "layout_resolved"
