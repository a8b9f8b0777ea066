"""Tests for structlog configuration."""

import json

import structlog

from health_export.config import AppSettings
from health_export.logging import setup_logging


def teardown_function():
    structlog.reset_defaults()


def test_json_renderer(capsys):
    setup_logging(AppSettings(log_level="INFO", log_format="json"))
    structlog.get_logger("test").info("export_generated", format="csv")

    line = capsys.readouterr().err.strip().splitlines()[-1]
    entry = json.loads(line)
    assert entry["event"] == "export_generated"
    assert entry["format"] == "csv"
    assert entry["level"] == "info"
    assert "timestamp" in entry


def test_level_filtering(capsys):
    setup_logging(AppSettings(log_level="WARNING", log_format="json"))
    logger = structlog.get_logger("test")
    logger.info("hidden_event")
    logger.warning("shown_event")

    err = capsys.readouterr().err
    assert "hidden_event" not in err
    assert "shown_event" in err
