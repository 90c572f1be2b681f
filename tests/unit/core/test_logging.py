"""Tests for logging setup."""

import json

import pytest
import structlog

from tagstitch.core import logging as ts_logging

pytestmark = pytest.mark.unit


def test_json_format_writes_to_stderr(capsys):
    ts_logging.setup_logging("json")
    structlog.get_logger().info("expand.done", tags=2)
    captured = capsys.readouterr()
    assert captured.out == ""
    record = json.loads(captured.err.strip().splitlines()[-1])
    assert record["event"] == "expand.done"
    assert record["tags"] == 2
    assert record["level"] == "info"


def test_level_filters_debug(capsys):
    ts_logging.setup_logging("plain", level="INFO")
    structlog.get_logger().debug("merge.headers", count=0)
    assert capsys.readouterr().err == ""


def test_auto_uses_json_in_ci(monkeypatch):
    monkeypatch.setenv("CI", "1")
    assert ts_logging._should_use_json_format() is True


def test_library_default_is_quiet(capsys):
    structlog.reset_defaults()
    ts_logging.configure_library_default()
    structlog.get_logger().debug("expand.start", tags=1)
    structlog.get_logger().info("stitch.done")
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == ""


def test_library_default_keeps_existing_config(capsys):
    ts_logging.setup_logging("json", level="DEBUG")
    ts_logging.configure_library_default()
    structlog.get_logger().debug("merge.headers", count=0)
    assert "merge.headers" in capsys.readouterr().err
