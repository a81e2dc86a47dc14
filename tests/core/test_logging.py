"""
Tests for the logging module.

Tests verify:
- JSON output carries ECS-style field names
- Bound context appears in events and is removed afterwards
- DEBUG events are suppressed at INFO level
"""

import json
import os
import subprocess
import sys
from pathlib import Path

import pytest
import structlog

from rundeck_spine.core.logging import (
    LogContext,
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)

SRC_DIR = Path(__file__).resolve().parents[2] / "src"


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()


def _events(captured: str) -> list[dict]:
    return [json.loads(line) for line in captured.splitlines() if line.startswith("{")]


class TestConfigureLogging:
    def test_json_output(self, capsys):
        configure_logging(level="INFO", json_format=True, service="test-svc")
        get_logger("rundeck_spine.test").info("jobs_listed", count=2)

        (event,) = _events(capsys.readouterr().err)
        assert event["event"] == "jobs_listed"
        assert event["count"] == 2
        assert event["service.name"] == "test-svc"
        assert event["log.level"] == "info"
        assert event["logger"] == "rundeck_spine.test"
        assert "@timestamp" in event

    def test_debug_suppressed_at_info(self, capsys):
        configure_logging(level="INFO", json_format=True)
        get_logger("t").debug("hidden")
        assert _events(capsys.readouterr().err) == []


class TestContext:
    def test_log_context_binds_and_unbinds(self, capsys):
        configure_logging(level="INFO", json_format=True)
        logger = get_logger("t")
        with LogContext(project="infra"):
            logger.info("inside")
        logger.info("outside")

        inside, outside = _events(capsys.readouterr().err)
        assert inside["project"] == "infra"
        assert "project" not in outside

    def test_clear_context(self, capsys):
        configure_logging(level="INFO", json_format=True)
        bind_context(job_id="j-1")
        clear_context()
        get_logger("t").info("after_clear")
        (event,) = _events(capsys.readouterr().err)
        assert "job_id" not in event


class TestGetLogger:
    def test_package_imports_without_configuration(self):
        result = subprocess.run(
            [sys.executable, "-c", "import rundeck_spine, rundeck_spine.cli"],
            capture_output=True,
            text=True,
            env={**os.environ, "PYTHONPATH": str(SRC_DIR)},
        )
        assert result.returncode == 0, result.stderr

    def test_named_logger_usable_before_configure(self, capsys):
        structlog.reset_defaults()
        get_logger("rundeck_spine.early").info("before_configure")
        assert "before_configure" in capsys.readouterr().out

    def test_module_logger_follows_later_configuration(self, capsys):
        logger = get_logger("rundeck_spine.late")
        configure_logging(level="INFO", json_format=True)
        logger.info("after_configure")
        (event,) = _events(capsys.readouterr().err)
        assert event["logger"] == "rundeck_spine.late"
