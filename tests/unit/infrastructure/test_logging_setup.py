"""Unit tests for structlog sink configuration."""

from __future__ import annotations

import json

import structlog

from diaglog.infrastructure.config import DiagnosticLoggingSettings
from diaglog.infrastructure.logging import build_processors, configure_logging


class TestBuildProcessors:
    """Tests for build_processors()."""

    def test_merges_bound_context_first(self):
        processors = build_processors("console")

        assert processors[0] is structlog.contextvars.merge_contextvars
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_json_renderer(self):
        processors = build_processors("json")

        assert isinstance(processors[-1], structlog.processors.JSONRenderer)


class TestConfigureLogging:
    """Tests for configure_logging()."""

    def test_json_output_contains_bound_fields(self, capsys):
        configure_logging(DiagnosticLoggingSettings(log_format="json"))
        structlog.configure(logger_factory=structlog.PrintLoggerFactory())

        with structlog.contextvars.bound_contextvars(Source="diagnostic-a.B.c"):
            structlog.get_logger().info("diagnostic-a.B.c invocation started")

        record = json.loads(capsys.readouterr().out.strip())
        assert record["Source"] == "diagnostic-a.B.c"
        assert record["level"] == "info"
        assert record["event"] == "diagnostic-a.B.c invocation started"
        assert "timestamp" in record

    def test_level_filtering(self, capsys):
        configure_logging(DiagnosticLoggingSettings(log_format="json", log_level="WARNING"))
        structlog.configure(logger_factory=structlog.PrintLoggerFactory())

        structlog.get_logger().info("hidden")

        assert capsys.readouterr().out == ""
