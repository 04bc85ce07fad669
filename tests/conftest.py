"""Test configuration and shared fixtures."""

from __future__ import annotations

from typing import Any

import pytest
import structlog
from structlog.testing import LogCapture


class RecordingLogger:
    """LoggerProtocol fake that snapshots the bound logging context.

    Each entry holds the level, the event and the contextvars bound at the
    moment of the call.
    """

    def __init__(self) -> None:
        self.logs: list[dict[str, Any]] = []

    def info(self, event: str, **kwargs: Any) -> None:
        self.logs.append(
            {
                "level": "info",
                "event": event,
                "context": structlog.contextvars.get_contextvars(),
                **kwargs,
            }
        )

    def events(self) -> list[str]:
        return [entry["event"] for entry in self.logs]


@pytest.fixture(autouse=True)
def clean_logging_context():
    """Start and finish every test with an empty context and default config."""
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()


@pytest.fixture
def recording_logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def log_capture() -> LogCapture:
    """Capture structlog records with bound context merged in."""
    capture = LogCapture()
    structlog.configure(
        processors=[structlog.contextvars.merge_contextvars, capture],
    )
    return capture
