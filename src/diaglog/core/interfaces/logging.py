"""
Log sink protocol.

The recorder emits exactly one informational event per logged phase, so the
sink only has to provide ``info``. structlog bound loggers conform.
"""

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Sink for diagnostic invocation records."""

    def info(self, event: str, **kwargs: Any) -> None:
        """Emit an informational record."""
        ...
