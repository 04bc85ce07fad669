"""
Log sink setup.

Configures structlog so that context bound with
``structlog.contextvars.bound_contextvars`` is merged into each record.
The diagnostic recorder relies on this to attach its structured fields.
"""

from __future__ import annotations

import logging

import structlog
from structlog.typing import Processor

from diaglog.infrastructure.config import DiagnosticLoggingSettings

log_level_map = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def build_processors(log_format: str) -> list[Processor]:
    """Return the processor chain for the given output format."""
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer(default=str))
    else:
        processors.append(structlog.dev.ConsoleRenderer())
    return processors


def configure_logging(settings: DiagnosticLoggingSettings | None = None) -> None:
    """Configure stdlib logging and structlog from settings."""
    settings = settings or DiagnosticLoggingSettings()
    log_level = log_level_map.get(settings.log_level, logging.INFO)

    logging.basicConfig(level=log_level, format="%(message)s")

    structlog.configure(
        processors=build_processors(settings.log_format),
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
    )
