"""
Diagnostic logging settings.

Handles:
- YAML settings file loading (sync + async)
- Environment variable overrides for level and format
- Building the registry override lookup from configured overrides
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

import aiofiles
import structlog
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from diaglog.core.domain.enums import LogActive
from diaglog.core.domain.errors import ConfigError
from diaglog.infrastructure.overrides.registry_lookup import RegistryOverrideLookup

logger = structlog.get_logger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class DiagnosticLoggingSettings(BaseModel):
    """Schema for the diagnostic logging configuration."""

    model_config = ConfigDict(extra="forbid")

    log_level: str = Field(
        "INFO",
        description="Minimum level passed to the log sink",
    )
    log_format: Literal["console", "json"] = Field(
        "console",
        description="Renderer used for emitted records",
    )
    default_class_state: LogActive = Field(
        LogActive.OFF,
        description="State inherited by classes without a class-level override",
    )
    overrides: dict[str, LogActive] = Field(
        default_factory=dict,
        description="Static overrides keyed by qualified name",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: Any) -> str:
        level = str(value).upper()
        if level == "WARN":
            level = "WARNING"
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {value}")
        return level

    def build_registry(self) -> RegistryOverrideLookup:
        return RegistryOverrideLookup(self.overrides)


def _apply_settings(raw: Any, source: str) -> DiagnosticLoggingSettings:
    """Validate a parsed YAML document.

    Accepts either the settings mapping itself or a document with a top-level
    ``diagnostic_logging`` section.

    Raises:
        ConfigError: If the document is empty or fails validation.
    """
    if raw is None:
        raise ConfigError(f"Config file is empty or invalid: {source}")
    if not isinstance(raw, dict):
        raise ConfigError(f"Config root must be a mapping: {source}")

    section = raw.get("diagnostic_logging", raw)
    try:
        settings = DiagnosticLoggingSettings.model_validate(section)
    except ValidationError as exc:
        raise ConfigError(
            f"Invalid diagnostic logging config: {source}",
            details={"errors": exc.errors(include_url=False)},
        ) from exc

    logger.debug(
        "diagnostic_logging_config_loaded",
        source=source,
        log_level=settings.log_level,
        override_count=len(settings.overrides),
    )
    return settings


def _resolve_path(path: str | Path) -> Path:
    config_file = Path(path)
    if not config_file.exists():
        raise FileNotFoundError(f"Diagnostic logging config not found: {path}")
    return config_file


def load_settings(path: str | Path) -> DiagnosticLoggingSettings:
    """Load settings from a YAML file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigError: If the file is empty or invalid.
    """
    config_file = _resolve_path(path)
    with open(config_file, encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    return _apply_settings(raw, str(config_file))


async def load_settings_async(path: str | Path) -> DiagnosticLoggingSettings:
    """Load settings from a YAML file without blocking the event loop."""
    config_file = _resolve_path(path)
    async with aiofiles.open(config_file, encoding="utf-8") as f:
        raw = yaml.safe_load(await f.read())
    return _apply_settings(raw, str(config_file))


def settings_from_env(base: DiagnosticLoggingSettings | None = None) -> DiagnosticLoggingSettings:
    """Apply ``DIAGLOG_LOGLEVEL`` (or ``LOGLEVEL``) and ``DIAGLOG_LOG_FORMAT``.

    Args:
        base: Settings to start from; defaults are used when omitted.

    Raises:
        ConfigError: If an environment value is invalid.
    """
    values = (base or DiagnosticLoggingSettings()).model_dump()

    loglevel = os.getenv("DIAGLOG_LOGLEVEL") or os.getenv("LOGLEVEL")
    if loglevel:
        values["log_level"] = loglevel
    log_format = os.getenv("DIAGLOG_LOG_FORMAT")
    if log_format:
        values["log_format"] = log_format.lower()

    try:
        return DiagnosticLoggingSettings.model_validate(values)
    except ValidationError as exc:
        raise ConfigError(
            "Invalid diagnostic logging environment",
            details={"errors": exc.errors(include_url=False)},
        ) from exc
