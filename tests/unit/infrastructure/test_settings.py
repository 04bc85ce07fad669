"""Unit tests for diagnostic logging settings."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from diaglog.core.domain.enums import LogActive
from diaglog.core.domain.errors import ConfigError
from diaglog.infrastructure.config import (
    DiagnosticLoggingSettings,
    load_settings,
    load_settings_async,
    settings_from_env,
)


def _write_config(tmp_path: Path, yaml_text: str) -> Path:
    """Write a YAML config to a temp file and return its path."""
    config_file = tmp_path / "diagnostic_logging.yaml"
    config_file.write_text(textwrap.dedent(yaml_text), encoding="utf-8")
    return config_file


STANDARD_CONFIG = """\
    diagnostic_logging:
      log_level: debug
      log_format: json
      default_class_state: "on"
      overrides:
        billing.service.Invoices: "off"
        billing.service.Invoices.charge(card_number): "off"
        billing.service.Invoices.charge->return: "on"
"""


class TestLoadSettings:
    """Tests for load_settings() and load_settings_async()."""

    def test_loads_section(self, tmp_path):
        settings = load_settings(_write_config(tmp_path, STANDARD_CONFIG))

        assert settings.log_level == "DEBUG"
        assert settings.log_format == "json"
        assert settings.default_class_state == LogActive.ON
        assert settings.overrides["billing.service.Invoices"] == LogActive.OFF

    def test_loads_bare_mapping(self, tmp_path):
        settings = load_settings(_write_config(tmp_path, "log_level: warn\n"))

        assert settings.log_level == "WARNING"
        assert settings.overrides == {}

    @pytest.mark.asyncio
    async def test_loads_async(self, tmp_path):
        settings = await load_settings_async(_write_config(tmp_path, STANDARD_CONFIG))

        assert settings.log_format == "json"
        assert len(settings.overrides) == 3

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_settings(tmp_path / "missing.yaml")

    def test_empty_file(self, tmp_path):
        with pytest.raises(ConfigError, match="empty"):
            load_settings(_write_config(tmp_path, ""))

    def test_non_mapping_root(self, tmp_path):
        with pytest.raises(ConfigError, match="mapping"):
            load_settings(_write_config(tmp_path, "- a\n- b\n"))

    def test_invalid_values(self, tmp_path):
        config = """\
            log_level: loud
        """
        with pytest.raises(ConfigError) as exc_info:
            load_settings(_write_config(tmp_path, config))

        assert exc_info.value.code == "config_error"
        assert exc_info.value.details["errors"]

    def test_unknown_keys_rejected(self, tmp_path):
        with pytest.raises(ConfigError):
            load_settings(_write_config(tmp_path, "sink: file\n"))

    def test_build_registry(self, tmp_path):
        settings = load_settings(_write_config(tmp_path, STANDARD_CONFIG))

        registry = settings.build_registry()

        assert len(registry) == 3


class TestSettingsFromEnv:
    """Tests for settings_from_env()."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("DIAGLOG_LOGLEVEL", raising=False)
        monkeypatch.delenv("LOGLEVEL", raising=False)
        monkeypatch.delenv("DIAGLOG_LOG_FORMAT", raising=False)

        settings = settings_from_env()

        assert settings == DiagnosticLoggingSettings()
        assert settings.default_class_state == LogActive.OFF

    def test_package_variable_wins(self, monkeypatch):
        monkeypatch.setenv("LOGLEVEL", "error")
        monkeypatch.setenv("DIAGLOG_LOGLEVEL", "debug")
        monkeypatch.setenv("DIAGLOG_LOG_FORMAT", "JSON")

        settings = settings_from_env()

        assert settings.log_level == "DEBUG"
        assert settings.log_format == "json"

    def test_falls_back_to_loglevel(self, monkeypatch):
        monkeypatch.delenv("DIAGLOG_LOGLEVEL", raising=False)
        monkeypatch.setenv("LOGLEVEL", "error")

        assert settings_from_env().log_level == "ERROR"

    def test_keeps_base_overrides(self, monkeypatch):
        monkeypatch.setenv("DIAGLOG_LOGLEVEL", "info")
        base = DiagnosticLoggingSettings(overrides={"a.B": LogActive.ON})

        assert settings_from_env(base).overrides == {"a.B": LogActive.ON}

    def test_invalid_environment(self, monkeypatch):
        monkeypatch.setenv("DIAGLOG_LOG_FORMAT", "xml")

        with pytest.raises(ConfigError):
            settings_from_env()
