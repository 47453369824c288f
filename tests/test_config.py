"""Settings and logging setup tests."""

import importlib
import logging

import pytest
from pydantic import ValidationError

from cranksmith.core import logging as engine_logging
from cranksmith.core.config import Settings, get_settings
from cranksmith.core.enums import SpeedUnit


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("SPEED_UNIT", raising=False)
        monkeypatch.delenv("CADENCE_RPM", raising=False)
        settings = Settings(_env_file=None)
        assert settings.speed_unit == SpeedUnit.MPH
        assert settings.cadence_rpm == 90
        assert settings.log_level == "INFO"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("SPEED_UNIT", "km/h")
        monkeypatch.setenv("CADENCE_RPM", "85")
        settings = Settings(_env_file=None)
        assert settings.speed_unit == SpeedUnit.KMH
        assert settings.cadence_rpm == 85

    def test_cadence_must_be_positive(self, monkeypatch):
        monkeypatch.setenv("CADENCE_RPM", "0")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_unknown_unit_rejected(self, monkeypatch):
        monkeypatch.setenv("SPEED_UNIT", "knots")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


class TestLoggingSetup:
    def test_import_does_not_read_settings(self, monkeypatch):
        monkeypatch.setenv("CADENCE_RPM", "0")
        get_settings.cache_clear()
        try:
            importlib.reload(engine_logging)
            assert engine_logging.logger.name == "cranksmith"
        finally:
            monkeypatch.undo()
            get_settings.cache_clear()

    def test_setup_logging_sets_level_without_duplicate_handlers(self):
        logger = engine_logging.setup_logging("DEBUG")
        handlers = len(logger.handlers)
        try:
            assert logger.level == logging.DEBUG
            assert len(engine_logging.setup_logging("DEBUG").handlers) == handlers
        finally:
            engine_logging.setup_logging("INFO")
