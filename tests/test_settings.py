"""Tests for settings and logging setup."""

import logging
from pathlib import Path

import pytest

from moneylog import log
from moneylog.log import LOGGER_NAME, configure_logging
from moneylog.settings import Settings, default_database_path


def test_settings_defaults(monkeypatch):
    for name in ("MONEYLOG_DB_PATH", "MONEYLOG_CURRENCY", "MONEYLOG_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings.from_env()

    assert settings.database_path == default_database_path()
    assert Path(settings.database_path).name == "moneylog.db"
    assert settings.currency_code == "USD"
    assert settings.log_level == "WARNING"


def test_settings_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("MONEYLOG_DB_PATH", str(tmp_path / "x.db"))
    monkeypatch.setenv("MONEYLOG_CURRENCY", " eur ")
    monkeypatch.setenv("MONEYLOG_LOG_LEVEL", "debug")

    settings = Settings.from_env()

    assert settings.database_path == str(tmp_path / "x.db")
    assert settings.currency_code == "EUR"
    assert settings.log_level == "DEBUG"


def test_configure_logging_does_not_duplicate_handlers():
    logger = configure_logging("INFO")
    handlers = len(logger.handlers)

    configure_logging("DEBUG")

    assert logger.name == LOGGER_NAME
    assert len(logger.handlers) == handlers
    assert logger.level == logging.DEBUG


def test_configure_logging_reuses_its_handler():
    logger = configure_logging("INFO")
    handler = log._handler
    logger.removeHandler(handler)

    configure_logging("INFO")

    assert log._handler is handler
    assert logger.handlers.count(handler) == 1


def test_configure_logging_rejects_unknown_level():
    with pytest.raises(ValueError, match="Unknown log level"):
        configure_logging("LOUD")
