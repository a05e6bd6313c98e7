"""Tests for environment-backed settings."""

from decimal import Decimal
from pathlib import Path

import pytest

from stockledger.config import Settings
from stockledger.logging_config import configure_logging

_VARS = [
    "STOCKLEDGER_DATA_DIR",
    "STOCKLEDGER_DEFAULT_MIN_STOCK",
    "STOCKLEDGER_LOCK_TIMEOUT",
    "STOCKLEDGER_MAX_RETRIES",
    "STOCKLEDGER_RETRY_BACKOFF",
    "STOCKLEDGER_NOTES_MAX_LENGTH",
    "STOCKLEDGER_HISTORY_PAGE_SIZE",
    "STOCKLEDGER_LOG_LEVEL",
    "STOCKLEDGER_LOG_JSON",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


class TestSettings:

    def test_defaults(self):
        settings = Settings.from_env()
        assert settings.data_dir == Path("data")
        assert settings.default_min_stock == Decimal("10")
        assert settings.max_retries == 3
        assert settings.notes_max_length == 500
        assert settings.history_page_size == 100
        assert settings.log_level == "INFO"
        assert settings.log_json is False

    def test_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("STOCKLEDGER_DATA_DIR", str(tmp_path))
        monkeypatch.setenv("STOCKLEDGER_DEFAULT_MIN_STOCK", "2.5")
        monkeypatch.setenv("STOCKLEDGER_LOCK_TIMEOUT", "0.5")
        monkeypatch.setenv("STOCKLEDGER_LOG_LEVEL", "debug")
        monkeypatch.setenv("STOCKLEDGER_LOG_JSON", "TRUE")

        settings = Settings.from_env()
        assert settings.data_dir == tmp_path
        assert settings.default_min_stock == Decimal("2.5")
        assert settings.lock_timeout == 0.5
        assert settings.log_level == "DEBUG"
        assert settings.log_json is True

    @pytest.mark.parametrize(
        "name, value, message",
        [
            ("STOCKLEDGER_DEFAULT_MIN_STOCK", "ten", "must be a number"),
            ("STOCKLEDGER_DEFAULT_MIN_STOCK", "NaN", "finite"),
            ("STOCKLEDGER_DEFAULT_MIN_STOCK", "-1", "cannot be negative"),
            ("STOCKLEDGER_MAX_RETRIES", "3.5", "must be an integer"),
            ("STOCKLEDGER_LOCK_TIMEOUT", "0", "must be positive"),
            ("STOCKLEDGER_HISTORY_PAGE_SIZE", "0", "at least 1"),
        ],
    )
    def test_invalid_values(self, monkeypatch, name, value, message):
        monkeypatch.setenv(name, value)
        with pytest.raises(ValueError, match=message):
            Settings.from_env()


class TestConfigureLogging:

    def test_unknown_level_rejected(self):
        with pytest.raises(ValueError, match="Unknown log level"):
            configure_logging("CHATTY")
