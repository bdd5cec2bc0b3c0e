"""Tests for logging setup and settings validation."""

from loguru import logger

from mealspin.config.settings import Settings
from mealspin.core.logger import setup_logger


def test_setup_logger_writes_file(tmp_path):
    log_file = tmp_path / "logs" / "mealspin.log"

    setup_logger(level="DEBUG", log_file=str(log_file))
    logger.debug("Slot resolved", category="soup")
    logger.complete()

    assert log_file.exists()
    text = log_file.read_text()
    assert "Slot resolved" in text
    assert "'category': 'soup'" in text

    # Restore console-only logging for other tests
    setup_logger(level="INFO")


def test_log_level_normalized(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    assert Settings().log_level == "DEBUG"


def test_invalid_log_level_defaults_to_info(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "chatty")
    assert Settings().log_level == "INFO"


def test_database_url_from_environment(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite:///:memory:")
    assert Settings().database_url == "sqlite:///:memory:"


def test_default_database_url_is_absolute_sqlite(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    url = Settings().database_url
    assert url.startswith("sqlite:///")
    assert url.endswith("mealspin.db")


def test_no_repeat_default_from_environment(monkeypatch):
    monkeypatch.setenv("MEALSPIN_NO_REPEAT_ACROSS_WEEK", "true")
    assert Settings().default_no_repeat_across_week is True
