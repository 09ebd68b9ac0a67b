from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from contest_standings.settings import Settings, configure_logging

_NAMES = [
    "STANDINGS_PODIUM_PLACES",
    "STANDINGS_UNRANKED_LABEL",
    "STANDINGS_UNAVAILABLE_LABEL",
    "STANDINGS_TIME_FORMAT",
    "STANDINGS_DISPLAY_TIMEZONE",
    "STANDINGS_MAX_WORKERS",
    "STANDINGS_LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    # setenv してから消すことで、.env から読み込まれた値もテスト後に戻る
    for name in _NAMES:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


def test_defaults_without_environment():
    s = Settings.from_env()
    assert s.podium_places == 3
    assert s.unranked_label == "-"
    assert s.unavailable_label == "N/A"
    assert s.max_workers == 4
    assert s.log_level == "INFO"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("STANDINGS_PODIUM_PLACES", "1")
    monkeypatch.setenv("STANDINGS_LOG_LEVEL", " debug ")

    s = Settings.from_env()
    assert s.podium_places == 1
    assert s.log_level == "DEBUG"


def test_dotenv_file_does_not_override_environment(tmp_path, monkeypatch):
    """config/.env は実行環境の値を上書きしない。"""

    (tmp_path / "config").mkdir()
    (tmp_path / "config" / ".env").write_text(
        "STANDINGS_MAX_WORKERS=8\nSTANDINGS_UNRANKED_LABEL=DQ\n", encoding="utf-8"
    )
    monkeypatch.setenv("STANDINGS_UNRANKED_LABEL", "x")

    s = Settings.from_env(tmp_path)
    assert s.max_workers == 8
    assert s.unranked_label == "x"


def test_invalid_values_fail_fast(monkeypatch):
    monkeypatch.setenv("STANDINGS_MAX_WORKERS", "0")
    with pytest.raises(ValidationError):
        Settings.from_env()

    monkeypatch.setenv("STANDINGS_MAX_WORKERS", "2")
    monkeypatch.setenv("STANDINGS_LOG_LEVEL", "LOUD")
    with pytest.raises(ValidationError):
        Settings.from_env()


def test_configure_logging_is_idempotent():
    logger = configure_logging("DEBUG")
    handlers = list(logger.handlers)
    assert configure_logging("WARNING") is logger
    assert logger.handlers == handlers
    assert logger.level == logging.WARNING


def test_display_timezone_from_environment(monkeypatch):
    assert Settings.from_env().display_timezone == "UTC"

    monkeypatch.setenv("STANDINGS_DISPLAY_TIMEZONE", "Asia/Kolkata")
    assert Settings.from_env().display_timezone == "Asia/Kolkata"

    monkeypatch.setenv("STANDINGS_DISPLAY_TIMEZONE", "Mars/Olympus")
    with pytest.raises(ValidationError):
        Settings.from_env()
