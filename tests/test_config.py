from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from cli.log_setup import parse_level
from core.config import DEFAULT_API_BASE_URL, AppSettings, get_user_config_dir


def test_defaults(monkeypatch) -> None:
    for key in ("API_BASE_URL", "SEARCH_DEBOUNCE_SECONDS", "LOG_LEVEL"):
        monkeypatch.delenv(f"CHARACTER_BROWSER_{key}", raising=False)

    settings = AppSettings()

    assert settings.api_base_url == DEFAULT_API_BASE_URL
    assert settings.search_debounce_seconds == pytest.approx(0.2)
    assert settings.log_level == "WARNING"


def test_env_overrides(monkeypatch) -> None:
    monkeypatch.setenv("CHARACTER_BROWSER_API_BASE_URL", "http://localhost:8080/api/character")
    monkeypatch.setenv("CHARACTER_BROWSER_SEARCH_DEBOUNCE_SECONDS", "0.5")

    settings = AppSettings()

    assert settings.api_base_url == "http://localhost:8080/api/character"
    assert settings.search_debounce_seconds == pytest.approx(0.5)


def test_invalid_values_are_rejected() -> None:
    with pytest.raises(ValidationError):
        AppSettings(http_timeout_seconds=0)
    with pytest.raises(ValidationError):
        AppSettings(search_debounce_seconds=-1)


def test_user_config_dir_honours_xdg(monkeypatch, tmp_path) -> None:
    monkeypatch.setattr("sys.platform", "linux")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

    assert get_user_config_dir() == tmp_path / "character-browser"


def test_parse_level() -> None:
    assert parse_level("debug") == logging.DEBUG
    assert parse_level(" Warning ") == logging.WARNING
    with pytest.raises(ValueError):
        parse_level("chatty")
