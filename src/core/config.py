"""Core configuration.

Why here:
- Centralizes environment variables (pydantic-settings) away from the CLI.
- Lets adapters (HTTP) and services (debounce timing) read config consistently.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_BASE_URL = "https://rickandmortyapi.com/api/character"


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no extra dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "character-browser"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "character-browser"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "character-browser"
    return Path.home() / ".config" / "character-browser"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Central application settings.

    Why pydantic-settings:
    - Typed and validated at the edge (env vars) without leaking into the core.
    - A single configuration contract for CLI, adapters and services.
    """

    model_config = SettingsConfigDict(
        env_prefix="CHARACTER_BROWSER_",
        extra="ignore",
        case_sensitive=False,
        # Project .env first (dev), then the per-user one.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    api_base_url: str = Field(
        default=DEFAULT_API_BASE_URL,
        min_length=8,
        description="Endpoint of the character collection.",
    )
    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout per request (seconds).",
    )
    user_agent: str = Field(
        default="character-browser/0.1 (+https://local)",
        min_length=1,
        description="User-Agent sent with every request.",
    )
    search_debounce_seconds: float = Field(
        default=0.2,
        ge=0,
        description="Quiet period before a search term is considered settled (seconds).",
    )
    log_level: str = Field(
        default="WARNING",
        min_length=1,
        description="Root log level used by the CLI (DEBUG, INFO, WARNING, ...).",
    )
