"""Client settings loaded from environment variables.

Configuration file discovery (in priority order):
1. OS environment variables (always highest priority)
2. FINTRACK_ENV_FILE environment variable (path to a .env file)
3. config/.env.dev - local development
4. config/.env - shared defaults

Uses pydantic-settings for automatic type coercion and validation.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _find_project_root() -> Path:
    """Find the project root directory."""
    current = Path(__file__).resolve().parent

    for parent in [current, *current.parents]:
        if (parent / "config").is_dir():
            return parent
        if (parent / "pyproject.toml").is_file():
            return parent

    return Path.cwd()


def get_config_dir() -> Path:
    return _find_project_root() / "config"


def _resolve_env_file_path() -> Path | None:
    """Resolve the .env file path.

    Priority:
    1. FINTRACK_ENV_FILE env var (relative paths resolve against the project root)
    2. config/.env.dev
    3. config/.env
    """
    env_file_path = os.environ.get("FINTRACK_ENV_FILE")
    if env_file_path:
        path = Path(env_file_path)
        if not path.is_absolute():
            path = _find_project_root() / path
        if path.exists():
            return path

    config_dir = get_config_dir()

    dev_env = config_dir / ".env.dev"
    if dev_env.exists():
        return dev_env

    prod_env = config_dir / ".env"
    if prod_env.exists():
        return prod_env

    return None


class Settings(BaseSettings):
    """Client configuration loaded from environment variables.

    Every variable uses the ``FINTRACK_`` prefix, e.g.
    ``FINTRACK_API_BASE_URL`` or ``FINTRACK_LOG_LEVEL``.
    """

    model_config = SettingsConfigDict(
        env_prefix="FINTRACK_",
        env_file=_resolve_env_file_path(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API
    api_base_url: str = "http://localhost:8000/api"
    api_token: SecretStr | None = None  # Bearer token from a previous login
    api_timeout: float = 30.0

    # Cache
    dashboard_refresh_seconds: float = 300.0
    categories_stale_seconds: float = 300.0
    reports_stale_seconds: float = 60.0  # Reports are not invalidated by writes

    # Display
    default_currency: str = "USD"

    # Logging
    log_level: str = "INFO"

    @field_validator("api_base_url")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("api_token", mode="before")
    @classmethod
    def _empty_token_is_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("dashboard_refresh_seconds", "api_timeout")
    @classmethod
    def _positive_interval(cls, v: float) -> float:
        if v <= 0:
            msg = "Intervals must be greater than 0 seconds"
            raise ValueError(msg)
        return v

    @property
    def token_value(self) -> str | None:
        """Plain bearer token, or None when no token is configured."""
        if self.api_token is None:
            return None
        return self.api_token.get_secret_value()


@lru_cache()
def get_settings() -> Settings:
    """Return cached client settings."""
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for tests)."""
    get_settings.cache_clear()
