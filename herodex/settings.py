"""Centralized configuration management for Herodex."""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import Field, PrivateAttr
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables defined in a local .env file before instantiating the
# settings singleton so CLI invocations and library consumers see the same values.
load_dotenv()

# -- Application-wide constants -------------------------------------------------

DEFAULT_API_BASE_URL = "https://akabab.github.io/superhero-api/api"
ALL_HEROES_PATH = "all.json"
DEFAULT_FAVORITES_KEY = "FavoriteHeroes"
DEFAULT_FAVORITES_PATH = Path("~/.herodex/favorites.json")
DEFAULT_REDIS_URL = "redis://localhost:6379/0"
DEFAULT_SEARCH_DEBOUNCE_SECONDS = 0.3
DEFAULT_LOG_LEVEL = "INFO"

StorageBackend = Literal["file", "memory", "redis"]


class AppSettings(BaseSettings):
    """Typed configuration surface built on top of ``pydantic-settings``.

    Only a handful of knobs exist: where the catalog lives, where favorites are
    persisted, and how eagerly search input is filtered. Helper properties expose
    derived values so callers never re-implement URL joining or level parsing.
    """

    _explicit_redis_url: bool = PrivateAttr(default=False)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    def __init__(self, **values: object) -> None:
        """Capture explicit overrides prior to delegating to ``BaseSettings``."""

        normalized_keys = {str(key).lower() for key in values}
        super().__init__(**values)
        self._explicit_redis_url = "redis_url" in normalized_keys
        redis_env = os.getenv("REDIS_URL")
        if redis_env is not None and redis_env.strip():
            self._explicit_redis_url = True

    api_base_url: str = Field(
        default=DEFAULT_API_BASE_URL,
        alias="HERODEX_API_BASE_URL",
        description="Base URL of the superhero API; the catalog lives at <base>/all.json.",
    )
    request_timeout_seconds: float | None = Field(
        default=None,
        alias="HERODEX_REQUEST_TIMEOUT_SECONDS",
        description=(
            "Optional timeout override for catalog requests. Left unset, the"
            " httpx default applies."
        ),
    )
    storage_backend: StorageBackend = Field(
        default="file",
        alias="HERODEX_STORAGE_BACKEND",
        description="Key-value backend holding favorites: file, memory or redis.",
    )
    favorites_path: Path = Field(
        default=DEFAULT_FAVORITES_PATH,
        alias="HERODEX_FAVORITES_PATH",
        description="JSON file used by the file storage backend.",
    )
    favorites_key: str = Field(
        default=DEFAULT_FAVORITES_KEY,
        alias="HERODEX_FAVORITES_KEY",
        description="Storage key under which the encoded favorites list is written.",
    )
    redis_url: str = Field(
        default=DEFAULT_REDIS_URL,
        alias="REDIS_URL",
        description="Redis connection string consumed by the redis storage backend.",
    )
    search_debounce_seconds: float = Field(
        default=DEFAULT_SEARCH_DEBOUNCE_SECONDS,
        alias="HERODEX_SEARCH_DEBOUNCE_SECONDS",
        ge=0,
        description="Quiet period a search query must stay stable before filtering.",
    )
    log_level: str = Field(
        default=DEFAULT_LOG_LEVEL,
        alias="LOG_LEVEL",
        description="Root logging level (e.g. INFO, DEBUG, WARNING).",
    )

    @property
    def all_heroes_url(self) -> str:
        """Return the catalog endpoint derived from ``api_base_url``."""

        return f"{self.api_base_url.rstrip('/')}/{ALL_HEROES_PATH}"

    @property
    def resolved_favorites_path(self) -> Path:
        """Return ``favorites_path`` with ``~`` expanded."""

        return self.favorites_path.expanduser()

    @property
    def log_level_numeric(self) -> int:
        """Translate ``log_level`` into the numeric constant expected by logging."""

        candidate = logging.getLevelName(self.log_level.upper())
        if isinstance(candidate, int):
            return candidate
        return logging.INFO

    def optional_config_warnings(self) -> list[str]:
        """Return human-readable warnings for unset optional configuration."""

        warnings: list[str] = []

        if self.storage_backend == "memory":
            warnings.append(
                "HERODEX_STORAGE_BACKEND is 'memory' - favorites will not survive "
                "a restart"
            )
        elif self.storage_backend == "redis" and not self._explicit_redis_url:
            warnings.append(
                "REDIS_URL is not set - the redis storage backend will connect to "
                f"{DEFAULT_REDIS_URL}"
            )

        return warnings


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Return a cached instance of :class:`AppSettings`."""

    return AppSettings()


settings = get_settings()

__all__ = [
    "ALL_HEROES_PATH",
    "AppSettings",
    "DEFAULT_API_BASE_URL",
    "DEFAULT_FAVORITES_KEY",
    "DEFAULT_FAVORITES_PATH",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_REDIS_URL",
    "DEFAULT_SEARCH_DEBOUNCE_SECONDS",
    "StorageBackend",
    "get_settings",
    "settings",
]
