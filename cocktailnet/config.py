from __future__ import annotations

import plistlib
from functools import lru_cache
from pathlib import Path
from typing import Any

from loguru import logger
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from rich.console import Console

from cocktailnet.errors import ConfigurationError

console = Console()
log = logger.bind(module="config")

__all__ = [
    "API_KEY_PLIST_FIELD",
    "PUBLIC_TEST_API_KEY",
    "Settings",
    "get_settings",
    "resolve_api_key",
]

API_KEY_PLIST_FIELD = "API_KEY"
PUBLIC_TEST_API_KEY = "1"


class Settings(BaseSettings):
    """Centralised application configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    app_name: str = Field(default="CocktailRecipes", alias="APP_NAME")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    api_base_url: str = Field(
        default="https://www.thecocktaildb.com/api/json/v1",
        alias="COCKTAIL_API_BASE_URL",
    )
    api_key: str | None = Field(default=None, alias="COCKTAIL_API_KEY")
    api_key_file: Path | None = Field(default=None, alias="COCKTAIL_API_KEY_FILE")

    http_timeout_seconds: float = Field(default=10.0, gt=0, alias="HTTP_TIMEOUT_SECONDS")
    http_user_agent: str = Field(default="cocktailnet", alias="HTTP_USER_AGENT")
    http_max_workers: int = Field(default=8, ge=1, le=128, alias="HTTP_MAX_WORKERS")

    image_cache_max_entries: int = Field(default=256, ge=1, alias="IMAGE_CACHE_MAX_ENTRIES")
    image_cache_max_bytes: int = Field(default=50 * 1024 * 1024, ge=1, alias="IMAGE_CACHE_MAX_BYTES")
    image_cache_ttl_seconds: float | None = Field(default=None, gt=0, alias="IMAGE_CACHE_TTL_SECONDS")

    def export_safe(self) -> dict[str, Any]:
        """Return non-sensitive settings for debugging/logging."""
        return {
            "app_name": self.app_name,
            "api_base_url": self.api_base_url,
            "api_key_configured": bool((self.api_key or "").strip()),
            "api_key_file": str(self.api_key_file) if self.api_key_file else None,
            "http_timeout_seconds": self.http_timeout_seconds,
            "http_max_workers": self.http_max_workers,
            "image_cache_max_entries": self.image_cache_max_entries,
            "image_cache_max_bytes": self.image_cache_max_bytes,
            "image_cache_ttl_seconds": self.image_cache_ttl_seconds,
        }


def _read_plist_key(path: Path) -> str:
    try:
        with path.open("rb") as fh:
            payload = plistlib.load(fh)
    except FileNotFoundError as exc:
        raise ConfigurationError(f"API key file not found: {path}") from exc
    except (OSError, plistlib.InvalidFileException, ValueError) as exc:
        raise ConfigurationError(f"API key file could not be read: {path} ({exc})") from exc

    if not isinstance(payload, dict):
        raise ConfigurationError(f"API key file must contain a dictionary: {path}")
    value = payload.get(API_KEY_PLIST_FIELD)
    if isinstance(value, str) and value.strip():
        return value.strip()
    log.warning(
        "API key file {} has no {}; falling back to the public test key",
        path,
        API_KEY_PLIST_FIELD,
    )
    return PUBLIC_TEST_API_KEY


def resolve_api_key(settings: Settings) -> str:
    """Return the API key from settings, reading the plist file if needed.

    Raises:
        ConfigurationError: No key is configured or the key file is unusable.
    """

    explicit = (settings.api_key or "").strip()
    if explicit:
        return explicit
    if settings.api_key_file is not None:
        return _read_plist_key(Path(settings.api_key_file).expanduser())
    raise ConfigurationError(
        "No API key configured. Set COCKTAIL_API_KEY or COCKTAIL_API_KEY_FILE.",
    )


@lru_cache
def get_settings() -> Settings:
    """Load and cache application settings."""
    settings = Settings()
    console.log(
        f"[bold green]Loaded settings[/] app={settings.app_name!r} "
        f"api_base_url={settings.api_base_url!r}",
    )
    log.info("Settings initialised: {}", settings.export_safe())
    return settings
