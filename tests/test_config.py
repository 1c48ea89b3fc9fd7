from __future__ import annotations

import plistlib
from pathlib import Path

import pytest

from cocktailnet.config import PUBLIC_TEST_API_KEY, Settings, get_settings, resolve_api_key
from cocktailnet.errors import ConfigurationError


def _settings_without_key(monkeypatch: pytest.MonkeyPatch, **overrides) -> Settings:
    monkeypatch.delenv("COCKTAIL_API_KEY", raising=False)
    monkeypatch.delenv("COCKTAIL_API_KEY_FILE", raising=False)
    return Settings(_env_file=None, **overrides)


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    settings = _settings_without_key(monkeypatch)
    assert settings.api_base_url == "https://www.thecocktaildb.com/api/json/v1"
    assert settings.http_timeout_seconds == 10.0
    assert settings.api_key is None


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("COCKTAIL_API_KEY", "abc123")
    monkeypatch.setenv("HTTP_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("IMAGE_CACHE_MAX_ENTRIES", "12")

    settings = Settings(_env_file=None)

    assert settings.api_key == "abc123"
    assert settings.http_timeout_seconds == 2.5
    assert settings.image_cache_max_entries == 12
    assert resolve_api_key(settings) == "abc123"


def test_export_safe_hides_key() -> None:
    settings = Settings(api_key="very-secret", _env_file=None)
    exported = settings.export_safe()
    assert exported["api_key_configured"] is True
    assert "very-secret" not in str(exported)


def test_missing_key_is_a_configuration_error(monkeypatch: pytest.MonkeyPatch) -> None:
    settings = _settings_without_key(monkeypatch)
    with pytest.raises(ConfigurationError, match="No API key configured"):
        resolve_api_key(settings)


def test_key_is_read_from_plist(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    path = tmp_path / "APIKey.plist"
    path.write_bytes(plistlib.dumps({"API_KEY": "  9973533  "}))

    settings = _settings_without_key(monkeypatch, api_key_file=path)

    assert resolve_api_key(settings) == "9973533"


def test_plist_without_key_falls_back_to_public_key(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    path = tmp_path / "APIKey.plist"
    path.write_bytes(plistlib.dumps({"OTHER": "x"}))

    settings = _settings_without_key(monkeypatch, api_key_file=path)

    assert resolve_api_key(settings) == PUBLIC_TEST_API_KEY


def test_missing_plist_is_a_configuration_error(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    settings = _settings_without_key(monkeypatch, api_key_file=tmp_path / "absent.plist")
    with pytest.raises(ConfigurationError, match="not found"):
        resolve_api_key(settings)


def test_unreadable_plist_is_a_configuration_error(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    path = tmp_path / "APIKey.plist"
    path.write_bytes(b"definitely not a plist")
    settings = _settings_without_key(monkeypatch, api_key_file=path)
    with pytest.raises(ConfigurationError, match="could not be read"):
        resolve_api_key(settings)


def test_get_settings_is_cached(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("COCKTAIL_API_KEY", "cached-key")
    get_settings.cache_clear()
    try:
        settings = get_settings()
        assert get_settings() is settings
        assert settings.api_key == "cached-key"
    finally:
        get_settings.cache_clear()
