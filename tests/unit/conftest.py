"""Shared fixtures for unit tests."""

from __future__ import annotations

import os

import pytest

from betterbullets.config import Settings, get_settings

_SETTINGS_ENV_PREFIXES = ("FORMATTING__", "SYMBOLS__", "EDITOR__", "APP__")


@pytest.fixture(autouse=True)
def _isolated_settings_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop settings env vars from the developer shell and reset the cache."""
    for key in list(os.environ):
        if key.startswith(_SETTINGS_ENV_PREFIXES):
            monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """Default settings, without reading any .env file."""
    return Settings(_env_file=None)  # type: ignore[call-arg]
