"""Shared test fixtures and configuration for the recipe catalog tests.

Selects the ``test`` config environment before any settings load, and
resets the cached settings between tests so environment overrides made
with ``monkeypatch`` take effect.
"""

from __future__ import annotations

import os
from collections.abc import Iterator

import pytest
import respx

os.environ.setdefault("APP_ENV", "test")

from recipe_catalog.core.config import Settings, get_settings  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_settings_cache() -> Iterator[None]:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def _no_leaked_respx_routes() -> Iterator[None]:
    """Fail a test that leaves routes on the global respx router."""
    yield
    leaked = list(respx.mock.routes)
    respx.mock.clear()
    assert not leaked, f"Routes left on the global respx router: {leaked}"


@pytest.fixture
def settings() -> Settings:
    """Settings pointing at a fake catalog origin with a short timeout."""
    return Settings(
        catalog={
            "url": "https://catalog.test/recipes.json",
            "timeout": 5.0,
            "user_agent": "recipe-catalog-tests",
        },
        logging={"level": "DEBUG", "format": "text"},
    )


@pytest.fixture
def catalog_url(settings: Settings) -> str:
    return settings.catalog.url
