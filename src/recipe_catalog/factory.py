"""Factories for wiring the catalog client and store.

Nothing here is a process-wide singleton: each call builds a fresh
client and store from the given (or cached) settings.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from recipe_catalog.core.config import Settings, get_settings
from recipe_catalog.observability.logging import get_logger, setup_logging
from recipe_catalog.services.catalog.client import RecipeCatalogClient
from recipe_catalog.state.store import RecipeCatalogStore


if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    import httpx

    from recipe_catalog.services.catalog.protocol import RecipeCatalogProtocol


logger = get_logger(__name__)


def create_catalog_client(
    settings: Settings | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> RecipeCatalogClient:
    """Create an uninitialized catalog client."""
    return RecipeCatalogClient(settings=settings or get_settings(), http_client=http_client)


def create_catalog_store(
    service: RecipeCatalogProtocol,
    settings: Settings | None = None,
) -> RecipeCatalogStore:
    """Create a store that fetches from the configured catalog URL."""
    if settings is None:
        settings = get_settings()
    return RecipeCatalogStore(service, endpoint=settings.catalog.url)


@asynccontextmanager
async def catalog_lifespan(
    settings: Settings | None = None,
    *,
    configure_logging: bool = True,
    http_client: httpx.AsyncClient | None = None,
) -> AsyncIterator[RecipeCatalogStore]:
    """Own a client for the duration of the block and yield a store.

    Args:
        settings: Settings override. If not provided, uses get_settings().
        configure_logging: Install Loguru sinks from ``settings.logging``.
        http_client: Optional pre-built HTTP client, left open on exit.
    """
    if settings is None:
        settings = get_settings()

    if configure_logging:
        setup_logging(
            log_level=settings.logging.level,
            log_format=settings.logging.format,
            is_development=settings.is_development,
            log_file=settings.logging.file,
        )

    logger.info(
        "Starting recipe catalog",
        app_name=settings.app.name,
        environment=settings.APP_ENV,
    )

    client = create_catalog_client(settings, http_client=http_client)
    await client.initialize()
    try:
        yield create_catalog_store(client, settings)
    finally:
        await client.shutdown()
        logger.info("Recipe catalog stopped")
