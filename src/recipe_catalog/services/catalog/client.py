"""Recipe catalog HTTP client.

This module provides the async client that downloads the remote recipe
catalog, decodes it, and classifies the outcome into recipes or one of
the catalog exceptions.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

import httpx
import orjson
from pydantic import ValidationError

from recipe_catalog.core.config import get_settings
from recipe_catalog.observability.logging import get_logger
from recipe_catalog.services.catalog.exceptions import (
    EmptyRecipesError,
    InvalidDataError,
    NetworkError,
)
from recipe_catalog.services.catalog.schemas import Recipe, RecipeEnvelope


if TYPE_CHECKING:
    from recipe_catalog.core.config import Settings


logger = get_logger(__name__)

# Every request must reach the origin
NO_CACHE_HEADERS: Final[dict[str, str]] = {
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
}


def parse_endpoint(endpoint: str) -> httpx.URL:
    """Parse an endpoint string into an absolute http(s) URL.

    Raises:
        InvalidDataError: If the string is not an absolute http(s) URL.
    """
    try:
        url = httpx.URL(endpoint)
    except (httpx.InvalidURL, TypeError) as e:
        msg = f"Invalid catalog endpoint: {endpoint!r}"
        raise InvalidDataError(msg) from e

    if url.scheme not in ("http", "https") or not url.host:
        msg = f"Invalid catalog endpoint: {endpoint!r}"
        raise InvalidDataError(msg)
    return url


def decode_envelope(content: bytes) -> RecipeEnvelope:
    """Decode a response body into a :class:`RecipeEnvelope`.

    Raises:
        InvalidDataError: For corrupt JSON, missing keys, or wrong types.
    """
    try:
        return RecipeEnvelope.model_validate(orjson.loads(content))
    except (orjson.JSONDecodeError, ValidationError) as e:
        raise InvalidDataError from e


def validate_recipes(recipes: list[Recipe]) -> list[Recipe]:
    """Reject the whole batch if any recipe has an empty cuisine or name.

    Returns the input list unchanged when every recipe passes.
    """
    for index, recipe in enumerate(recipes):
        if not recipe.has_required_text:
            msg = f"Recipe at index {index} ({recipe.id}) has an empty cuisine or name"
            raise InvalidDataError(msg)
    return recipes


class RecipeCatalogClient:
    """HTTP client for the remote recipe catalog.

    Example:
        ```python
        client = RecipeCatalogClient()
        await client.initialize()

        recipes = await client.fetch_recipes(
            "https://d3jbb8n5wk0qxi.cloudfront.net/recipes.json"
        )

        await client.shutdown()
        ```
    """

    def __init__(
        self,
        settings: Settings | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Settings override. Defaults to ``get_settings()``.
            http_client: Pre-built HTTP client. The caller keeps ownership
                and is responsible for closing it.
        """
        self._settings = settings or get_settings()
        self._http_client = http_client
        self._owns_http_client = http_client is None

    @property
    def timeout(self) -> float:
        """Transport timeout in seconds."""
        return self._settings.catalog.timeout

    @property
    def is_initialized(self) -> bool:
        """Whether an HTTP client is available."""
        return self._http_client is not None

    async def initialize(self) -> None:
        """Create the HTTP client if one was not injected."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                follow_redirects=True,
                headers={
                    "Accept": "application/json",
                    "User-Agent": self._settings.catalog.user_agent,
                    **NO_CACHE_HEADERS,
                },
            )
            self._owns_http_client = True
        logger.info("RecipeCatalogClient initialized", timeout=self.timeout)

    async def shutdown(self) -> None:
        """Close the HTTP client if we own it."""
        if self._owns_http_client and self._http_client is not None:
            await self._http_client.aclose()
        if self._owns_http_client:
            self._http_client = None
        logger.debug("RecipeCatalogClient shutdown")

    async def fetch_recipes(self, endpoint: str) -> list[Recipe]:
        """Fetch, decode, and validate the recipes served at ``endpoint``.

        Args:
            endpoint: Absolute URL of the catalog document.

        Returns:
            The validated recipes, in payload order.

        Raises:
            InvalidDataError: Endpoint, JSON, or a recipe is malformed.
            EmptyRecipesError: The payload holds zero recipes.
            NetworkError: Transport fault or status outside 200-299.
        """
        if self._http_client is None:
            msg = "Client not initialized. Call initialize() first."
            raise RuntimeError(msg)

        url = parse_endpoint(endpoint)
        content = await self._get(self._http_client, url)

        envelope = decode_envelope(content)
        if not envelope.recipes:
            logger.debug("Catalog returned no recipes", url=str(url))
            raise EmptyRecipesError

        recipes = validate_recipes(envelope.recipes)
        logger.debug("Catalog fetched", url=str(url), count=len(recipes))
        return recipes

    async def _get(self, http_client: httpx.AsyncClient, url: httpx.URL) -> bytes:
        """Perform the GET and return the body of a 2xx response."""
        logger.debug("Fetching recipe catalog", url=str(url))
        try:
            response = await http_client.get(url, headers=NO_CACHE_HEADERS)
            response.raise_for_status()

        except httpx.HTTPStatusError as e:
            logger.warning(
                "Catalog returned error status",
                url=str(url),
                status_code=e.response.status_code,
            )
            raise NetworkError(e, status_code=e.response.status_code) from e

        except httpx.HTTPError as e:
            logger.warning("Catalog request failed", url=str(url), error=str(e))
            raise NetworkError(e) from e

        except Exception as e:
            # Anything a transport raises outside httpx's hierarchy
            logger.warning("Unexpected catalog transport error", url=str(url))
            raise NetworkError(e) from e

        return response.content
