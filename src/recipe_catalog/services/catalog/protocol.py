"""Recipe catalog client protocol.

Defines the interface the store depends on, so the HTTP client can be
swapped for an in-memory fake in tests and previews.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable


if TYPE_CHECKING:
    from recipe_catalog.services.catalog.schemas import Recipe


@runtime_checkable
class RecipeCatalogProtocol(Protocol):
    """Anything that can fetch the recipe catalog from an endpoint."""

    async def fetch_recipes(self, endpoint: str) -> list[Recipe]:
        """Fetch and validate every recipe served at ``endpoint``.

        Raises:
            InvalidDataError: Endpoint or payload is malformed.
            EmptyRecipesError: The payload holds zero recipes.
            NetworkError: Transport fault or non-2xx response.
        """
        ...
