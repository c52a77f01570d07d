"""Remote recipe catalog client module."""

from recipe_catalog.services.catalog.client import RecipeCatalogClient
from recipe_catalog.services.catalog.exceptions import (
    EmptyRecipesError,
    InvalidDataError,
    NetworkError,
    RecipeCatalogError,
)
from recipe_catalog.services.catalog.protocol import RecipeCatalogProtocol
from recipe_catalog.services.catalog.schemas import Recipe, RecipeEnvelope


__all__ = [
    "EmptyRecipesError",
    "InvalidDataError",
    "NetworkError",
    "Recipe",
    "RecipeCatalogClient",
    "RecipeCatalogError",
    "RecipeCatalogProtocol",
    "RecipeEnvelope",
]
