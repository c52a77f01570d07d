"""Fetch, validate, and observe a remote recipe catalog."""

from recipe_catalog.factory import (
    catalog_lifespan,
    create_catalog_client,
    create_catalog_store,
)
from recipe_catalog.services.catalog import (
    EmptyRecipesError,
    InvalidDataError,
    NetworkError,
    Recipe,
    RecipeCatalogClient,
    RecipeCatalogError,
)
from recipe_catalog.state import CatalogPhase, CatalogSnapshot, RecipeCatalogStore


__version__ = "0.1.0"

__all__ = [
    "CatalogPhase",
    "CatalogSnapshot",
    "EmptyRecipesError",
    "InvalidDataError",
    "NetworkError",
    "Recipe",
    "RecipeCatalogClient",
    "RecipeCatalogError",
    "RecipeCatalogStore",
    "catalog_lifespan",
    "create_catalog_client",
    "create_catalog_store",
]
