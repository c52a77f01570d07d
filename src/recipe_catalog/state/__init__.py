"""Observable catalog state."""

from recipe_catalog.state.models import CatalogPhase, CatalogSnapshot
from recipe_catalog.state.store import MALFORMED_DATA_MESSAGE, RecipeCatalogStore


__all__ = [
    "MALFORMED_DATA_MESSAGE",
    "CatalogPhase",
    "CatalogSnapshot",
    "RecipeCatalogStore",
]
