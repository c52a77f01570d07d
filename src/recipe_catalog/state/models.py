"""Observable state types for the recipe catalog store."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from recipe_catalog.services.catalog.schemas import Recipe


class CatalogPhase(StrEnum):
    """Phase a presentation layer renders.

    - IDLE: No fetch has completed yet
    - LOADING: A fetch is in flight
    - READY: The last fetch succeeded, possibly with zero recipes
    - ERROR: The last fetch failed; ``error_message`` says why
    """

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class CatalogSnapshot:
    """Point-in-time view of the store's state."""

    recipes: tuple[Recipe, ...]
    is_fetching: bool
    error_message: str | None
    phase: CatalogPhase

    @property
    def is_empty(self) -> bool:
        """Whether a completed fetch left nothing to show."""
        return self.phase is CatalogPhase.READY and not self.recipes
