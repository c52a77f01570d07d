"""Schemas for the remote recipe catalog payload.

The origin serves a single JSON document:

    {"recipes": [{"cuisine": ..., "name": ..., "uuid": ..., ...}, ...]}

Decoding is all-or-nothing: one malformed record fails the envelope.
"""

from __future__ import annotations

from uuid import UUID

from pydantic import Field, HttpUrl

from recipe_catalog.schemas.base import DownstreamResponse


class Recipe(DownstreamResponse):
    """One catalog entry."""

    cuisine: str = Field(..., description="Cuisine the dish belongs to")
    name: str = Field(..., description="Dish name")
    photo_url_large: HttpUrl | None = Field(None, description="Full-size photo")
    photo_url_small: HttpUrl | None = Field(None, description="Thumbnail photo")
    id: UUID = Field(..., alias="uuid", description="Stable identity for diffing")
    source_url: HttpUrl | None = Field(None, description="Original recipe page")
    youtube_url: HttpUrl | None = Field(None, description="Recipe video")

    @property
    def has_required_text(self) -> bool:
        """Whether both ``cuisine`` and ``name`` are non-empty."""
        return bool(self.cuisine) and bool(self.name)


class RecipeEnvelope(DownstreamResponse):
    """Top-level wrapper holding the ordered recipe sequence."""

    recipes: list[Recipe]
