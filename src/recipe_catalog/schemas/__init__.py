"""Shared Pydantic schema bases."""

from recipe_catalog.schemas.base import DownstreamResponse


__all__ = ["DownstreamResponse"]
