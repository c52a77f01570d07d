"""Base schema configuration for Pydantic models.

Wire payloads from the catalog origin use snake_case keys, so no alias
generator is applied; individual fields declare an alias where the wire
name differs from the attribute name.

Usage:
    - DownstreamResponse: For payloads received from the catalog origin
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class _BaseSchema(BaseModel):
    """Private base schema with common configuration.

    Do not use directly - inherit from one of the public subclasses.
    """

    model_config = ConfigDict(
        populate_by_name=True,  # Accept both attribute and alias names
        serialize_by_alias=True,
        validate_default=True,
    )


class DownstreamResponse(_BaseSchema):
    """Base class for payloads received from the remote catalog.

    Extra keys are ignored so the origin can add properties without
    breaking decoding. Decoded values are immutable.
    """

    model_config = ConfigDict(
        extra="ignore",
        frozen=True,
    )
