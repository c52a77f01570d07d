"""Recipe catalog client exceptions.

This module defines the outcomes the catalog client reports besides a
non-empty list of recipes. The store maps each of them onto a state
transition: ``EmptyRecipesError`` is an expected empty result, the
other two are failures shown to the user.
"""

from __future__ import annotations


class RecipeCatalogError(Exception):
    """Base exception for recipe catalog client errors."""


class InvalidDataError(RecipeCatalogError):
    """Raised when the endpoint or the payload cannot be trusted.

    Covers an unparseable endpoint, a body that is not the expected JSON
    envelope, and records that fail the non-empty ``cuisine``/``name``
    check. Decoding diagnostics are kept on ``__cause__`` only.
    """

    def __init__(self, message: str = "The recipe data is invalid.") -> None:
        super().__init__(message)


class EmptyRecipesError(RecipeCatalogError):
    """Raised when a well-formed response contains zero recipes."""

    def __init__(self, message: str = "The recipe catalog is empty.") -> None:
        super().__init__(message)


class NetworkError(RecipeCatalogError):
    """Raised for transport faults and non-2xx responses.

    Wraps anything the client did not classify more precisely. For a
    status error the message names the status; otherwise it is the
    description of the underlying fault.
    """

    def __init__(
        self,
        cause: BaseException,
        status_code: int | None = None,
    ) -> None:
        self.cause = cause
        self.status_code = status_code
        if status_code is not None:
            message = f"The recipe catalog responded with HTTP {status_code}."
        else:
            message = str(cause) or type(cause).__name__
        super().__init__(message)
