"""
Exception hierarchy for the Open5e client.

Every failure raised by the client derives from Open5eError so callers can
catch the whole family at once, or pick out a single kind (bad input,
failed request, malformed response).
"""

from __future__ import annotations

from typing import Any


class Open5eError(Exception):
    """Base exception for all Open5e client errors.

    Attributes:
        message: Human-readable error message
        details: Optional dictionary of additional error context
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidInputError(Open5eError, ValueError):
    """Caller supplied an argument the client refuses to send.

    Raised before any request is made, e.g. for an empty slug or a
    `limit` outside 1..5000.
    """
    pass


class TransportError(Open5eError):
    """The request failed or the service answered with an error status.

    Attributes:
        url: URL that was requested
        status_code: HTTP status code, or None if no response was received
        slug: Slug that was requested (single-record lookups only)
    """

    def __init__(
        self,
        message: str,
        url: str,
        status_code: int | None = None,
        slug: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details)
        self.url = url
        self.status_code = status_code
        self.slug = slug


class SchemaValidationError(Open5eError, ValueError):
    """A response body did not match the expected shape.

    Attributes:
        errors: List of ``{"loc", "msg", "type"}`` dicts, one per failing field
        index: Position of the failing record in a list response, if any
    """

    def __init__(
        self,
        message: str,
        errors: list[dict[str, Any]] | None = None,
        index: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details)
        self.errors = errors or []
        self.index = index

    def at_index(self, index: int) -> "SchemaValidationError":
        """Return a copy of this error located at ``results[index]``."""
        return SchemaValidationError(
            f"Error while parsing results[{index}]: {self.message}",
            errors=self.errors,
            index=index,
            details=self.details,
        )


__all__ = [
    "Open5eError",
    "InvalidInputError",
    "TransportError",
    "SchemaValidationError",
]
