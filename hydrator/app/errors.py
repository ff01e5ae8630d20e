"""
Error taxonomy for page payload hydration.

Every error raised here is a contract violation between the presenter
that computes a page payload and the adapter that renders it. None of
them is a user-facing runtime condition: they are surfaced immediately,
with no defaulting and no partial render, so that a mismatch is caught
during development or integration.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional


class HydratorError(Exception):
    """Base class for all hydration contract violations."""


class SchemaError(HydratorError):
    """
    Raised when a page payload does not satisfy its declared schema.

    ``errors`` holds one entry per failing field with the keys
    ``loc`` (tuple path), ``msg`` and ``type``. Field values are never
    included so the error can be logged safely.
    """

    def __init__(
        self,
        message: str,
        *,
        page: Optional[str] = None,
        errors: Optional[List[Dict[str, Any]]] = None,
    ) -> None:
        super().__init__(message)
        self.page = page
        self.errors: List[Dict[str, Any]] = list(errors or [])

    @property
    def fields(self) -> List[str]:
        """Dotted locations of the failing fields, in report order."""
        return [
            ".".join(str(part) for part in error.get("loc", ()))
            for error in self.errors
        ]


class PageStateMissingError(HydratorError):
    """
    Raised when the current payload is requested before the transport
    has populated page state (a hydration race), or when the hydrated
    page belongs to a different page identifier.
    """


class UnknownPageError(HydratorError, LookupError):
    """Raised when a page identifier has no registered binding."""

    def __init__(self, page: str) -> None:
        super().__init__(f"Page '{page}' is not registered.")
        self.page = page
