"""Common exception classes for the core package.

All exceptions ultimately inherit from :class:`PromptSpaceError`, allowing
callers to catch a single base class for any catalogue failure while still
distinguishing the categories the browser reacts to differently:

* not-found errors render as an empty state,
* transport errors render as a retryable banner,
* query validation errors are never surfaced at all.

Updates:
  v0.3.0 - 2026-10-15 - Add clipboard and copy-readiness errors.
  v0.2.0 - 2026-10-10 - Split malformed catalogue payloads from transport failures.
  v0.1.0 - 2026-10-05 - Created module with the catalogue error taxonomy.
"""

from __future__ import annotations


class PromptSpaceError(Exception):
    """Base exception for PromptSpace failures."""


# ---------------------------------------------------------------------------
# Lookup errors
# ---------------------------------------------------------------------------


class CatalogNotFoundError(PromptSpaceError):
    """Raised when an identifier or listing does not resolve in the catalogue."""


class CategoryNotFoundError(CatalogNotFoundError):
    """Raised when a requested category does not exist."""


class PromptNotFoundError(CatalogNotFoundError):
    """Raised when a prompt cannot be located in the catalogue."""


# ---------------------------------------------------------------------------
# Transport errors
# ---------------------------------------------------------------------------


class CatalogTransportError(PromptSpaceError):
    """Raised when the catalogue cannot be reached or read."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        """Store the optional HTTP status code alongside the message."""
        super().__init__(message)
        self.status_code = status_code


class CatalogDataError(CatalogTransportError):
    """Raised when catalogue payloads are malformed."""


# ---------------------------------------------------------------------------
# Query and copy workflow errors
# ---------------------------------------------------------------------------


class QueryValidationError(PromptSpaceError):
    """Raised when a search query is too short to dispatch."""


class PromptNotReadyError(PromptSpaceError):
    """Raised when copying is requested before a prompt has been hydrated."""


class ClipboardError(PromptSpaceError):
    """Raised when the system clipboard rejects a write."""


__all__ = [
    "CatalogDataError",
    "CatalogNotFoundError",
    "CatalogTransportError",
    "CategoryNotFoundError",
    "ClipboardError",
    "PromptNotFoundError",
    "PromptNotReadyError",
    "PromptSpaceError",
    "QueryValidationError",
]
