"""Data provider protocol shared by catalogue backends.

Updates:
  v0.2.0 - 2026-10-10 - Centralise the minimum query length and query normalisation.
  v0.1.0 - 2026-10-06 - Introduce the read-only CatalogDataProvider protocol.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from .exceptions import QueryValidationError

if TYPE_CHECKING:
    from models import Category, PromptDetail, PromptSummary, SearchResult

MIN_QUERY_LENGTH = 2


def normalise_query(query: str | None) -> str:
    """Return the stripped *query*, raising when it is too short to search.

    Raises:
      QueryValidationError: When the stripped query is shorter than
        :data:`MIN_QUERY_LENGTH`.
    """
    text = (query or "").strip()
    if len(text) < MIN_QUERY_LENGTH:
        raise QueryValidationError(
            f"Search queries need at least {MIN_QUERY_LENGTH} characters"
        )
    return text


def is_searchable(query: str | None) -> bool:
    """Return ``True`` when *query* is long enough to dispatch a content search."""
    return len((query or "").strip()) >= MIN_QUERY_LENGTH


@runtime_checkable
class CatalogDataProvider(Protocol):
    """Read-only, idempotent access to categories and prompts."""

    async def list_categories(self) -> list[Category]:
        """Return every category in catalogue order."""
        ...

    async def list_prompts_by_category(self, category_id: str) -> list[PromptSummary]:
        """Return the prompt summaries of *category_id* in catalogue order."""
        ...

    async def get_prompt_detail(self, prompt_id: str) -> PromptDetail:
        """Return the fully hydrated prompt identified by *prompt_id*."""
        ...

    async def search(self, query: str) -> list[SearchResult]:
        """Return prompts whose searchable text contains *query*, ignoring case."""
        ...


__all__ = [
    "CatalogDataProvider",
    "MIN_QUERY_LENGTH",
    "is_searchable",
    "normalise_query",
]
