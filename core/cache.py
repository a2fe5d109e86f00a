"""Session-lifetime memoisation of catalogue provider responses.

Three independent tables are kept: the constant "all categories" entry,
category id to prompt summaries, and prompt id to detail. Entries are never
evicted or expired because the catalogue is treated as immutable while the
application runs; if the backing files change underneath a running session
the cache keeps serving the old data until the session ends.

Concurrent misses for the same key are not coalesced. Providers are
side-effect free, so a duplicate fetch only costs a second read. Failures are
never cached and search results bypass the cache entirely.

Updates:
  v0.1.1 - 2026-10-13 - Track hit/miss counters for diagnostics.
  v0.1.0 - 2026-10-08 - Introduce CachingCatalogProvider.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from models import Category, PromptDetail, PromptSummary, SearchResult

    from .provider import CatalogDataProvider

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CacheStats:
    """Hit/miss counters for one cache instance."""

    hits: int = 0
    misses: int = 0


class CachingCatalogProvider:
    """Wrap a provider and memoise listings and details for the session."""

    def __init__(self, provider: CatalogDataProvider) -> None:
        """Store the wrapped *provider* with empty tables."""
        self._provider = provider
        self._categories: list[Category] | None = None
        self._category_prompts: dict[str, list[PromptSummary]] = {}
        self._prompt_details: dict[str, PromptDetail] = {}
        self._stats = CacheStats()

    @property
    def provider(self) -> CatalogDataProvider:
        """Return the wrapped provider."""
        return self._provider

    @property
    def stats(self) -> CacheStats:
        """Return the hit/miss counters."""
        return self._stats

    async def list_categories(self) -> list[Category]:
        """Return cached categories, fetching them once per session."""
        if self._categories is not None:
            self._record_hit("categories")
            return list(self._categories)
        self._record_miss("categories")
        categories = await self._provider.list_categories()
        self._categories = list(categories)
        return list(categories)

    async def list_prompts_by_category(self, category_id: str) -> list[PromptSummary]:
        """Return cached summaries for *category_id*."""
        cached = self._category_prompts.get(category_id)
        if cached is not None:
            self._record_hit(f"category:{category_id}")
            return list(cached)
        self._record_miss(f"category:{category_id}")
        prompts = await self._provider.list_prompts_by_category(category_id)
        self._category_prompts[category_id] = list(prompts)
        return list(prompts)

    async def get_prompt_detail(self, prompt_id: str) -> PromptDetail:
        """Return the cached detail for *prompt_id*."""
        cached = self._prompt_details.get(prompt_id)
        if cached is not None:
            self._record_hit(f"prompt:{prompt_id}")
            return cached
        self._record_miss(f"prompt:{prompt_id}")
        detail = await self._provider.get_prompt_detail(prompt_id)
        self._prompt_details[prompt_id] = detail
        return detail

    async def search(self, query: str) -> list[SearchResult]:
        """Delegate searches to the wrapped provider without caching."""
        return await self._provider.search(query)

    def _record_hit(self, key: str) -> None:
        self._stats.hits += 1
        logger.debug("Catalogue cache hit for %s", key)

    def _record_miss(self, key: str) -> None:
        self._stats.misses += 1
        logger.debug("Catalogue cache miss for %s", key)


__all__ = ["CacheStats", "CachingCatalogProvider"]
