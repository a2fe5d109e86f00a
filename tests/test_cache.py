"""Tests for session-lifetime memoisation of provider responses.

Updates:
  v0.1.0 - 2026-10-08 - Cover hit/miss behaviour and failure pass-through.
"""

from __future__ import annotations

import pytest
from conftest import GatedProvider

from core.cache import CachingCatalogProvider
from core.exceptions import CategoryNotFoundError


@pytest.mark.asyncio()
async def test_repeated_calls_hit_the_provider_once(gated_provider: GatedProvider) -> None:
    cache = CachingCatalogProvider(gated_provider)

    first = await cache.list_categories()
    second = await cache.list_categories()
    await cache.list_prompts_by_category("coding")
    await cache.list_prompts_by_category("coding")
    await cache.get_prompt_detail("c1")
    detail = await cache.get_prompt_detail("c1")

    assert first == second
    assert gated_provider.calls == [("categories", ""), ("category", "coding"), ("prompt", "c1")]
    assert detail.id == "c1"
    assert (cache.stats.hits, cache.stats.misses) == (3, 3)


@pytest.mark.asyncio()
async def test_returned_lists_are_copies(gated_provider: GatedProvider) -> None:
    cache = CachingCatalogProvider(gated_provider)

    listing = await cache.list_categories()
    listing.clear()

    assert len(await cache.list_categories()) == 3


@pytest.mark.asyncio()
async def test_failures_are_not_cached(gated_provider: GatedProvider) -> None:
    cache = CachingCatalogProvider(gated_provider)

    with pytest.raises(CategoryNotFoundError):
        await cache.list_prompts_by_category("ghost")
    gated_provider.prompts["ghost"] = []
    assert await cache.list_prompts_by_category("ghost") == []

    assert gated_provider.calls_for("category") == ["ghost", "ghost"]


@pytest.mark.asyncio()
async def test_empty_listing_is_cached(gated_provider: GatedProvider) -> None:
    cache = CachingCatalogProvider(gated_provider)

    await cache.list_prompts_by_category("empty")
    await cache.list_prompts_by_category("empty")

    assert gated_provider.calls_for("category") == ["empty"]


@pytest.mark.asyncio()
async def test_search_bypasses_cache(gated_provider: GatedProvider) -> None:
    cache = CachingCatalogProvider(gated_provider)

    await cache.search("code")
    await cache.search("code")

    assert gated_provider.calls_for("search") == ["code", "code"]
    assert cache.provider is gated_provider
