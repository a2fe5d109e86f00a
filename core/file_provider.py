"""File-backed catalogue provider reading the static JSON layout.

The catalogue directory holds ``categories.json``, one
``categories/<id>.json`` listing per category and one ``prompts/<id>.json``
detail record per prompt. Collections may be bare JSON arrays or wrapped in
an object keyed by ``categories``/``prompts``.

Updates:
  v0.3.1 - 2026-10-18 - Skip unreadable category listings during search.
  v0.3.0 - 2026-10-14 - Optionally match full template content during search.
  v0.2.0 - 2026-10-12 - Treat listed categories without a prompt file as empty.
  v0.1.0 - 2026-10-06 - Introduce FileCatalogProvider with identifier validation.
"""

from __future__ import annotations

import asyncio
import dataclasses
import json
import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeVar

from catalog import builtin_catalog_root
from models import Category, PromptDetail, PromptSummary, SearchResult

from .exceptions import (
    CatalogDataError,
    CatalogNotFoundError,
    CatalogTransportError,
    CategoryNotFoundError,
    PromptNotFoundError,
    QueryValidationError,
)
from .provider import normalise_query

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from importlib.resources.abc import Traversable

logger = logging.getLogger(__name__)

_IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]*$")


def is_safe_identifier(value: str) -> bool:
    """Return ``True`` when *value* can be used as a catalogue file stem."""
    return bool(_IDENTIFIER_PATTERN.fullmatch(value)) and ".." not in value


def _unwrap_collection(payload: Any, key: str, source: str) -> list[Any]:
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict) and isinstance(payload.get(key), list):
        return payload[key]
    raise CatalogDataError(f"Expected a list of {key} in {source}")


T = TypeVar("T")


def _parse_records(
    entries: list[Any],
    factory: Callable[[Mapping[str, Any]], T],
    source: str,
) -> list[T]:
    parsed: list[T] = []
    for entry in entries:
        if not isinstance(entry, dict):
            raise CatalogDataError(f"Expected JSON objects in {source}")
        try:
            parsed.append(factory(entry))
        except (TypeError, ValueError) as exc:
            raise CatalogDataError(f"Invalid record in {source}: {exc}") from exc
    return parsed


class FileCatalogProvider:
    """Serve categories and prompts from a directory of JSON files."""

    def __init__(self, root: Path | Traversable, *, include_content: bool = False) -> None:
        """Read the catalogue below *root*; *include_content* extends search to template bodies."""
        self._root = root
        self._include_content = include_content

    @classmethod
    def builtin(cls, *, include_content: bool = False) -> FileCatalogProvider:
        """Return a provider for the sample catalogue bundled with the package."""
        return cls(builtin_catalog_root(), include_content=include_content)

    @property
    def root(self) -> Path | Traversable:
        """Return the catalogue root."""
        return self._root

    # ------------------------------------------------------------------
    # CatalogDataProvider API
    # ------------------------------------------------------------------
    async def list_categories(self) -> list[Category]:
        """Return every category in ``categories.json`` order."""
        return await asyncio.to_thread(self._list_categories)

    async def list_prompts_by_category(self, category_id: str) -> list[PromptSummary]:
        """Return the summaries listed for *category_id*."""
        return await asyncio.to_thread(self._list_prompts, category_id)

    async def get_prompt_detail(self, prompt_id: str) -> PromptDetail:
        """Return the prompt stored in ``prompts/<prompt_id>.json``."""
        return await asyncio.to_thread(self._get_prompt, prompt_id)

    async def search(self, query: str) -> list[SearchResult]:
        """Return matching prompts across categories in storage order."""
        try:
            needle = normalise_query(query)
        except QueryValidationError:
            return []
        return await asyncio.to_thread(self._search, needle)

    # ------------------------------------------------------------------
    # Blocking helpers (run in worker threads)
    # ------------------------------------------------------------------
    def _read_json(self, *parts: str, not_found: CatalogNotFoundError) -> Any:
        source = "/".join(parts)
        resource = self._root.joinpath(*parts)
        try:
            text = resource.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise not_found from exc
        except OSError as exc:
            logger.error("Unable to read catalogue file %s: %s", source, exc)
            raise CatalogTransportError(f"Unable to read {source}") from exc
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            logger.error("Invalid JSON in catalogue file %s: %s", source, exc)
            raise CatalogDataError(f"Invalid JSON in {source}") from exc

    def _list_categories(self) -> list[Category]:
        payload = self._read_json(
            "categories.json",
            not_found=CatalogNotFoundError("Category listing is missing"),
        )
        entries = _unwrap_collection(payload, "categories", "categories.json")
        return _parse_records(entries, Category.from_mapping, "categories.json")

    def _list_prompts(self, category_id: str) -> list[PromptSummary]:
        if not is_safe_identifier(category_id):
            raise CategoryNotFoundError(f"Category '{category_id}' does not exist.")
        source = f"categories/{category_id}.json"
        try:
            payload = self._read_json(
                "categories",
                f"{category_id}.json",
                not_found=CategoryNotFoundError(f"Category '{category_id}' does not exist."),
            )
        except CategoryNotFoundError:
            if any(category.id == category_id for category in self._list_categories()):
                logger.debug("Category %s has no prompt listing; treating as empty", category_id)
                return []
            raise
        entries = _unwrap_collection(payload, "prompts", source)
        summaries = _parse_records(entries, PromptSummary.from_mapping, source)
        return [
            summary
            if summary.category_id
            else dataclasses.replace(summary, category_id=category_id)
            for summary in summaries
        ]

    def _get_prompt(self, prompt_id: str) -> PromptDetail:
        not_found = PromptNotFoundError(f"Prompt '{prompt_id}' does not exist.")
        if not is_safe_identifier(prompt_id):
            raise not_found
        source = f"prompts/{prompt_id}.json"
        payload = self._read_json("prompts", f"{prompt_id}.json", not_found=not_found)
        if not isinstance(payload, dict):
            raise CatalogDataError(f"Expected a JSON object in {source}")
        try:
            detail = PromptDetail.from_mapping(payload)
        except (TypeError, ValueError) as exc:
            raise CatalogDataError(f"Invalid record in {source}: {exc}") from exc
        if detail.id != prompt_id:
            raise CatalogDataError(f"{source} describes prompt '{detail.id}'")
        return detail

    def _search(self, needle: str) -> list[SearchResult]:
        results: list[SearchResult] = []
        for category in self._list_categories():
            try:
                summaries = self._list_prompts(category.id)
            except (CatalogNotFoundError, CatalogTransportError) as exc:
                logger.warning("Skipping category %s during search: %s", category.id, exc)
                continue
            for summary in summaries:
                if summary.matches(needle) or self._content_matches(summary.id, needle):
                    results.append(SearchResult.from_summary(summary, category.name))
        logger.debug("Search for %r matched %d prompt(s)", needle, len(results))
        return results

    def _content_matches(self, prompt_id: str, needle: str) -> bool:
        if not self._include_content:
            return False
        try:
            detail = self._get_prompt(prompt_id)
        except (CatalogNotFoundError, CatalogDataError):
            return False
        lowered = needle.lower()
        return lowered in detail.full_description.lower() or lowered in detail.content.lower()


__all__ = ["FileCatalogProvider", "is_safe_identifier"]
