"""Prompt data model definitions.

Prompts travel in two shapes. Listings and search responses carry a
:class:`PromptSummary`; the overlay hydrates it into a :class:`PromptDetail`
by identifier. :class:`SearchResult` adds the owning category's display name
so search hits can be rendered without a second lookup.

Updates:
  v0.3.0 - 2026-10-14 - Accept the legacy ``prompt``/``description`` keys of the portal catalogue.
  v0.2.0 - 2026-10-09 - Add SearchResult with denormalised category names.
  v0.1.0 - 2026-10-05 - Initial summary/detail schema with serialization helpers.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from .category_model import clean_text, require_identifier


def _normalise_tags(value: Iterable[Any] | str | None) -> tuple[str, ...]:
    """Return tags in their original order, dropping blanks but keeping duplicates."""
    if value is None:
        return ()
    if isinstance(value, str):
        value = [value]
    tags: list[str] = []
    for raw in value:
        text = clean_text(raw)
        if text:
            tags.append(text)
    return tuple(tags)


def _summary_fields(payload: Mapping[str, Any]) -> dict[str, Any]:
    return {
        "id": require_identifier(payload, "prompt"),
        "category_id": clean_text(payload.get("categoryId") or payload.get("category_id")),
        "title": clean_text(payload.get("title")),
        "short_description": clean_text(
            payload.get("shortDescription")
            or payload.get("short_description")
            or payload.get("description")
        ),
        "tags": _normalise_tags(payload.get("tags")),
    }


@dataclass(slots=True, frozen=True)
class PromptSummary:
    """Lightweight prompt representation used by listings and search."""

    id: str
    category_id: str
    title: str
    short_description: str = ""
    tags: tuple[str, ...] = ()

    def searchable_text(self) -> tuple[str, ...]:
        """Return the fields matched by catalogue search."""
        return (self.title, self.short_description, *self.tags)

    def matches(self, needle: str) -> bool:
        """Return ``True`` when *needle* is a case-insensitive substring of a searchable field."""
        lowered = needle.lower()
        return any(lowered in text.lower() for text in self.searchable_text())

    def to_record(self) -> dict[str, Any]:
        """Serialize the summary using the catalogue's camelCase keys."""
        return {
            "id": self.id,
            "categoryId": self.category_id,
            "title": self.title,
            "shortDescription": self.short_description,
            "tags": list(self.tags),
        }

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> PromptSummary:
        """Create a summary from a catalogue listing record."""
        return cls(**_summary_fields(payload))


@dataclass(slots=True, frozen=True)
class PromptDetail(PromptSummary):
    """Fully hydrated prompt including the copyable template body."""

    full_description: str = ""
    content: str = ""

    def summary(self) -> PromptSummary:
        """Return the summary projection of this prompt."""
        return PromptSummary(
            id=self.id,
            category_id=self.category_id,
            title=self.title,
            short_description=self.short_description,
            tags=self.tags,
        )

    def to_record(self) -> dict[str, Any]:
        """Serialize the detail including description and content."""
        record = PromptSummary.to_record(self)
        record["fullDescription"] = self.full_description
        record["content"] = self.content
        return record

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> PromptDetail:
        """Create a detail from a prompt record, accepting the legacy ``prompt`` body key."""
        fields = _summary_fields(payload)
        full_description = clean_text(
            payload.get("fullDescription") or payload.get("full_description")
        )
        content = payload.get("content")
        if content is None:
            content = payload.get("prompt")
        return cls(
            **fields,
            full_description=full_description or fields["short_description"],
            # Template bodies are copied verbatim, so only ``None`` is normalised.
            content="" if content is None else str(content),
        )


@dataclass(slots=True, frozen=True)
class SearchResult(PromptSummary):
    """Search hit enriched with its resolved category display name."""

    category_name: str = ""

    def to_record(self) -> dict[str, Any]:
        """Serialize the hit including its category name."""
        record = PromptSummary.to_record(self)
        record["categoryName"] = self.category_name
        return record

    @classmethod
    def from_summary(cls, summary: PromptSummary, category_name: str) -> SearchResult:
        """Enrich *summary* with *category_name*."""
        return cls(
            id=summary.id,
            category_id=summary.category_id,
            title=summary.title,
            short_description=summary.short_description,
            tags=summary.tags,
            category_name=category_name,
        )

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> SearchResult:
        """Create a search hit from an API record."""
        return cls(
            **_summary_fields(payload),
            category_name=clean_text(payload.get("categoryName") or payload.get("category_name")),
        )


__all__ = ["PromptDetail", "PromptSummary", "SearchResult"]
