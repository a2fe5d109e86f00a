"""Category metadata models and helpers.

Updates:
  v0.2.0 - 2026-10-12 - Read camelCase catalogue payloads and the legacy ``image`` icon key.
  v0.1.0 - 2026-10-05 - Introduce read-only Category dataclass.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


def clean_text(value: Any) -> str:
    """Return *value* as a stripped string, treating ``None`` as empty."""
    if value is None:
        return ""
    return str(value).strip()


def require_identifier(payload: Mapping[str, Any], kind: str) -> str:
    """Return the ``id`` of *payload* or raise when it is missing."""
    identifier = clean_text(payload.get("id"))
    if not identifier:
        raise ValueError(f"{kind} records require a non-empty id")
    return identifier


def _coerce_count(value: Any) -> int:
    if value is None or isinstance(value, bool):
        return 0
    try:
        count = int(value)
    except (TypeError, ValueError):
        return 0
    return max(0, count)


@dataclass(slots=True, frozen=True)
class Category:
    """A named grouping of prompts as published by the catalogue."""

    id: str
    name: str
    description: str = ""
    icon: str | None = None
    prompt_count: int = 0
    gradient: str | None = None

    def matches_name(self, needle: str) -> bool:
        """Return ``True`` when *needle* occurs in the name, ignoring case."""
        return needle.strip().lower() in self.name.lower()

    def to_record(self) -> dict[str, Any]:
        """Serialize the category using the catalogue's camelCase keys."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "iconName": self.icon,
            "promptCount": self.prompt_count,
            "gradient": self.gradient,
        }

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> Category:
        """Create a category from a loosely structured catalogue record."""
        identifier = require_identifier(payload, "category")
        icon = clean_text(payload.get("iconName") or payload.get("icon") or payload.get("image"))
        gradient = clean_text(payload.get("gradient"))
        return cls(
            id=identifier,
            name=clean_text(payload.get("name")) or identifier,
            description=clean_text(payload.get("description")),
            icon=icon or None,
            prompt_count=_coerce_count(payload.get("promptCount", payload.get("prompt_count"))),
            gradient=gradient or None,
        )


__all__ = ["Category", "clean_text", "require_identifier"]
