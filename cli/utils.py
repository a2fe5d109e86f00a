"""Shared CLI utility functions for PromptSpace commands.

Updates:
  v0.1.0 - 2026-10-08 - Extract stdout logging, path and listing helpers.
"""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from collections.abc import Sequence
    from logging import Logger

    from models import Category, PromptSummary, SearchResult
else:  # pragma: no cover - runtime placeholders for type-only imports
    Sequence = Logger = Any


def print_and_log(logger: Logger, level: int, message: str) -> None:
    """Log *message* at *level* and mirror it to stdout."""
    logger.log(level, message)
    print(message)


def describe_path(path_value: object, *, expect_directory: bool) -> str:
    """Return a human-friendly description of *path_value* suitability."""
    try:
        path = Path(path_value) if path_value is not None else None
    except TypeError:
        path = None
    if path is None:
        return "not set"

    resolved = path.expanduser()
    if resolved.exists():
        if expect_directory and not resolved.is_dir():
            return f"{resolved} (exists but is not a directory)"
        if not expect_directory and resolved.is_dir():
            return f"{resolved} (exists but is a directory)"
        return f"{resolved} (exists)"
    return f"{resolved} (missing)"


def format_prompt_count(count: int) -> str:
    """Return ``"1 prompt"`` / ``"N prompts"``."""
    return f"{count} prompt" if count == 1 else f"{count} prompts"


def format_tags(tags: Sequence[str]) -> str:
    """Return tags rendered as ``#tag`` chips, or an empty string."""
    return " ".join(f"#{tag}" for tag in tags)


def format_category_line(category: Category) -> str:
    """Return one category grid entry."""
    icon = f"{category.icon} " if category.icon else ""
    line = f"- {icon}{category.name} ({category.id}) - {format_prompt_count(category.prompt_count)}"
    if category.description:
        line += f"\n    {category.description}"
    return line


def format_prompt_line(prompt: PromptSummary | SearchResult) -> str:
    """Return one prompt list or search result entry."""
    category_name = getattr(prompt, "category_name", "")
    prefix = f"[{category_name}] " if category_name else ""
    line = f"- {prefix}{prompt.title} ({prompt.id})"
    if prompt.short_description:
        line += f"\n    {prompt.short_description}"
    tags = format_tags(prompt.tags)
    if tags:
        line += f"\n    {tags}"
    return line


def indent_block(text: str, *, width: int = 88) -> str:
    """Return *text* wrapped paragraph by paragraph and indented for display."""
    paragraphs = text.splitlines() or [""]
    wrapped = [
        textwrap.fill(paragraph, width=width, initial_indent="  ", subsequent_indent="  ")
        if paragraph.strip()
        else ""
        for paragraph in paragraphs
    ]
    return "\n".join(wrapped)


__all__ = [
    "describe_path",
    "format_category_line",
    "format_prompt_count",
    "format_prompt_line",
    "format_tags",
    "indent_block",
    "print_and_log",
]
