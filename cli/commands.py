"""CLI command handlers for PromptSpace.

Every handler receives the browsing session built for this process and
returns the process exit code.

Updates:
  v0.2.0 - 2026-10-15 - Add copy command backed by the session clipboard.
  v0.1.0 - 2026-10-08 - Introduce categories, prompts, show and search commands.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from core import (
    CatalogNotFoundError,
    CatalogTransportError,
    ClipboardError,
    PromptSpaceError,
    normalise_query,
)

from .utils import (
    format_category_line,
    format_prompt_line,
    format_tags,
    indent_block,
    print_and_log,
)

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from core import CatalogSession
    from models import PromptDetail

CommandHandler = Callable[["CatalogSession", argparse.Namespace, logging.Logger], int]

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_SETTINGS = 2
EXIT_NOT_FOUND = 4
EXIT_TRANSPORT = 5
EXIT_CLIPBOARD = 6


@dataclass(frozen=True)
class CommandSpec:
    """Metadata for dispatching CLI command handlers."""

    handler: CommandHandler
    requires_clipboard: bool = False


def exit_code_for(exc: BaseException) -> int:
    """Return the process exit code that reports *exc*."""
    if isinstance(exc, ClipboardError):
        return EXIT_CLIPBOARD
    if isinstance(exc, CatalogNotFoundError):
        return EXIT_NOT_FOUND
    if isinstance(exc, CatalogTransportError):
        return EXIT_TRANSPORT
    return EXIT_USAGE


def render_prompt_detail(detail: PromptDetail) -> str:
    """Return the full text shown for one prompt."""
    lines = [detail.title, "=" * len(detail.title)]
    if detail.short_description:
        lines.append(detail.short_description)
    tags = format_tags(detail.tags)
    if tags:
        lines.append(tags)
    if detail.full_description:
        lines.extend(["", "Description", "-----------", indent_block(detail.full_description)])
    lines.extend(["", "Prompt", "------", detail.content])
    return "\n".join(lines)


def run_categories(
    session: CatalogSession,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    del args
    try:
        categories = asyncio.run(session.provider.list_categories())
    except PromptSpaceError as exc:
        print_and_log(logger, logging.ERROR, f"Unable to load categories: {exc}")
        return exit_code_for(exc)
    if not categories:
        print("No categories available.")
        return EXIT_OK
    print("\nCategories\n----------")
    for category in categories:
        print(format_category_line(category))
    return EXIT_OK


def run_prompts(
    session: CatalogSession,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    category_id = str(args.category_id).strip()
    try:
        prompts = asyncio.run(session.provider.list_prompts_by_category(category_id))
    except PromptSpaceError as exc:
        print_and_log(logger, logging.ERROR, f"Unable to load prompts: {exc}")
        return exit_code_for(exc)
    if not prompts:
        print(f"No prompts in category '{category_id}' yet.")
        return EXIT_OK
    print(f"\nPrompts in {category_id}\n" + "-" * (11 + len(category_id)))
    for prompt in prompts:
        print(format_prompt_line(prompt))
    return EXIT_OK


def run_show(
    session: CatalogSession,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    prompt_id = str(args.prompt_id).strip()
    try:
        detail = asyncio.run(session.provider.get_prompt_detail(prompt_id))
    except PromptSpaceError as exc:
        print_and_log(logger, logging.ERROR, f"Unable to load prompt: {exc}")
        return exit_code_for(exc)
    print(render_prompt_detail(detail))
    return EXIT_OK


def run_search(
    session: CatalogSession,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    try:
        query = normalise_query(str(args.query))
        results = asyncio.run(session.provider.search(query))
    except PromptSpaceError as exc:
        print_and_log(logger, logging.ERROR, f"Search failed: {exc}")
        return exit_code_for(exc)
    if not results:
        print(f"No prompts match '{query}'.")
        return EXIT_OK
    print(f"\nResults for '{query}' ({len(results)})\n" + "-" * 20)
    for result in results:
        print(format_prompt_line(result))
    return EXIT_OK


def run_copy(
    session: CatalogSession,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    prompt_id = str(args.prompt_id).strip()
    try:
        content = asyncio.run(session.quick_copy(prompt_id))
    except PromptSpaceError as exc:
        print_and_log(logger, logging.ERROR, f"Unable to copy prompt: {exc}")
        return exit_code_for(exc)
    print_and_log(
        logger,
        logging.INFO,
        f"Copied {len(content)} characters of '{prompt_id}' to the clipboard.",
    )
    return EXIT_OK


COMMAND_SPECS: dict[str | None, CommandSpec] = {
    "categories": CommandSpec(run_categories),
    "prompts": CommandSpec(run_prompts),
    "show": CommandSpec(run_show),
    "search": CommandSpec(run_search),
    "copy": CommandSpec(run_copy, requires_clipboard=True),
}


__all__ = [
    "COMMAND_SPECS",
    "EXIT_CLIPBOARD",
    "EXIT_NOT_FOUND",
    "EXIT_OK",
    "EXIT_SETTINGS",
    "EXIT_TRANSPORT",
    "EXIT_USAGE",
    "CommandSpec",
    "exit_code_for",
    "render_prompt_detail",
]
