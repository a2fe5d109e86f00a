"""Argument parser for the PromptSpace CLI.

Updates:
  v0.2.0 - 2026-10-15 - Add copy subcommand and verbose flag.
  v0.1.0 - 2026-10-08 - Introduce catalogue listing, show and search subcommands.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for the PromptSpace launcher."""
    parser = argparse.ArgumentParser(
        prog="promptspace",
        description="Browse, search and copy prompts from a PromptSpace catalogue.",
    )
    parser.add_argument(
        "--logging-config",
        type=Path,
        default=None,
        help="Path to logging configuration file (INI format)",
    )
    parser.add_argument(
        "--print-settings",
        action="store_true",
        help="Print resolved settings and exit",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging for PromptSpace modules.",
    )

    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("categories", help="List categories with their prompt counts.")

    prompts_parser = subparsers.add_parser("prompts", help="List the prompts of one category.")
    prompts_parser.add_argument("category_id", type=str, help="Category identifier.")

    show_parser = subparsers.add_parser("show", help="Print a prompt with its template text.")
    show_parser.add_argument("prompt_id", type=str, help="Prompt identifier.")

    search_parser = subparsers.add_parser("search", help="Search prompts across every category.")
    search_parser.add_argument("query", type=str, help="Search text (at least two characters).")

    copy_parser = subparsers.add_parser(
        "copy",
        help="Copy a prompt's template text to the clipboard.",
    )
    copy_parser.add_argument("prompt_id", type=str, help="Prompt identifier.")

    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Return parsed CLI arguments for the PromptSpace launcher."""
    return build_parser().parse_args(argv)


__all__ = ["build_parser", "parse_args"]
