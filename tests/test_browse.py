"""Tests for the interactive browse loop.

Updates:
  v0.1.0 - 2026-10-14 - Cover a scripted browse, copy and search session.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

from conftest import InMemoryClipboard

from cli.browse import render_browser, render_overlay, run_browse
from core.browser import BrowserState, LoadStatus, OverlayState, open_overlay
from core.browser.session import CatalogSession
from core.cache import CachingCatalogProvider
from core.file_provider import FileCatalogProvider
from models import PromptSummary


def _scripted(lines: list[str]) -> tuple[list[str], object]:
    feed: Iterator[str] = iter(lines)
    outputs: list[str] = []

    def _input(_: str) -> str:
        try:
            return next(feed)
        except StopIteration:
            raise EOFError from None

    return outputs, _input


def test_scripted_session_browses_copies_and_searches(
    catalog_dir: Path,
    clipboard: InMemoryClipboard,
) -> None:
    session = CatalogSession(
        CachingCatalogProvider(FileCatalogProvider(catalog_dir)),
        clipboard=clipboard,
        debounce_seconds=0.0,
    )
    outputs, read_line = _scripted(
        [
            "copy",
            "open coding",
            "show code-review",
            "copy",
            "show missing",
            "back",
            "search diff",
            "clear",
            "bogus",
            "quit",
        ]
    )

    exit_code = run_browse(
        session,
        logging.getLogger("test.browse"),
        input_func=read_line,  # type: ignore[arg-type]
        output=outputs.append,
    )

    transcript = "\n".join(outputs)
    assert exit_code == 0
    assert "Marketing (marketing)" in transcript
    assert "Error: The selected prompt has not finished loading." in transcript
    assert "== Code review ==" in transcript
    assert "Review this diff:\n{diff}" in transcript
    assert clipboard.writes == ["Review this diff:\n{diff}"]
    assert "Prompt 'missing' is not in the current list." in transcript
    assert "[Coding] Code review (code-review)" in transcript
    assert "Unknown command 'bogus'" in transcript


def test_end_of_input_leaves_cleanly(catalog_dir: Path) -> None:
    session = CatalogSession(FileCatalogProvider(catalog_dir), debounce_seconds=0.0)
    outputs, read_line = _scripted([])

    exit_code = run_browse(
        session,
        logging.getLogger("test.browse"),
        input_func=read_line,  # type: ignore[arg-type]
        output=outputs.append,
    )

    assert exit_code == 0
    assert any("Categories" in line for line in outputs)


def test_render_states() -> None:
    assert "Loading categories..." in render_browser(
        BrowserState(categories_status=LoadStatus.LOADING)
    )
    assert "Type 'retry'" in render_browser(
        BrowserState(categories_status=LoadStatus.FAILED, categories_error="offline")
    )
    assert render_overlay(OverlayState()) is None

    summary = PromptSummary(id="p1", category_id="c", title="Review", short_description="Diffs")
    loading = open_overlay(OverlayState(), summary).state
    rendered = render_overlay(loading)
    assert rendered is not None
    assert "== Review ==" in rendered
    assert "Loading details..." in rendered
