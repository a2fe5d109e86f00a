"""Tests for detail overlay transitions.

Updates:
  v0.1.1 - 2026-10-15 - Cover copy readiness.
  v0.1.0 - 2026-10-09 - Cover hydration guards and close reasons.
"""

from __future__ import annotations

import pytest

from core.browser import overlay
from core.browser.overlay import CloseReason, OverlayPhase, OverlayState
from core.browser.state import FetchPromptDetail
from core.exceptions import PromptNotFoundError, PromptNotReadyError
from models import PromptDetail, PromptSummary

P1 = PromptSummary(id="p1", category_id="coding", title="Review", short_description="Diffs")
P2 = PromptSummary(id="p2", category_id="coding", title="Refactor")


def _detail(summary: PromptSummary) -> PromptDetail:
    return PromptDetail(
        id=summary.id,
        category_id=summary.category_id,
        title=summary.title,
        short_description=summary.short_description,
        full_description=f"{summary.title} long",
        content=f"{summary.title} body",
    )


def test_open_shows_summary_immediately_and_requests_detail() -> None:
    transition = overlay.open_overlay(OverlayState(), P1)

    state = transition.state
    assert state.phase is OverlayPhase.LOADING
    assert (state.title, state.short_description) == ("Review", "Diffs")
    assert state.full_description is None
    assert state.content is None
    assert transition.commands == (FetchPromptDetail("p1", state.generation),)


def test_detail_for_current_selection_is_applied() -> None:
    opened = overlay.open_overlay(OverlayState(), P1).state

    loaded = overlay.detail_loaded(opened, opened.generation, _detail(P1)).state

    assert loaded.phase is OverlayPhase.LOADED
    assert loaded.full_description == "Review long"
    assert loaded.copyable_text() == "Review body"


def test_detail_of_previous_selection_is_discarded() -> None:
    first = overlay.open_overlay(OverlayState(), P1).state
    second = overlay.open_overlay(first, P2).state

    stale = overlay.detail_loaded(second, first.generation, _detail(P1)).state

    assert stale == second
    assert stale.selected_id == "p2"


def test_detail_with_other_id_is_discarded() -> None:
    opened = overlay.open_overlay(OverlayState(), P1).state

    assert overlay.detail_loaded(opened, opened.generation, _detail(P2)).state == opened


def test_detail_after_close_never_reopens() -> None:
    opened = overlay.open_overlay(OverlayState(), P1).state
    closed = overlay.close_overlay(opened, CloseReason.ESCAPE).state

    late = overlay.detail_loaded(closed, opened.generation, _detail(P1)).state

    assert not late.is_open
    assert late.close_reason is CloseReason.ESCAPE
    assert late.detail is None


def test_hydration_failure_closes_overlay() -> None:
    opened = overlay.open_overlay(OverlayState(), P1).state

    failed = overlay.detail_failed(opened, opened.generation, PromptNotFoundError("gone")).state

    assert failed.phase is OverlayPhase.CLOSED
    assert failed.close_reason is CloseReason.HYDRATION_FAILED


def test_stale_hydration_failure_is_ignored() -> None:
    first = overlay.open_overlay(OverlayState(), P1).state
    second = overlay.open_overlay(first, P2).state

    assert overlay.detail_failed(second, first.generation, RuntimeError("x")).state == second


def test_close_when_closed_is_noop() -> None:
    state = OverlayState()

    assert overlay.close_overlay(state).state is state


def test_copy_requires_loaded_detail() -> None:
    opened = overlay.open_overlay(OverlayState(), P1).state

    with pytest.raises(PromptNotReadyError):
        OverlayState().copyable_text()
    with pytest.raises(PromptNotReadyError):
        opened.copyable_text()
