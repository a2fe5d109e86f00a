"""Search controller transitions and the derived home-view contents.

The query drives two different mechanisms. Below :data:`MIN_QUERY_LENGTH`
it filters the category grid locally by name; at or above it a debounced
content search replaces the grid. Each dispatched search is tagged with a
generation number and its query so that an older response can never
overwrite the results of a newer query.

Updates:
  v0.2.1 - 2026-10-18 - Keep results when an edit only changes surrounding whitespace.
  v0.2.0 - 2026-10-13 - Force the home view when a searchable query is typed in a category.
  v0.1.0 - 2026-10-09 - Extract query handling from the session runtime.
"""

from __future__ import annotations

import dataclasses
import logging
from enum import Enum
from typing import TYPE_CHECKING

from ..provider import MIN_QUERY_LENGTH, is_searchable
from .navigation import leave_category
from .state import (
    BrowserState,
    CancelSearch,
    DispatchSearch,
    LoadStatus,
    Transition,
    View,
    failure_status,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from models import Category, SearchResult

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_DEBOUNCE_SECONDS = 0.3


class DisplayMode(str, Enum):
    """What the main content area shows for a given state."""

    CATEGORY_GRID = "category-grid"
    SEARCH_RESULTS = "search-results"
    PROMPT_LIST = "prompt-list"


def change_query(
    state: BrowserState,
    text: str,
    *,
    debounce_seconds: float = DEFAULT_SEARCH_DEBOUNCE_SECONDS,
) -> Transition[BrowserState]:
    """Store the edited query and schedule a content search when it is long enough."""
    if text == state.query:
        return Transition(state)
    if text.strip() == state.query.strip():
        # Whitespace-only edit: same search, keep results and generation.
        return Transition(dataclasses.replace(state, query=text))
    generation = state.search_generation + 1
    updated = dataclasses.replace(
        state,
        query=text,
        search_results=(),
        search_status=LoadStatus.IDLE,
        search_error=None,
        search_generation=generation,
    )
    if not is_searchable(text):
        return Transition(updated, (CancelSearch(),))
    if updated.view is View.CATEGORY_DETAIL:
        updated = leave_category(updated)
    updated = dataclasses.replace(updated, search_status=LoadStatus.LOADING)
    return Transition(
        updated,
        (CancelSearch(), DispatchSearch(text.strip(), generation, debounce_seconds)),
    )


def clear_query(state: BrowserState) -> Transition[BrowserState]:
    """Empty the query, cancel a pending search and restore the full grid."""
    return change_query(state, "")


def _is_current(state: BrowserState, generation: int, query: str) -> bool:
    return (
        generation == state.search_generation
        and query == state.query.strip()
        and state.view is View.HOME
    )


def search_completed(
    state: BrowserState,
    generation: int,
    query: str,
    results: Sequence[SearchResult],
) -> Transition[BrowserState]:
    """Apply search results if they answer the current query."""
    if not _is_current(state, generation, query):
        logger.debug("Discarding stale search results for %r (generation %d)", query, generation)
        return Transition(state)
    next_state = dataclasses.replace(
        state,
        search_results=tuple(results),
        search_status=LoadStatus.LOADED,
        search_error=None,
    )
    return Transition(next_state)


def search_failed(
    state: BrowserState,
    generation: int,
    query: str,
    error: BaseException,
) -> Transition[BrowserState]:
    """Record a search failure if it answers the current query."""
    if not _is_current(state, generation, query):
        logger.debug("Ignoring stale search failure for %r: %s", query, error)
        return Transition(state)
    status, message = failure_status(error)
    next_state = dataclasses.replace(
        state,
        search_results=(),
        search_status=status,
        search_error=message,
    )
    return Transition(next_state)


def display_mode(state: BrowserState) -> DisplayMode:
    """Return what the main content area currently shows."""
    if state.view is View.CATEGORY_DETAIL:
        return DisplayMode.PROMPT_LIST
    if is_searchable(state.query):
        return DisplayMode.SEARCH_RESULTS
    return DisplayMode.CATEGORY_GRID


def visible_categories(state: BrowserState) -> tuple[Category, ...]:
    """Return the category grid, filtered locally by name for short queries."""
    needle = state.query.strip()
    if not needle or len(needle) >= MIN_QUERY_LENGTH:
        return state.categories
    return tuple(category for category in state.categories if category.matches_name(needle))


__all__ = [
    "DEFAULT_SEARCH_DEBOUNCE_SECONDS",
    "DisplayMode",
    "change_query",
    "clear_query",
    "display_mode",
    "search_completed",
    "search_failed",
    "visible_categories",
]
