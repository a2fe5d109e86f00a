"""Navigation transitions between the home view and a category's prompt list.

Updates:
  v0.2.0 - 2026-10-13 - Add retry transition that re-issues the failed request.
  v0.1.0 - 2026-10-08 - Extract home/category navigation from the session runtime.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import TYPE_CHECKING

from ..provider import is_searchable
from .state import (
    BrowserState,
    CancelSearch,
    Command,
    DispatchSearch,
    FetchCategories,
    FetchCategoryPrompts,
    LoadStatus,
    Transition,
    View,
    failure_status,
    without_search,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from models import Category, PromptSummary

logger = logging.getLogger(__name__)


def _request_categories(state: BrowserState) -> Transition[BrowserState]:
    generation = state.categories_generation + 1
    next_state = dataclasses.replace(
        state,
        categories_status=LoadStatus.LOADING,
        categories_error=None,
        categories_generation=generation,
    )
    return Transition(next_state, (FetchCategories(generation),))


def _request_prompts(state: BrowserState, category_id: str) -> Transition[BrowserState]:
    generation = state.prompts_generation + 1
    next_state = dataclasses.replace(
        state,
        prompts=(),
        prompts_status=LoadStatus.LOADING,
        prompts_error=None,
        prompts_generation=generation,
    )
    return Transition(next_state, (FetchCategoryPrompts(category_id, generation),))


def start(state: BrowserState) -> Transition[BrowserState]:
    """Load the category listing unless it is already available or loading."""
    if state.categories_status in (LoadStatus.LOADED, LoadStatus.LOADING):
        return Transition(state)
    return _request_categories(state)


def categories_loaded(
    state: BrowserState,
    generation: int,
    categories: Sequence[Category],
) -> Transition[BrowserState]:
    """Apply a category listing if it answers the latest request."""
    if generation != state.categories_generation:
        logger.debug("Discarding stale category listing (generation %d)", generation)
        return Transition(state)
    next_state = dataclasses.replace(
        state,
        categories=tuple(categories),
        categories_status=LoadStatus.LOADED,
        categories_error=None,
    )
    return Transition(next_state)


def categories_failed(
    state: BrowserState,
    generation: int,
    error: BaseException,
) -> Transition[BrowserState]:
    """Record a category listing failure if it answers the latest request."""
    if generation != state.categories_generation:
        logger.debug("Ignoring stale category listing failure: %s", error)
        return Transition(state)
    status, message = failure_status(error)
    next_state = dataclasses.replace(state, categories_status=status, categories_error=message)
    return Transition(next_state)


def leave_category(state: BrowserState) -> BrowserState:
    """Return *state* moved to the home view with the prompt list discarded."""
    return dataclasses.replace(
        state,
        view=View.HOME,
        category_id=None,
        prompts=(),
        prompts_status=LoadStatus.IDLE,
        prompts_error=None,
        prompts_generation=state.prompts_generation + 1,
    )


def select_category(state: BrowserState, category_id: str) -> Transition[BrowserState]:
    """Open *category_id*, clearing the query and fetching its prompts."""
    if not category_id:
        raise ValueError("category_id must be a non-empty string")
    cleared = dataclasses.replace(
        without_search(state),
        view=View.CATEGORY_DETAIL,
        category_id=category_id,
    )
    fetch = _request_prompts(cleared, category_id)
    return Transition(fetch.state, (CancelSearch(), *fetch.commands))


def prompts_loaded(
    state: BrowserState,
    generation: int,
    category_id: str,
    prompts: Sequence[PromptSummary],
) -> Transition[BrowserState]:
    """Apply a category's prompts if the category is still the one being browsed."""
    if (
        generation != state.prompts_generation
        or state.view is not View.CATEGORY_DETAIL
        or state.category_id != category_id
    ):
        logger.debug("Discarding stale prompt list for %s (generation %d)", category_id, generation)
        return Transition(state)
    next_state = dataclasses.replace(
        state,
        prompts=tuple(prompts),
        prompts_status=LoadStatus.LOADED,
        prompts_error=None,
    )
    return Transition(next_state)


def prompts_failed(
    state: BrowserState,
    generation: int,
    category_id: str,
    error: BaseException,
) -> Transition[BrowserState]:
    """Record a prompt list failure if the category is still being browsed."""
    if generation != state.prompts_generation or state.category_id != category_id:
        logger.debug("Ignoring stale prompt list failure for %s: %s", category_id, error)
        return Transition(state)
    status, message = failure_status(error)
    next_state = dataclasses.replace(
        state,
        prompts=(),
        prompts_status=status,
        prompts_error=message,
    )
    return Transition(next_state)


def go_back(state: BrowserState) -> Transition[BrowserState]:
    """Return to the home view, clearing category, query and prompt list."""
    home = leave_category(without_search(state))
    commands: tuple[Command, ...] = (CancelSearch(),)
    if home.categories_status in (LoadStatus.IDLE, LoadStatus.FAILED, LoadStatus.NOT_FOUND):
        reload = _request_categories(home)
        return Transition(reload.state, commands + reload.commands)
    return Transition(home, commands)


def retry(state: BrowserState) -> Transition[BrowserState]:
    """Re-issue the request behind the error currently on screen."""
    failed = (LoadStatus.FAILED, LoadStatus.NOT_FOUND)
    if state.view is View.CATEGORY_DETAIL and state.category_id is not None:
        if state.prompts_status in failed:
            return _request_prompts(state, state.category_id)
        return Transition(state)
    if state.search_status in failed and is_searchable(state.query):
        generation = state.search_generation + 1
        next_state = dataclasses.replace(
            state,
            search_status=LoadStatus.LOADING,
            search_error=None,
            search_generation=generation,
        )
        return Transition(next_state, (DispatchSearch(state.query.strip(), generation),))
    if state.categories_status in failed:
        return _request_categories(state)
    return Transition(state)


__all__ = [
    "categories_failed",
    "categories_loaded",
    "go_back",
    "leave_category",
    "prompts_failed",
    "prompts_loaded",
    "retry",
    "select_category",
    "start",
]
