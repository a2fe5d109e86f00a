"""Immutable browser state and the side-effect commands transitions emit.

Transition functions in :mod:`core.browser.navigation`,
:mod:`core.browser.search` and :mod:`core.browser.overlay` never perform
I/O. They return a :class:`Transition` holding the next state plus the
commands a runtime (see :mod:`core.browser.session`) must execute. Every
fetch command carries the generation number that was current when it was
issued; a response is applied only if that generation is still current.

Updates:
  v0.2.0 - 2026-10-13 - Add search generation tracking and CancelSearch command.
  v0.1.0 - 2026-10-08 - Introduce BrowserState, LoadStatus and fetch commands.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Generic, TypeVar

from ..exceptions import CatalogNotFoundError

if TYPE_CHECKING:
    from models import Category, PromptSummary, SearchResult


S = TypeVar("S")


class View(str, Enum):
    """Top-level browser views."""

    HOME = "home"
    CATEGORY_DETAIL = "category-detail"


class LoadStatus(str, Enum):
    """Lifecycle of one asynchronously loaded collection."""

    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    NOT_FOUND = "not-found"
    FAILED = "failed"


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@dataclass(slots=True, frozen=True)
class FetchCategories:
    """Load the category listing."""

    generation: int


@dataclass(slots=True, frozen=True)
class FetchCategoryPrompts:
    """Load the prompt summaries of one category."""

    category_id: str
    generation: int


@dataclass(slots=True, frozen=True)
class DispatchSearch:
    """Run a content search after *delay_seconds* unless cancelled first."""

    query: str
    generation: int
    delay_seconds: float = 0.0


@dataclass(slots=True, frozen=True)
class CancelSearch:
    """Drop a search that is still waiting out its debounce delay."""


@dataclass(slots=True, frozen=True)
class FetchPromptDetail:
    """Hydrate the prompt shown in the detail overlay."""

    prompt_id: str
    generation: int


Command = FetchCategories | FetchCategoryPrompts | DispatchSearch | CancelSearch | FetchPromptDetail


@dataclass(frozen=True)
class Transition(Generic[S]):
    """Result of a state transition: the next state and the commands to run."""

    state: S
    commands: tuple[Command, ...] = ()


# ---------------------------------------------------------------------------
# Browser state
# ---------------------------------------------------------------------------


@dataclass(slots=True, frozen=True)
class BrowserState:
    """Navigation, listing and search state of one browsing session."""

    view: View = View.HOME
    category_id: str | None = None
    query: str = ""
    categories: tuple[Category, ...] = ()
    categories_status: LoadStatus = LoadStatus.IDLE
    categories_error: str | None = None
    categories_generation: int = 0
    prompts: tuple[PromptSummary, ...] = ()
    prompts_status: LoadStatus = LoadStatus.IDLE
    prompts_error: str | None = None
    prompts_generation: int = 0
    search_results: tuple[SearchResult, ...] = ()
    search_status: LoadStatus = LoadStatus.IDLE
    search_error: str | None = None
    search_generation: int = 0

    @property
    def active_category(self) -> Category | None:
        """Return the category being browsed, when it is known."""
        if self.category_id is None:
            return None
        for category in self.categories:
            if category.id == self.category_id:
                return category
        return None

    @property
    def is_loading(self) -> bool:
        """Return ``True`` while any collection is being fetched."""
        return LoadStatus.LOADING in (
            self.categories_status,
            self.prompts_status,
            self.search_status,
        )


def failure_status(error: BaseException) -> tuple[LoadStatus, str]:
    """Map *error* onto the status and message shown to the user."""
    message = str(error) or error.__class__.__name__
    if isinstance(error, CatalogNotFoundError):
        return LoadStatus.NOT_FOUND, message
    return LoadStatus.FAILED, message


def without_search(state: BrowserState) -> BrowserState:
    """Return *state* with the query and any search results discarded."""
    return dataclasses.replace(
        state,
        query="",
        search_results=(),
        search_status=LoadStatus.IDLE,
        search_error=None,
        search_generation=state.search_generation + 1,
    )


__all__ = [
    "BrowserState",
    "CancelSearch",
    "Command",
    "DispatchSearch",
    "FetchCategories",
    "FetchCategoryPrompts",
    "FetchPromptDetail",
    "LoadStatus",
    "Transition",
    "View",
    "failure_status",
    "without_search",
]
