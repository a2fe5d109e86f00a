"""Asyncio runtime that drives one browsing session.

:class:`CatalogSession` owns exactly one :class:`BrowserState` and one
:class:`OverlayState`. User intents run the pure transition functions and
the resulting commands are executed on the running event loop. Fetches are
never cancelled once dispatched; their results are fed back through the
transition functions, which drop anything that is no longer current. Only a
search still waiting out its debounce delay can be cancelled.

Intent methods are synchronous and must be called from inside a running
event loop, mirroring UI event handlers.

Updates:
  v0.2.0 - 2026-10-15 - Add clipboard copy of the hydrated prompt and quick copy by id.
  v0.1.1 - 2026-10-14 - Debounce searches with a cancellable pre-dispatch delay.
  v0.1.0 - 2026-10-10 - Introduce CatalogSession with subscriber notifications.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from ..exceptions import ClipboardError, PromptSpaceError
from . import navigation, overlay, search
from .overlay import CloseReason, OverlayState
from .search import DEFAULT_SEARCH_DEBOUNCE_SECONDS
from .state import (
    BrowserState,
    CancelSearch,
    DispatchSearch,
    FetchCategories,
    FetchCategoryPrompts,
    FetchPromptDetail,
    Transition,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Coroutine, Iterable

    from models import PromptSummary

    from ..clipboard import Clipboard
    from ..provider import CatalogDataProvider
    from .state import Command

logger = logging.getLogger(__name__)


class CatalogSession:
    """Coordinate navigation, search and the detail overlay for one user."""

    def __init__(
        self,
        provider: CatalogDataProvider,
        *,
        clipboard: Clipboard | None = None,
        debounce_seconds: float = DEFAULT_SEARCH_DEBOUNCE_SECONDS,
    ) -> None:
        """Bind the session to a (normally cached) provider and optional clipboard."""
        self._provider = provider
        self._clipboard = clipboard
        self._debounce_seconds = max(0.0, debounce_seconds)
        self._browser = BrowserState()
        self._overlay = OverlayState()
        self._tasks: set[asyncio.Task[None]] = set()
        self._pending_search: asyncio.Task[None] | None = None
        self._listeners: list[Callable[[CatalogSession], None]] = []

    # ------------------------------------------------------------------
    # State access
    # ------------------------------------------------------------------
    @property
    def browser(self) -> BrowserState:
        """Return the current navigation and search state."""
        return self._browser

    @property
    def overlay(self) -> OverlayState:
        """Return the current detail overlay state."""
        return self._overlay

    @property
    def provider(self) -> CatalogDataProvider:
        """Return the provider used for fetches."""
        return self._provider

    def subscribe(self, listener: Callable[[CatalogSession], None]) -> Callable[[], None]:
        """Call *listener* after every applied state change; return an unsubscribe callable."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # ------------------------------------------------------------------
    # Navigation and search intents
    # ------------------------------------------------------------------
    def start(self) -> None:
        """Load the category listing."""
        self._apply_browser(navigation.start(self._browser))

    def select_category(self, category_id: str) -> None:
        """Browse *category_id*."""
        self._apply_browser(navigation.select_category(self._browser, category_id))

    def go_back(self) -> None:
        """Return to the home view."""
        self._apply_browser(navigation.go_back(self._browser))

    def set_query(self, text: str) -> None:
        """Update the search query as the user types."""
        self._apply_browser(
            search.change_query(self._browser, text, debounce_seconds=self._debounce_seconds)
        )

    def clear_query(self) -> None:
        """Clear the search query."""
        self._apply_browser(search.clear_query(self._browser))

    def retry(self) -> None:
        """Re-issue the request behind the error currently shown."""
        self._apply_browser(navigation.retry(self._browser))

    # ------------------------------------------------------------------
    # Overlay intents
    # ------------------------------------------------------------------
    def open_prompt(self, summary: PromptSummary) -> None:
        """Open the detail overlay for *summary* and hydrate it."""
        self._apply_overlay(overlay.open_overlay(self._overlay, summary))

    def close_overlay(self, reason: CloseReason = CloseReason.BUTTON) -> None:
        """Close the detail overlay."""
        self._apply_overlay(overlay.close_overlay(self._overlay, reason))

    def copy_selected(self) -> str:
        """Copy the hydrated prompt's template text and return it."""
        text = self._overlay.copyable_text()
        self._require_clipboard().set_text(text)
        logger.info("Copied prompt %s to the clipboard", self._overlay.selected_id)
        return text

    async def quick_copy(self, prompt_id: str) -> str:
        """Copy the template text of *prompt_id* without opening the overlay."""
        clipboard = self._require_clipboard()
        detail = await self._provider.get_prompt_detail(prompt_id)
        clipboard.set_text(detail.content)
        logger.info("Copied prompt %s to the clipboard", prompt_id)
        return detail.content

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    async def wait_idle(self) -> None:
        """Wait until no fetch or pending search remains."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def aclose(self) -> None:
        """Drop a pending search and let in-flight fetches settle."""
        self._cancel_pending_search()
        await self.wait_idle()
        self._listeners.clear()

    # ------------------------------------------------------------------
    # Command execution
    # ------------------------------------------------------------------
    def _apply_browser(self, transition: Transition[BrowserState]) -> None:
        changed = transition.state != self._browser
        self._browser = transition.state
        self._execute(transition.commands)
        if changed:
            self._notify()

    def _apply_overlay(self, transition: Transition[OverlayState]) -> None:
        changed = transition.state != self._overlay
        self._overlay = transition.state
        self._execute(transition.commands)
        if changed:
            self._notify()

    def _execute(self, commands: Iterable[Command]) -> None:
        for command in commands:
            if isinstance(command, FetchCategories):
                self._spawn(self._fetch_categories(command.generation))
            elif isinstance(command, FetchCategoryPrompts):
                self._spawn(self._fetch_prompts(command.category_id, command.generation))
            elif isinstance(command, CancelSearch):
                self._cancel_pending_search()
            elif isinstance(command, DispatchSearch):
                self._cancel_pending_search()
                task = self._spawn(
                    self._run_search(command.query, command.generation, command.delay_seconds)
                )
                if command.delay_seconds > 0:
                    self._pending_search = task
            elif isinstance(command, FetchPromptDetail):
                self._spawn(self._hydrate(command.prompt_id, command.generation))
            else:  # pragma: no cover - exhaustive over Command
                raise TypeError(f"Unsupported command: {command!r}")

    def _spawn(self, coroutine: Coroutine[Any, Any, None]) -> asyncio.Task[None]:
        task = asyncio.get_running_loop().create_task(coroutine)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def _cancel_pending_search(self) -> None:
        if self._pending_search is not None:
            self._pending_search.cancel()
            self._pending_search = None

    async def _fetch_categories(self, generation: int) -> None:
        try:
            categories = await self._provider.list_categories()
        except Exception as exc:
            self._log_failure("Loading categories", exc)
            self._apply_browser(navigation.categories_failed(self._browser, generation, exc))
            return
        self._apply_browser(navigation.categories_loaded(self._browser, generation, categories))

    async def _fetch_prompts(self, category_id: str, generation: int) -> None:
        try:
            prompts = await self._provider.list_prompts_by_category(category_id)
        except Exception as exc:
            self._log_failure(f"Loading prompts for {category_id}", exc)
            self._apply_browser(
                navigation.prompts_failed(self._browser, generation, category_id, exc)
            )
            return
        self._apply_browser(
            navigation.prompts_loaded(self._browser, generation, category_id, prompts)
        )

    async def _run_search(self, query: str, generation: int, delay_seconds: float) -> None:
        if delay_seconds > 0:
            await asyncio.sleep(delay_seconds)
        if self._pending_search is asyncio.current_task():
            self._pending_search = None
        try:
            results = await self._provider.search(query)
        except Exception as exc:
            self._log_failure(f"Searching for {query!r}", exc)
            self._apply_browser(search.search_failed(self._browser, generation, query, exc))
            return
        self._apply_browser(search.search_completed(self._browser, generation, query, results))

    async def _hydrate(self, prompt_id: str, generation: int) -> None:
        try:
            detail = await self._provider.get_prompt_detail(prompt_id)
        except Exception as exc:
            self._log_failure(f"Loading prompt {prompt_id}", exc)
            self._apply_overlay(overlay.detail_failed(self._overlay, generation, exc))
            return
        self._apply_overlay(overlay.detail_loaded(self._overlay, generation, detail))

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("Session listener %r failed", listener)

    def _require_clipboard(self) -> Clipboard:
        if self._clipboard is None:
            raise ClipboardError("No clipboard is configured for this session.")
        return self._clipboard

    @staticmethod
    def _log_failure(action: str, exc: Exception) -> None:
        if isinstance(exc, PromptSpaceError):
            logger.warning("%s failed: %s", action, exc)
        else:
            logger.exception("%s failed unexpectedly", action)


__all__ = ["CatalogSession"]
