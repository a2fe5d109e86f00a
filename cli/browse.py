"""Interactive catalogue browser driven by a :class:`CatalogSession`.

The loop reads one command per line, forwards it to the session as a user
intent, waits for the session to settle and prints the resulting view.

Updates:
  v0.1.1 - 2026-10-16 - Render the overlay and report hydration failures.
  v0.1.0 - 2026-10-14 - Introduce line-oriented browse mode as the default command.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from core import PromptSpaceError
from core.browser import CloseReason, DisplayMode, LoadStatus, display_mode, visible_categories

from .commands import exit_code_for
from .utils import format_category_line, format_prompt_line, format_tags, indent_block

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from core import CatalogSession
    from core.browser import BrowserState, OverlayState
    from models import PromptSummary

HELP_TEXT = """Commands:
  open <category-id>   browse one category
  back                 return to all categories
  search <text>        search every prompt (2+ characters); shorter text filters categories
  clear                clear the search
  show <prompt-id>     open a listed prompt
  close                close the open prompt
  copy [prompt-id]     copy the open prompt, or the given one, to the clipboard
  retry                retry the request that failed
  help                 show this help
  quit                 leave the browser"""

PROMPT = "promptspace> "

InputFunc = Callable[[str], str]
OutputFunc = Callable[[str], None]


def _status_line(status: LoadStatus, error: str | None, loading: str) -> str | None:
    if status is LoadStatus.LOADING:
        return loading
    if status is LoadStatus.NOT_FOUND:
        return f"Not found: {error}. Type 'back' to return home."
    if status is LoadStatus.FAILED:
        return f"Error: {error}. Type 'retry' to try again."
    return None


def render_browser(state: BrowserState) -> str:
    """Return the main content area for *state*."""
    mode = display_mode(state)
    lines: list[str] = []
    if mode is DisplayMode.PROMPT_LIST:
        category = state.active_category
        heading = category.name if category is not None else state.category_id or ""
        lines.extend([heading, "-" * len(heading)])
        if category is not None and category.description:
            lines.append(category.description)
        status = _status_line(state.prompts_status, state.prompts_error, "Loading prompts...")
        if status is not None:
            lines.append(status)
        elif not state.prompts:
            lines.append("No prompts in this category yet.")
        else:
            lines.extend(format_prompt_line(prompt) for prompt in state.prompts)
        return "\n".join(lines)

    if mode is DisplayMode.SEARCH_RESULTS:
        query = state.query.strip()
        lines.append(f"Search: {query}")
        status = _status_line(state.search_status, state.search_error, "Searching...")
        if status is not None:
            lines.append(status)
        elif state.search_status is LoadStatus.LOADED and not state.search_results:
            lines.append(f"No prompts match '{query}'.")
        else:
            lines.extend(format_prompt_line(result) for result in state.search_results)
        return "\n".join(lines)

    lines.extend(["Categories", "----------"])
    status = _status_line(state.categories_status, state.categories_error, "Loading categories...")
    if status is not None:
        lines.append(status)
        return "\n".join(lines)
    categories = visible_categories(state)
    if not categories:
        lines.append("No categories match." if state.query.strip() else "No categories available.")
    else:
        lines.extend(format_category_line(category) for category in categories)
    return "\n".join(lines)


def render_overlay(state: OverlayState) -> str | None:
    """Return the detail overlay text, or ``None`` while it is closed."""
    if not state.is_open:
        return None
    lines = ["", f"== {state.title} =="]
    if state.short_description:
        lines.append(state.short_description)
    if state.summary is not None and state.summary.tags:
        lines.append(format_tags(state.summary.tags))
    if state.full_description is None:
        lines.append("Loading details...")
        return "\n".join(lines)
    if state.full_description:
        lines.extend(["", indent_block(state.full_description)])
    lines.extend(["", "Prompt:", state.content or "", "", "Type 'copy' to copy or 'close' to close."])
    return "\n".join(lines)


def _find_listed_prompt(state: BrowserState, prompt_id: str) -> PromptSummary | None:
    listed: tuple[PromptSummary, ...]
    if display_mode(state) is DisplayMode.PROMPT_LIST:
        listed = state.prompts
    else:
        listed = state.search_results
    for prompt in listed:
        if prompt.id == prompt_id:
            return prompt
    return None


class BrowseLoop:
    """Translate typed commands into session intents."""

    def __init__(
        self,
        session: CatalogSession,
        logger: logging.Logger,
        *,
        input_func: InputFunc = input,
        output: OutputFunc = print,
    ) -> None:
        self._session = session
        self._logger = logger
        self._input = input_func
        self._output = output

    async def run(self) -> int:
        """Run until ``quit`` or end of input and return the exit code."""
        self._output("PromptSpace browser. Type 'help' for commands.")
        self._session.start()
        await self._settle()
        while True:
            try:
                line = await asyncio.to_thread(self._input, PROMPT)
            except EOFError:
                break
            command, _, argument = line.strip().partition(" ")
            command = command.lower()
            argument = argument.strip()
            if not command:
                continue
            if command in {"quit", "exit", "q"}:
                break
            try:
                await self.dispatch(command, argument)
            except PromptSpaceError as exc:
                self._logger.debug("Command %s failed with exit code %d", command, exit_code_for(exc))
                self._output(f"Error: {exc}")
        await self._session.aclose()
        return 0

    async def dispatch(self, command: str, argument: str) -> None:
        """Apply one typed command and print the settled view."""
        session = self._session
        if command == "help":
            self._output(HELP_TEXT)
            return
        if command == "open":
            if not argument:
                self._output("Usage: open <category-id>")
                return
            session.close_overlay()
            session.select_category(argument)
        elif command == "back":
            session.close_overlay()
            session.go_back()
        elif command == "search":
            session.close_overlay()
            session.set_query(argument)
        elif command == "clear":
            session.clear_query()
        elif command == "retry":
            session.retry()
        elif command == "show":
            summary = _find_listed_prompt(session.browser, argument)
            if summary is None:
                self._output(f"Prompt '{argument}' is not in the current list.")
                return
            session.open_prompt(summary)
        elif command == "close":
            session.close_overlay(CloseReason.BUTTON)
        elif command == "copy":
            if argument:
                content = await session.quick_copy(argument)
            else:
                content = session.copy_selected()
            self._output(f"Copied {len(content)} characters to the clipboard.")
            return
        else:
            self._output(f"Unknown command '{command}'. Type 'help' for commands.")
            return
        await self._settle()

    async def _settle(self) -> None:
        overlay_generation = self._session.overlay.generation
        await self._session.wait_idle()
        overlay = self._session.overlay
        self._output(render_browser(self._session.browser))
        rendered = render_overlay(overlay)
        if rendered is not None:
            self._output(rendered)
        elif (
            overlay.close_reason is CloseReason.HYDRATION_FAILED
            and overlay.generation != overlay_generation
        ):
            self._output("Could not load the prompt details.")


def run_browse(
    session: CatalogSession,
    logger: logging.Logger,
    *,
    input_func: InputFunc = input,
    output: OutputFunc = print,
) -> int:
    """Run the interactive browser on a fresh event loop."""
    loop = BrowseLoop(session, logger, input_func=input_func, output=output)
    return asyncio.run(loop.run())


__all__ = ["BrowseLoop", "HELP_TEXT", "render_browser", "render_overlay", "run_browse"]
