"""Detail overlay lifecycle: open with a summary, hydrate, close.

Each opening starts a new selection episode with its own generation number.
A hydrated detail is shown only while the overlay is still loading the same
episode and the detail's id equals the selected summary's id, so a slow
response can never replace a newer selection or reopen a closed overlay.

Updates:
  v0.1.1 - 2026-10-15 - Expose the copyable template text of a hydrated prompt.
  v0.1.0 - 2026-10-09 - Introduce OverlayState and hydration transitions.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from ..exceptions import PromptNotReadyError
from .state import FetchPromptDetail, Transition

if TYPE_CHECKING:
    from models import PromptDetail, PromptSummary

logger = logging.getLogger(__name__)


class OverlayPhase(str, Enum):
    """Lifecycle phases of the detail overlay."""

    CLOSED = "closed"
    LOADING = "loading"
    LOADED = "loaded"


class CloseReason(str, Enum):
    """Why the overlay closed."""

    BUTTON = "button"
    OUTSIDE_CLICK = "outside-click"
    ESCAPE = "escape"
    HYDRATION_FAILED = "hydration-failed"


@dataclass(slots=True, frozen=True)
class OverlayState:
    """The single prompt selected for the detail overlay."""

    phase: OverlayPhase = OverlayPhase.CLOSED
    summary: PromptSummary | None = None
    detail: PromptDetail | None = None
    generation: int = 0
    close_reason: CloseReason | None = None

    @property
    def is_open(self) -> bool:
        """Return ``True`` while the overlay is visible."""
        return self.phase is not OverlayPhase.CLOSED

    @property
    def selected_id(self) -> str | None:
        """Return the id of the selected prompt, if any."""
        return self.summary.id if self.summary is not None else None

    @property
    def title(self) -> str:
        """Return the title, available as soon as the overlay opens."""
        return self.summary.title if self.summary is not None else ""

    @property
    def short_description(self) -> str:
        """Return the short description, available as soon as the overlay opens."""
        return self.summary.short_description if self.summary is not None else ""

    @property
    def full_description(self) -> str | None:
        """Return the full description, or ``None`` while it is loading."""
        return self.detail.full_description if self.detail is not None else None

    @property
    def content(self) -> str | None:
        """Return the template body, or ``None`` while it is loading."""
        return self.detail.content if self.detail is not None else None

    def copyable_text(self) -> str:
        """Return the template body of the hydrated prompt.

        Raises:
          PromptNotReadyError: When the overlay is closed or still loading.
        """
        if self.phase is not OverlayPhase.LOADED or self.detail is None:
            raise PromptNotReadyError("The selected prompt has not finished loading.")
        return self.detail.content


def open_overlay(state: OverlayState, summary: PromptSummary) -> Transition[OverlayState]:
    """Open the overlay on *summary* at once and request its detail."""
    generation = state.generation + 1
    next_state = OverlayState(
        phase=OverlayPhase.LOADING,
        summary=summary,
        detail=None,
        generation=generation,
    )
    return Transition(next_state, (FetchPromptDetail(summary.id, generation),))


def detail_loaded(
    state: OverlayState,
    generation: int,
    detail: PromptDetail,
) -> Transition[OverlayState]:
    """Show *detail* if it belongs to the selection still being loaded."""
    if (
        state.phase is not OverlayPhase.LOADING
        or generation != state.generation
        or state.selected_id != detail.id
    ):
        logger.debug("Discarding stale detail for prompt %s (generation %d)", detail.id, generation)
        return Transition(state)
    return Transition(dataclasses.replace(state, phase=OverlayPhase.LOADED, detail=detail))


def detail_failed(
    state: OverlayState,
    generation: int,
    error: BaseException,
) -> Transition[OverlayState]:
    """Close the overlay when hydration of the current selection fails."""
    if state.phase is not OverlayPhase.LOADING or generation != state.generation:
        logger.debug("Ignoring stale detail failure (generation %d): %s", generation, error)
        return Transition(state)
    logger.warning("Could not load details for prompt %s: %s", state.selected_id, error)
    return close_overlay(state, CloseReason.HYDRATION_FAILED)


def close_overlay(
    state: OverlayState,
    reason: CloseReason = CloseReason.BUTTON,
) -> Transition[OverlayState]:
    """Close the overlay; any hydration still in flight becomes a no-op."""
    if not state.is_open:
        return Transition(state)
    return Transition(
        OverlayState(
            phase=OverlayPhase.CLOSED,
            generation=state.generation + 1,
            close_reason=reason,
        )
    )


__all__ = [
    "CloseReason",
    "OverlayPhase",
    "OverlayState",
    "close_overlay",
    "detail_failed",
    "detail_loaded",
    "open_overlay",
]
