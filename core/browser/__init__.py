"""Browsing state, transitions and the asyncio session runtime.

Updates: v0.1.0 - 2026-10-10 - Group navigation, search and overlay controllers.
"""

from .navigation import go_back, retry, select_category, start
from .overlay import CloseReason, OverlayPhase, OverlayState, close_overlay, open_overlay
from .search import DisplayMode, change_query, clear_query, display_mode, visible_categories
from .session import CatalogSession
from .state import (
    BrowserState,
    CancelSearch,
    Command,
    DispatchSearch,
    FetchCategories,
    FetchCategoryPrompts,
    FetchPromptDetail,
    LoadStatus,
    Transition,
    View,
)

__all__ = [
    "BrowserState",
    "CancelSearch",
    "CatalogSession",
    "CloseReason",
    "Command",
    "DispatchSearch",
    "DisplayMode",
    "FetchCategories",
    "FetchCategoryPrompts",
    "FetchPromptDetail",
    "LoadStatus",
    "OverlayPhase",
    "OverlayState",
    "Transition",
    "View",
    "change_query",
    "clear_query",
    "close_overlay",
    "display_mode",
    "go_back",
    "open_overlay",
    "retry",
    "select_category",
    "start",
    "visible_categories",
]
