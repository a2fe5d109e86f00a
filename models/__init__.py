"""Data models for PromptSpace.

Updates: v0.2.0 - 2026-10-09 - Export SearchResult dataclass.
Updates: v0.1.0 - 2026-10-05 - Export Category and prompt summary/detail dataclasses.
"""

from .category_model import Category
from .prompt_model import PromptDetail, PromptSummary, SearchResult

__all__ = [
    "Category",
    "PromptDetail",
    "PromptSummary",
    "SearchResult",
]
