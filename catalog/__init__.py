"""Built-in sample catalogue resources for PromptSpace.

Updates: v0.1.0 - 2026-10-06 - Provide packaged sample catalogue in the static JSON layout.
"""

from __future__ import annotations

from importlib.resources import files
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from importlib.resources.abc import Traversable


def builtin_catalog_root() -> Traversable:
    """Return a Traversable pointing to the packaged catalogue directory."""
    return files(__name__).joinpath("data")


__all__ = ["builtin_catalog_root"]
