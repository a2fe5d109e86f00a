"""Clipboard access used by the copy workflows.

Updates:
  v0.1.1 - 2026-10-16 - Fall back to the offscreen Qt platform on displayless Linux hosts.
  v0.1.0 - 2026-10-15 - Introduce Clipboard protocol and Qt-backed implementation.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Protocol, runtime_checkable

from PySide6.QtGui import QGuiApplication

from .exceptions import ClipboardError

logger = logging.getLogger(__name__)


@runtime_checkable
class Clipboard(Protocol):
    """Destination for copied template text."""

    def set_text(self, text: str) -> None:
        """Replace the clipboard contents with *text*."""
        ...


class QtClipboard:
    """Write to the system clipboard through Qt."""

    def __init__(self, application: QGuiApplication | None = None) -> None:
        """Use *application* or lazily create a QGuiApplication on first copy."""
        self._application = application

    def _ensure_application(self) -> QGuiApplication:
        if self._application is not None:
            return self._application
        existing = QGuiApplication.instance()
        if isinstance(existing, QGuiApplication):
            self._application = existing
            return existing
        if (
            sys.platform.startswith("linux")
            and not os.environ.get("DISPLAY")
            and not os.environ.get("WAYLAND_DISPLAY")
        ):
            os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
            logger.warning("No display available; copied text stays inside this process.")
        self._application = QGuiApplication(sys.argv[:1])
        return self._application

    def set_text(self, text: str) -> None:
        """Replace the clipboard contents with *text*."""
        clipboard = self._ensure_application().clipboard()
        clipboard.setText(text)
        if clipboard.text() != text:
            raise ClipboardError("The system clipboard rejected the copied text.")
        logger.debug("Copied %d characters to the clipboard", len(text))


__all__ = ["Clipboard", "QtClipboard"]
