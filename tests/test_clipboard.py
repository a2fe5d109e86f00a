"""Tests for the Qt-backed clipboard.

Updates:
  v0.1.0 - 2026-10-15 - Cover offscreen clipboard round trip and rejected writes.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from PySide6.QtGui import QGuiApplication

from core.clipboard import Clipboard, QtClipboard
from core.exceptions import ClipboardError


@pytest.fixture(scope="module")
def qt_app() -> Iterator[QGuiApplication]:
    existing = QGuiApplication.instance()
    app = existing if isinstance(existing, QGuiApplication) else QGuiApplication([])
    yield app


def test_qt_clipboard_writes_text(qt_app: QGuiApplication) -> None:
    clipboard = QtClipboard(qt_app)

    clipboard.set_text("Review this diff:\n{diff}")

    assert isinstance(clipboard, Clipboard)
    assert qt_app.clipboard().text() == "Review this diff:\n{diff}"


def test_qt_clipboard_reuses_running_application(qt_app: QGuiApplication) -> None:
    clipboard = QtClipboard()

    clipboard.set_text("second")

    assert qt_app.clipboard().text() == "second"


def test_rejected_write_raises() -> None:
    class _StubbornClipboard:
        def setText(self, text: str) -> None:  # noqa: N802 - Qt naming
            del text

        def text(self) -> str:
            return "something else"

    class _App:
        def clipboard(self) -> _StubbornClipboard:
            return _StubbornClipboard()

    clipboard = QtClipboard(_App())  # type: ignore[arg-type]

    with pytest.raises(ClipboardError):
        clipboard.set_text("lost")
