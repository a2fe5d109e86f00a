"""Application entry point for PromptSpace.

Updates:
  v0.2.0 - 2026-10-15 - Default to the interactive browser and wire the Qt clipboard.
  v0.1.1 - 2026-10-12 - Map settings failures to exit code 2.
  v0.1.0 - 2026-10-08 - Modularise CLI parsing, commands and runtime helpers.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cli.browse import run_browse
from cli.commands import COMMAND_SPECS, EXIT_SETTINGS
from cli.parser import parse_args
from cli.runtime import configure_verbose_logging, setup_logging
from cli.settings_summary import print_settings_summary
from config import SettingsError, load_settings
from core import build_catalog_session

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from collections.abc import Sequence

    from core.clipboard import Clipboard


def _build_clipboard() -> Clipboard:
    from core.clipboard import QtClipboard

    return QtClipboard()


def main(argv: Sequence[str] | None = None) -> int:
    """Entrypoint that wires settings, the browsing session and CLI commands."""
    args = parse_args(argv)
    setup_logging(args.logging_config)
    configure_verbose_logging(bool(args.verbose))

    logger = logging.getLogger("promptspace.main")
    try:
        settings = load_settings()
    except SettingsError as exc:
        logger.error("Failed to load settings: %s", exc)
        return EXIT_SETTINGS

    if args.print_settings:
        print_settings_summary(settings)
        return 0

    command = getattr(args, "command", None)
    spec = COMMAND_SPECS.get(command)
    clipboard = _build_clipboard() if spec is None or spec.requires_clipboard else None
    session = build_catalog_session(settings, clipboard=clipboard)

    if spec is not None:
        return spec.handler(session, args, logger)
    return run_browse(session, logger)


if __name__ == "__main__":
    raise SystemExit(main())
