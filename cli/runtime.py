"""Runtime boot helpers for the PromptSpace CLI.

Updates:
  v0.1.1 - 2026-10-16 - Add verbose toggle for package loggers.
  v0.1.0 - 2026-10-08 - Extract logging configuration helpers.
"""

from __future__ import annotations

import logging
import logging.config
from pathlib import Path

DEFAULT_LOGGING_CONFIG = Path("config/logging.conf")
VERBOSE_LOGGER_NAMES = ("promptspace", "core", "cli", "config", "models")


def setup_logging(logging_conf_path: Path | None) -> None:
    """Configure logging using *logging_conf_path* when available."""
    path = logging_conf_path or DEFAULT_LOGGING_CONFIG
    if path.exists():
        try:
            logging.config.fileConfig(path, disable_existing_loggers=False)
            return
        except Exception:  # pragma: no cover - configuration fallback
            logging.getLogger("promptspace.runtime").debug(
                "Ignoring unusable logging config %s", path, exc_info=True
            )
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def configure_verbose_logging(enabled: bool) -> None:
    """Raise the application loggers to DEBUG when *enabled*."""
    if not enabled:
        return
    for name in VERBOSE_LOGGER_NAMES:
        logging.getLogger(name).setLevel(logging.DEBUG)
    # httpx logs every request at INFO; keep it out of debug transcripts.
    logging.getLogger("httpx").setLevel(logging.WARNING)


__all__ = ["configure_verbose_logging", "setup_logging"]
