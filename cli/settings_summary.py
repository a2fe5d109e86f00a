"""Printable summaries for PromptSpace configuration.

Updates:
  v0.1.0 - 2026-10-08 - Extract CLI settings summary rendering.
"""

from __future__ import annotations

from config import PromptSpaceSettings

from .utils import describe_path


def print_settings_summary(settings: PromptSpaceSettings) -> None:
    """Emit a readable summary of the catalogue source and tuning values."""
    if settings.data_source == "http":
        source_lines = [
            "Data source: HTTP API",
            f"API base URL: {settings.api_base_url}",
            f"Request timeout (seconds): {settings.http_timeout_seconds:g}",
            f"Attempts per request: {settings.http_max_attempts}",
        ]
    elif settings.data_path is None:
        source_lines = ["Data source: bundled sample catalogue"]
    else:
        source_lines = [
            "Data source: JSON files",
            f"Catalogue directory: {describe_path(settings.data_path, expect_directory=True)}",
        ]

    lines = [
        "PromptSpace configuration summary",
        "---------------------------------",
        *source_lines,
        "",
        "Search",
        "------",
        f"Debounce delay (ms): {settings.search_debounce_ms}",
        f"Match template text: {'yes' if settings.search_include_content else 'no'}",
    ]
    print("\n".join(lines))


__all__ = ["print_settings_summary"]
