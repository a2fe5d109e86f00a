"""Configuration helpers for PromptSpace.

Updates: v0.2.0 - 2026-10-12 - Expose data source and HTTP defaults.
Updates: v0.1.0 - 2026-10-05 - Expose settings loader and configuration error types.
"""

from .settings import (
    DEFAULT_API_BASE_URL,
    DEFAULT_DATA_SOURCE,
    DEFAULT_HTTP_MAX_ATTEMPTS,
    DEFAULT_HTTP_TIMEOUT_SECONDS,
    DEFAULT_SEARCH_DEBOUNCE_MS,
    PromptSpaceSettings,
    SettingsError,
    load_settings,
)

__all__ = [
    "DEFAULT_API_BASE_URL",
    "DEFAULT_DATA_SOURCE",
    "DEFAULT_HTTP_MAX_ATTEMPTS",
    "DEFAULT_HTTP_TIMEOUT_SECONDS",
    "DEFAULT_SEARCH_DEBOUNCE_MS",
    "PromptSpaceSettings",
    "SettingsError",
    "load_settings",
]
