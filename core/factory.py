"""Factories for constructing catalogue providers and sessions from validated settings.

Updates:
  v0.2.0 - 2026-10-15 - Wire the clipboard and debounce delay into browsing sessions.
  v0.1.1 - 2026-10-12 - Add HTTP provider wiring with retry policy from settings.
  v0.1.0 - 2026-10-07 - Build the file-backed provider wrapped in the response cache.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .browser.session import CatalogSession
from .cache import CachingCatalogProvider
from .file_provider import FileCatalogProvider
from .http_provider import HttpCatalogProvider
from .retry import RetryPolicy

if TYPE_CHECKING:  # pragma: no cover - typing only
    from config import PromptSpaceSettings

    from .clipboard import Clipboard
    from .provider import CatalogDataProvider

factory_logger = logging.getLogger("promptspace.factory")


def build_source_provider(settings: PromptSpaceSettings) -> CatalogDataProvider:
    """Return the uncached provider selected by *settings*."""
    if settings.data_source == "http":
        factory_logger.info("Using catalogue API at %s", settings.api_base_url)
        return HttpCatalogProvider(
            base_url=settings.api_base_url,
            timeout=settings.http_timeout_seconds,
            retry_policy=RetryPolicy(max_attempts=settings.http_max_attempts),
        )
    if settings.data_path is not None:
        factory_logger.info("Using catalogue files under %s", settings.data_path)
        return FileCatalogProvider(
            settings.data_path,
            include_content=settings.search_include_content,
        )
    factory_logger.debug("Using the bundled sample catalogue")
    return FileCatalogProvider.builtin(include_content=settings.search_include_content)


def build_catalog_provider(settings: PromptSpaceSettings) -> CachingCatalogProvider:
    """Return the configured provider wrapped in a per-process response cache."""
    return CachingCatalogProvider(build_source_provider(settings))


def build_catalog_session(
    settings: PromptSpaceSettings,
    *,
    clipboard: Clipboard | None = None,
    provider: CatalogDataProvider | None = None,
) -> CatalogSession:
    """Return a browsing session over *provider* or the provider built from *settings*."""
    resolved = provider if provider is not None else build_catalog_provider(settings)
    return CatalogSession(
        resolved,
        clipboard=clipboard,
        debounce_seconds=settings.search_debounce_seconds,
    )


__all__ = ["build_catalog_provider", "build_catalog_session", "build_source_provider"]
