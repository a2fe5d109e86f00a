"""Core service layer for PromptSpace.

Updates:
  v0.3.0 - 2026-10-15 - Export the browsing session and factory helpers.
  v0.2.0 - 2026-10-12 - Export the HTTP provider and retry helpers.
  v0.1.0 - 2026-10-07 - Surface the catalogue provider contract and file provider.
"""

from .browser import CatalogSession, CloseReason
from .cache import CacheStats, CachingCatalogProvider
from .exceptions import (
    CatalogDataError,
    CatalogNotFoundError,
    CatalogTransportError,
    CategoryNotFoundError,
    ClipboardError,
    PromptNotFoundError,
    PromptNotReadyError,
    PromptSpaceError,
    QueryValidationError,
)
from .factory import build_catalog_provider, build_catalog_session, build_source_provider
from .file_provider import FileCatalogProvider
from .http_provider import HttpCatalogProvider
from .provider import MIN_QUERY_LENGTH, CatalogDataProvider, is_searchable, normalise_query
from .retry import RetryPolicy, async_retry

__all__ = [
    "MIN_QUERY_LENGTH",
    "CacheStats",
    "CachingCatalogProvider",
    "CatalogDataError",
    "CatalogDataProvider",
    "CatalogNotFoundError",
    "CatalogSession",
    "CatalogTransportError",
    "CategoryNotFoundError",
    "ClipboardError",
    "CloseReason",
    "FileCatalogProvider",
    "HttpCatalogProvider",
    "PromptNotFoundError",
    "PromptNotReadyError",
    "PromptSpaceError",
    "QueryValidationError",
    "RetryPolicy",
    "async_retry",
    "build_catalog_provider",
    "build_catalog_session",
    "build_source_provider",
    "is_searchable",
    "normalise_query",
]
