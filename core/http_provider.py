"""HTTPX-backed catalogue provider for the PromptSpace JSON API.

Endpoints consumed:

* ``GET /api/categories``
* ``GET /api/categories/{id}``
* ``GET /api/prompts/{id}``
* ``GET /api/search?q={text}``

Updates:
  v0.2.2 - 2026-10-18 - Memoise category names; search hits fall back to ids on failure.
  v0.2.1 - 2026-10-15 - Resolve missing category names on search hits from the listing.
  v0.2.0 - 2026-10-11 - Retry transient HTTP failures with exponential backoff.
  v0.1.0 - 2026-10-07 - Introduce HttpCatalogProvider with 404/not-found mapping.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, TypeVar
from urllib.parse import quote

import httpx

from models import Category, PromptDetail, PromptSummary, SearchResult

from .exceptions import (
    CatalogDataError,
    CatalogNotFoundError,
    CatalogTransportError,
    CategoryNotFoundError,
    PromptNotFoundError,
    PromptSpaceError,
    QueryValidationError,
)
from .provider import normalise_query
from .retry import RetryPolicy, async_retry, is_retryable_httpx_error

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "http://localhost:3000"


def _error_message(response: httpx.Response) -> str | None:
    """Return the human-readable ``error``/``message`` field of an error response."""
    try:
        payload = response.json()
    except ValueError:
        return None
    if not isinstance(payload, dict):
        return None
    for key in ("error", "message"):
        value = payload.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
        if isinstance(value, dict) and isinstance(value.get("message"), str):
            return value["message"].strip() or None
    return None


def _unwrap_collection(payload: Any, key: str, path: str) -> list[dict[str, Any]]:
    entries = payload.get(key) if isinstance(payload, dict) else payload
    if not isinstance(entries, list):
        raise CatalogDataError(f"Expected a list of {key} from {path}")
    if not all(isinstance(entry, dict) for entry in entries):
        raise CatalogDataError(f"Expected JSON objects from {path}")
    return entries


T = TypeVar("T")


def _parse_records(
    entries: list[dict[str, Any]],
    factory: Callable[[Mapping[str, Any]], T],
    path: str,
) -> list[T]:
    try:
        return [factory(entry) for entry in entries]
    except (TypeError, ValueError) as exc:
        raise CatalogDataError(f"Invalid record from {path}: {exc}") from exc


@dataclass(slots=True)
class HttpCatalogProvider:
    """Read the catalogue from a PromptSpace-compatible HTTP API."""

    base_url: str = DEFAULT_API_BASE_URL
    timeout: float = 10.0
    retry_policy: RetryPolicy = field(default_factory=RetryPolicy)
    client_factory: Callable[[], httpx.AsyncClient] | None = None
    _category_name_map: dict[str, str] | None = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        """Validate and normalise the base URL."""
        if not self.base_url or not self.base_url.strip():
            raise ValueError("API base URL is required")
        self.base_url = self.base_url.strip().rstrip("/")

    async def list_categories(self) -> list[Category]:
        """Return every category published by the API."""
        path = "/api/categories"
        payload = await self._get_json(
            path, not_found=CatalogNotFoundError("Category listing is missing")
        )
        categories = _parse_records(
            _unwrap_collection(payload, "categories", path), Category.from_mapping, path
        )
        self._category_name_map = {category.id: category.name for category in categories}
        return categories

    async def list_prompts_by_category(self, category_id: str) -> list[PromptSummary]:
        """Return the prompt summaries listed for *category_id*."""
        path = f"/api/categories/{quote(category_id, safe='')}"
        payload = await self._get_json(
            path,
            not_found=CategoryNotFoundError(f"Category '{category_id}' does not exist."),
        )
        summaries = _parse_records(
            _unwrap_collection(payload, "prompts", path), PromptSummary.from_mapping, path
        )
        return [
            summary
            if summary.category_id
            else dataclasses.replace(summary, category_id=category_id)
            for summary in summaries
        ]

    async def get_prompt_detail(self, prompt_id: str) -> PromptDetail:
        """Return the fully hydrated prompt identified by *prompt_id*."""
        path = f"/api/prompts/{quote(prompt_id, safe='')}"
        payload = await self._get_json(
            path, not_found=PromptNotFoundError(f"Prompt '{prompt_id}' does not exist.")
        )
        if not isinstance(payload, dict):
            raise CatalogDataError(f"Expected a JSON object from {path}")
        try:
            detail = PromptDetail.from_mapping(payload)
        except (TypeError, ValueError) as exc:
            raise CatalogDataError(f"Invalid record from {path}: {exc}") from exc
        if detail.id != prompt_id:
            raise CatalogDataError(f"{path} returned prompt '{detail.id}'")
        return detail

    async def search(self, query: str) -> list[SearchResult]:
        """Return API search hits for *query*; short queries never reach the network."""
        try:
            needle = normalise_query(query)
        except QueryValidationError:
            return []
        path = "/api/search"
        payload = await self._get_json(
            path,
            params={"q": needle},
            not_found=CatalogNotFoundError("Search endpoint is unavailable"),
        )
        results = _parse_records(
            _unwrap_collection(payload, "results", path), SearchResult.from_mapping, path
        )
        if any(not result.category_name for result in results):
            names = await self._category_names()
            results = [
                result
                if result.category_name
                else dataclasses.replace(
                    result, category_name=names.get(result.category_id, result.category_id)
                )
                for result in results
            ]
        return results

    async def _category_names(self) -> dict[str, str]:
        """Return category names by id, fetched once per provider."""
        if self._category_name_map is not None:
            return self._category_name_map
        try:
            categories = await self.list_categories()
        except PromptSpaceError as exc:
            logger.warning("Search hits keep their category ids; listing failed: %s", exc)
            return {}
        self._category_name_map = {category.id: category.name for category in categories}
        return self._category_name_map

    async def _get_json(
        self,
        path: str,
        *,
        not_found: CatalogNotFoundError,
        params: dict[str, str] | None = None,
    ) -> Any:
        manage_client = self.client_factory is None
        if self.client_factory is None:
            client = httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout)
        else:
            client = self.client_factory()
        try:

            async def _send_request() -> httpx.Response:
                response = await client.get(path, params=params)
                response.raise_for_status()
                return response

            response = await async_retry(
                _send_request,
                policy=self.retry_policy,
                should_retry=is_retryable_httpx_error,
                description=f"GET {path}",
            )
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            if status_code == 404:
                raise not_found from exc
            message = _error_message(exc.response) or f"HTTP {status_code} from {path}"
            logger.warning("Catalogue request %s failed with %s: %s", path, status_code, message)
            raise CatalogTransportError(message, status_code=status_code) from exc
        except httpx.HTTPError as exc:
            logger.warning("Catalogue request %s failed: %s", path, exc)
            raise CatalogTransportError(f"Request to {path} failed") from exc
        finally:
            if manage_client:
                await client.aclose()
        try:
            return response.json()
        except ValueError as exc:
            raise CatalogDataError(f"{path} returned invalid JSON") from exc


__all__ = ["DEFAULT_API_BASE_URL", "HttpCatalogProvider"]
