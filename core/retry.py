"""Retry helpers for transient catalogue I/O failures.

Updates:
  v0.2.0 - 2026-10-11 - Bundle backoff parameters into RetryPolicy and log retried attempts.
  v0.1.0 - 2026-10-06 - Add async exponential backoff retry helper for HTTP catalogues.
"""

from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeVar

import httpx

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)

_RETRYABLE_HTTP_STATUS_CODES = {408, 429}


def is_retryable_http_status(status_code: int) -> bool:
    """Return ``True`` when *status_code* suggests a transient failure."""
    return status_code in _RETRYABLE_HTTP_STATUS_CODES or 500 <= status_code < 600


def is_retryable_httpx_error(exc: Exception) -> bool:
    """Return ``True`` when *exc* represents a transient httpx error."""
    if isinstance(exc, httpx.HTTPStatusError):
        return is_retryable_http_status(exc.response.status_code)
    return isinstance(exc, (httpx.TimeoutException, httpx.TransportError))


@dataclass(slots=True, frozen=True)
class RetryPolicy:
    """Exponential backoff parameters shared by catalogue clients."""

    max_attempts: int = 3
    base_delay_seconds: float = 0.5
    max_delay_seconds: float = 4.0
    jitter_fraction: float = 0.1

    def delay_for(self, attempt: int) -> float:
        """Return the sleep before the attempt following *attempt*."""
        delay = min(self.max_delay_seconds, self.base_delay_seconds * (2 ** (attempt - 1)))
        if self.jitter_fraction <= 0:
            return delay
        return delay + (delay * self.jitter_fraction * random.random())


T = TypeVar("T")


async def async_retry(
    operation: Callable[[], Awaitable[T]],
    *,
    policy: RetryPolicy | None = None,
    should_retry: Callable[[Exception], bool],
    description: str = "operation",
) -> T:
    """Execute *operation* with exponential-backoff retries.

    Args:
      operation: Zero-argument coroutine factory to execute.
      policy: Backoff parameters; defaults to :class:`RetryPolicy` defaults.
      should_retry: Predicate that decides whether an exception is retryable.
      description: Label used when logging retried attempts.

    Returns:
      The value returned by *operation* on success.

    Raises:
      Exception: Re-raises the last exception when retries are exhausted or non-retryable.
    """
    active = policy or RetryPolicy()
    attempts = max(1, int(active.max_attempts))
    for attempt in range(1, attempts + 1):
        try:
            return await operation()
        except Exception as exc:
            if attempt >= attempts or not should_retry(exc):
                raise
            logger.info(
                "Retrying %s after attempt %d/%d failed: %s", description, attempt, attempts, exc
            )
            if active.base_delay_seconds <= 0:
                continue
            await asyncio.sleep(active.delay_for(attempt))
    raise RuntimeError("async_retry exhausted retries")  # pragma: no cover


__all__ = [
    "RetryPolicy",
    "async_retry",
    "is_retryable_http_status",
    "is_retryable_httpx_error",
]
