"""Tests for the async retry helper.

Updates:
  v0.1.0 - 2026-10-11 - Cover retry predicate, exhaustion and backoff bounds.
"""

from __future__ import annotations

import httpx
import pytest

from core.retry import (
    RetryPolicy,
    async_retry,
    is_retryable_http_status,
    is_retryable_httpx_error,
)


@pytest.mark.asyncio()
async def test_async_retry_returns_after_transient_failure() -> None:
    calls = {"count": 0}

    async def operation() -> str:
        calls["count"] += 1
        if calls["count"] < 3:
            raise RuntimeError("flaky")
        return "ok"

    result = await async_retry(
        operation,
        policy=RetryPolicy(max_attempts=3, base_delay_seconds=0.0),
        should_retry=lambda exc: isinstance(exc, RuntimeError),
    )

    assert result == "ok"
    assert calls["count"] == 3


@pytest.mark.asyncio()
async def test_async_retry_stops_on_non_retryable_error() -> None:
    calls = {"count": 0}

    async def operation() -> str:
        calls["count"] += 1
        raise KeyError("fatal")

    with pytest.raises(KeyError):
        await async_retry(
            operation,
            policy=RetryPolicy(max_attempts=5, base_delay_seconds=0.0),
            should_retry=lambda exc: isinstance(exc, RuntimeError),
        )
    assert calls["count"] == 1


@pytest.mark.asyncio()
async def test_async_retry_reraises_when_exhausted() -> None:
    async def operation() -> str:
        raise RuntimeError("still down")

    with pytest.raises(RuntimeError, match="still down"):
        await async_retry(
            operation,
            policy=RetryPolicy(max_attempts=2, base_delay_seconds=0.0),
            should_retry=lambda exc: True,
        )


def test_retry_policy_delay_is_capped() -> None:
    policy = RetryPolicy(base_delay_seconds=1.0, max_delay_seconds=3.0, jitter_fraction=0.0)

    assert [policy.delay_for(attempt) for attempt in (1, 2, 3, 4)] == [1.0, 2.0, 3.0, 3.0]


@pytest.mark.parametrize(
    ("status_code", "expected"),
    [(408, True), (429, True), (500, True), (503, True), (400, False), (404, False)],
)
def test_retryable_status_codes(status_code: int, expected: bool) -> None:
    assert is_retryable_http_status(status_code) is expected


def test_retryable_httpx_errors() -> None:
    request = httpx.Request("GET", "https://catalog.test/api/categories")
    server_error = httpx.HTTPStatusError(
        "boom", request=request, response=httpx.Response(502, request=request)
    )
    not_found = httpx.HTTPStatusError(
        "missing", request=request, response=httpx.Response(404, request=request)
    )

    assert is_retryable_httpx_error(server_error)
    assert not is_retryable_httpx_error(not_found)
    assert is_retryable_httpx_error(httpx.ReadTimeout("slow", request=request))
    assert not is_retryable_httpx_error(ValueError("nope"))
