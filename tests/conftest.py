"""Pytest configuration for shared test fixtures and environment hooks.

Updates:
  v0.2.0 - 2026-10-14 - Add catalogue directory, gated provider and clipboard fixtures.
  v0.1.0 - 2026-10-08 - Force Qt offscreen platform for headless test runs.
"""

from __future__ import annotations

import asyncio
import json
import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from core.exceptions import CategoryNotFoundError, PromptNotFoundError
from models import Category, PromptDetail, PromptSummary, SearchResult


def pytest_configure(config: Any) -> None:
    """Ensure Qt uses the offscreen platform during tests to avoid GUI aborts."""
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture(autouse=True)
def _isolate_settings_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep developer .env files and PROMPTSPACE_* variables out of tests."""
    for key in list(os.environ):
        if key.upper().startswith("PROMPTSPACE_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("PROMPTSPACE_ENV_FILE", "")
    monkeypatch.chdir(tmp_path)


def _write_json(path: Path, payload: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload), encoding="utf-8")


@pytest.fixture()
def catalog_dir(tmp_path: Path) -> Path:
    """Return a small on-disk catalogue: two populated categories and one empty one."""
    root = tmp_path / "catalog"
    _write_json(
        root / "categories.json",
        {
            "categories": [
                {"id": "marketing", "name": "Marketing", "iconName": "Megaphone", "promptCount": 1},
                {"id": "coding", "name": "Coding", "description": "Dev helpers", "promptCount": 2},
                {"id": "empty", "name": "Empty Shelf", "promptCount": 0},
            ]
        },
    )
    _write_json(
        root / "categories" / "marketing.json",
        [
            {
                "id": "mk-launch",
                "categoryId": "marketing",
                "title": "Launch email",
                "shortDescription": "Announce a product",
                "tags": ["email", "launch"],
            }
        ],
    )
    _write_json(
        root / "categories" / "coding.json",
        {
            "prompts": [
                {
                    "id": "code-review",
                    "title": "Code review",
                    "shortDescription": "Review a diff",
                    "tags": ["review"],
                },
                {
                    "id": "code-refactor",
                    "categoryId": "coding",
                    "title": "Refactor helper",
                    "shortDescription": "Tidy a function",
                    "tags": ["code"],
                },
            ]
        },
    )
    _write_json(
        root / "prompts" / "mk-launch.json",
        {
            "id": "mk-launch",
            "categoryId": "marketing",
            "title": "Launch email",
            "shortDescription": "Announce a product",
            "fullDescription": "Write a launch email for a new product.",
            "content": "Write a launch email for {product}.",
            "tags": ["email", "launch"],
        },
    )
    _write_json(
        root / "prompts" / "code-review.json",
        {
            "id": "code-review",
            "categoryId": "coding",
            "title": "Code review",
            "shortDescription": "Review a diff",
            "fullDescription": "Structured review of a diff.",
            "content": "Review this diff:\n{diff}",
            "tags": ["review"],
        },
    )
    _write_json(
        root / "prompts" / "code-refactor.json",
        {
            "id": "code-refactor",
            "categoryId": "coding",
            "title": "Refactor helper",
            "shortDescription": "Tidy a function",
            "prompt": "Refactor {function} without changing behaviour.",
            "tags": ["code"],
        },
    )
    return root


class InMemoryClipboard:
    """Clipboard double that records every write."""

    def __init__(self) -> None:
        self.writes: list[str] = []

    @property
    def text(self) -> str | None:
        return self.writes[-1] if self.writes else None

    def set_text(self, text: str) -> None:
        self.writes.append(text)


@pytest.fixture()
def clipboard() -> InMemoryClipboard:
    return InMemoryClipboard()


class GatedProvider:
    """Provider double whose responses can be held back per call key.

    ``gate(kind, key)`` returns an :class:`asyncio.Event`; a call for that key
    records itself and then waits until the event is set.
    """

    def __init__(
        self,
        categories: list[Category],
        prompts: dict[str, list[PromptSummary]],
        details: dict[str, PromptDetail],
        search_results: dict[str, list[SearchResult]] | None = None,
    ) -> None:
        self.categories = categories
        self.prompts = prompts
        self.details = details
        self.search_results = search_results or {}
        self.calls: list[tuple[str, str]] = []
        self.failures: dict[tuple[str, str], Exception] = {}
        self._gates: dict[tuple[str, str], asyncio.Event] = {}

    def gate(self, kind: str, key: str) -> asyncio.Event:
        event = asyncio.Event()
        self._gates[(kind, key)] = event
        return event

    def calls_for(self, kind: str) -> list[str]:
        return [key for call_kind, key in self.calls if call_kind == kind]

    async def _enter(self, kind: str, key: str) -> None:
        self.calls.append((kind, key))
        event = self._gates.get((kind, key))
        if event is not None:
            await event.wait()
        failure = self.failures.get((kind, key))
        if failure is not None:
            raise failure

    async def list_categories(self) -> list[Category]:
        await self._enter("categories", "")
        return list(self.categories)

    async def list_prompts_by_category(self, category_id: str) -> list[PromptSummary]:
        await self._enter("category", category_id)
        if category_id not in self.prompts:
            raise CategoryNotFoundError(f"Category '{category_id}' does not exist.")
        return list(self.prompts[category_id])

    async def get_prompt_detail(self, prompt_id: str) -> PromptDetail:
        await self._enter("prompt", prompt_id)
        if prompt_id not in self.details:
            raise PromptNotFoundError(f"Prompt '{prompt_id}' does not exist.")
        return self.details[prompt_id]

    async def search(self, query: str) -> list[SearchResult]:
        await self._enter("search", query)
        return list(self.search_results.get(query, []))


def _detail(prompt_id: str, category_id: str, title: str) -> PromptDetail:
    return PromptDetail(
        id=prompt_id,
        category_id=category_id,
        title=title,
        short_description=f"{title} summary",
        tags=("sample",),
        full_description=f"{title} in full",
        content=f"Template for {title}",
    )


@pytest.fixture()
def gated_provider() -> GatedProvider:
    """Return a provider with marketing/coding/empty categories and two prompts each."""
    details = {
        "m1": _detail("m1", "marketing", "Launch email"),
        "m2": _detail("m2", "marketing", "Persona sketch"),
        "c1": _detail("c1", "coding", "Code review"),
        "c2": _detail("c2", "coding", "Bug hunt"),
    }
    prompts = {
        "marketing": [details["m1"].summary(), details["m2"].summary()],
        "coding": [details["c1"].summary(), details["c2"].summary()],
        "empty": [],
    }
    categories = [
        Category(id="marketing", name="Marketing", prompt_count=2),
        Category(id="coding", name="Coding", prompt_count=2),
        Category(id="empty", name="Empty", prompt_count=0),
    ]
    return GatedProvider(categories, prompts, details)


async def wait_until(predicate: Callable[[], bool], *, attempts: int = 200) -> None:
    """Yield to the loop until *predicate* holds or fail the test."""
    for _ in range(attempts):
        if predicate():
            return
        await asyncio.sleep(0)
    raise AssertionError("condition was not reached")
