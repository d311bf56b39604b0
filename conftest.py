"""Shared test fixtures for stack-browser tests."""

from __future__ import annotations

import json
import logging
from typing import Any
from urllib.parse import parse_qs, urlsplit

import pytest

from stack_browser.errors import FetchError
from stack_browser.models import Question, UserConfig

# ── Global state isolation ───────────────────────────────────────────────────


@pytest.fixture(autouse=True)
def _reset_logging_disable():
    """Undo logging.disable() from CLI tests so caplog keeps working."""
    yield
    logging.disable(logging.NOTSET)


# ── Test doubles ─────────────────────────────────────────────────────────────


class FakeClock:
    """Manually advanced monotonic clock for cache freshness tests."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeFetchClient:
    """In-memory FetchClient serving canned page content keyed by page number.

    Set ``fail_with`` to make every subsequent fetch raise that error.
    """

    def __init__(self, pages: dict[int, str] | None = None) -> None:
        self.pages: dict[int, str] = dict(pages or {})
        self.calls: list[str] = []
        self.fail_with: Exception | None = None
        self.closed = False

    @property
    def call_count(self) -> int:
        return len(self.calls)

    async def fetch(self, url: str) -> str:
        self.calls.append(url)
        if self.fail_with is not None:
            raise self.fail_with
        page = int(parse_qs(urlsplit(url).query)["page"][0])
        try:
            return self.pages[page]
        except KeyError:
            raise FetchError(f"HTTP 404 for {url}", url=url, status_code=404) from None

    async def aclose(self) -> None:
        self.closed = True


# ── Factories ────────────────────────────────────────────────────────────────


@pytest.fixture
def make_question():
    """Factory fixture for creating Question instances with sensible defaults."""

    def _make(
        title: str = "How do I reverse a list?",
        link: str = "https://stackoverflow.com/q/1",
        body: str = "I have a list.\n\nI want it reversed.",
        tags: list[str] | None = None,
        answer_count: int = 0,
        description: str | None = None,
        show_body: bool = False,
    ) -> Question:
        if tags is None:
            tags = ["python"]
        if description is None:
            description = ". ".join(line for line in body.splitlines() if line.strip())
        return Question(
            title=title,
            link=link,
            body=body,
            tags=tags,
            answer_count=answer_count,
            description=description,
            show_body=show_body,
        )

    return _make


@pytest.fixture
def make_raw_item():
    """Factory fixture for one API item as returned by /questions/unanswered."""

    def _make(
        title: str = "How do I reverse a list?",
        link: str = "https://stackoverflow.com/q/1",
        body: str = "<p>I have a list.</p><p>I want it reversed.</p>",
        tags: list[str] | None = None,
        answer_count: int = 0,
        **extra: Any,
    ) -> dict[str, Any]:
        item: dict[str, Any] = {
            "title": title,
            "link": link,
            "body": body,
            "tags": ["python"] if tags is None else tags,
            "answer_count": answer_count,
        }
        item.update(extra)
        return item

    return _make


@pytest.fixture
def make_page_content(make_raw_item):
    """Factory fixture for a JSON page envelope with ``count`` questions."""

    def _make(
        count: int = 3,
        *,
        page: int = 1,
        items: list[dict[str, Any]] | None = None,
        has_more: bool = True,
        quota_max: int = 300,
        quota_remaining: int = 299,
    ) -> str:
        if items is None:
            items = [
                make_raw_item(
                    title=f"Question {page}.{i}",
                    link=f"https://stackoverflow.com/q/{page * 1000 + i}",
                    body=f"<p>Body of question {page}.{i}</p>",
                )
                for i in range(count)
            ]
        return json.dumps(
            {
                "items": items,
                "has_more": has_more,
                "quota_max": quota_max,
                "quota_remaining": quota_remaining,
            }
        )

    return _make


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def fake_fetch_client():
    return FakeFetchClient()


@pytest.fixture
def sample_config():
    """Factory fixture for creating UserConfig with optional overrides."""

    def _make(**kwargs: Any) -> UserConfig:
        return UserConfig(**kwargs)

    return _make
