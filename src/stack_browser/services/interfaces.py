"""Service interfaces + default adapters for app-level dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

import httpx

from stack_browser.cache import ResponseCache
from stack_browser.models import Question, UserConfig
from stack_browser.services.fetch_service import HttpFetchClient
from stack_browser.services.question_pipeline import QuestionPipeline


@runtime_checkable
class FetchClient(Protocol):
    """Interface for fetching one URL as text."""

    async def fetch(self, url: str) -> str:
        """Return the response body, raising ``FetchError`` on any failure."""
        ...


@runtime_checkable
class QuestionSource(Protocol):
    """Interface the navigator uses to load a page of questions."""

    async def get_page(self, page: int) -> list[Question]:
        """Return the questions on ``page``, raising ``PipelineError`` on failure."""
        ...


@dataclass(slots=True)
class AppServices:
    """Bundle of explicitly constructed services owned by the app."""

    fetch_client: HttpFetchClient
    pipeline: QuestionPipeline

    async def aclose(self) -> None:
        """Release network resources held by the services."""
        await self.fetch_client.aclose()


def build_default_app_services(
    config: UserConfig,
    client: httpx.AsyncClient | None = None,
) -> AppServices:
    """Build the default fetch client, response cache and pipeline for ``config``."""
    fetch_client = HttpFetchClient(client, timeout_seconds=config.request_timeout)
    pipeline = QuestionPipeline(
        fetch_client,
        ResponseCache(),
        base_url=config.api_base_url,
        site=config.site,
        page_size=config.page_size,
    )
    return AppServices(fetch_client=fetch_client, pipeline=pipeline)


__all__ = [
    "AppServices",
    "FetchClient",
    "QuestionSource",
    "build_default_app_services",
]
