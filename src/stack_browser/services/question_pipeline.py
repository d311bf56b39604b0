"""Cached fetch pipeline: page URL -> cached or live content -> questions."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from urllib.parse import urlencode

from stack_browser.cache import ResponseCache
from stack_browser.models import (
    DEFAULT_SITE,
    QUESTION_FILTER,
    STACK_API_BASE_URL,
    UNANSWERED_QUESTIONS_PATH,
    PageEnvelope,
    Question,
)
from stack_browser.parsing import parse_page_envelope, to_display_record

if TYPE_CHECKING:
    from stack_browser.services.interfaces import FetchClient

logger = logging.getLogger(__name__)


class QuestionPipeline:
    """Produce the display records of one page of unanswered questions.

    The response cache is owned by the pipeline; a fresh cached response for
    the exact page URL short-circuits the network fetch. Successful fetches
    are stored before decoding, so a response that fails to decode is still
    cached and will fail the same way until it goes stale.
    """

    def __init__(
        self,
        fetch_client: FetchClient,
        cache: ResponseCache | None = None,
        *,
        base_url: str = STACK_API_BASE_URL,
        site: str = DEFAULT_SITE,
        page_size: int | None = None,
    ) -> None:
        self._fetch_client = fetch_client
        self._cache = cache if cache is not None else ResponseCache()
        self._base_url = base_url.rstrip("/") + "/"
        self._site = site
        self._page_size = page_size
        self.last_envelope: PageEnvelope | None = None
        self.last_from_cache: bool = False

    @property
    def cache(self) -> ResponseCache:
        return self._cache

    @property
    def site(self) -> str:
        return self._site

    def build_page_url(self, page: int) -> str:
        """Build the fully qualified request URL (also the cache key) for ``page``."""
        params: list[tuple[str, str | int]] = [
            ("order", "desc"),
            ("sort", "activity"),
            ("site", self._site),
            ("filter", QUESTION_FILTER),
        ]
        if self._page_size is not None:
            params.append(("pagesize", self._page_size))
        params.append(("page", page))
        return f"{self._base_url}{UNANSWERED_QUESTIONS_PATH}?{urlencode(params)}"

    async def _get_content(self, url: str) -> tuple[str, bool]:
        cached = self._cache.lookup(url)
        if cached is not None:
            return cached, True
        content = await self._fetch_client.fetch(url)
        self._cache.store(url, content)
        return content, False

    async def get_page(self, page: int) -> list[Question]:
        """Return the questions of ``page``.

        Raises:
            FetchError: The live fetch failed (nothing is cached).
            ParseError: The page envelope could not be decoded.
        """
        url = self.build_page_url(page)
        content, from_cache = await self._get_content(url)
        envelope = parse_page_envelope(content)
        questions = [to_display_record(item) for item in envelope.items]
        self.last_envelope = envelope
        self.last_from_cache = from_cache
        logger.debug(
            "Page %d: %d questions (cached=%s, has_more=%s, quota=%s/%s)",
            page,
            len(questions),
            from_cache,
            envelope.has_more,
            envelope.quota_remaining,
            envelope.quota_max,
        )
        return questions


__all__ = [
    "QuestionPipeline",
]
