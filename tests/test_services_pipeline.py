"""Tests for the cached fetch pipeline."""

from __future__ import annotations

from urllib.parse import parse_qs, urlsplit

import pytest

from stack_browser.cache import ResponseCache
from stack_browser.errors import FetchError, ParseError
from stack_browser.models import CACHE_TTL_SECONDS, QUESTION_FILTER
from stack_browser.services.question_pipeline import QuestionPipeline


@pytest.fixture
def pipeline(fake_fetch_client, fake_clock):
    return QuestionPipeline(fake_fetch_client, ResponseCache(now=fake_clock))


class TestBuildPageUrl:
    def test_fixed_query_parameters(self, pipeline):
        url = pipeline.build_page_url(3)
        parts = urlsplit(url)
        query = parse_qs(parts.query)
        assert f"{parts.scheme}://{parts.netloc}{parts.path}" == (
            "https://api.stackexchange.com/2.3/questions/unanswered"
        )
        assert query == {
            "order": ["desc"],
            "sort": ["activity"],
            "site": ["stackoverflow"],
            "filter": [QUESTION_FILTER],
            "page": ["3"],
        }

    def test_page_size_and_site(self, fake_fetch_client):
        pipeline = QuestionPipeline(
            fake_fetch_client, base_url="https://example.test", site="superuser", page_size=50
        )
        query = parse_qs(urlsplit(pipeline.build_page_url(1)).query)
        assert query["site"] == ["superuser"]
        assert query["pagesize"] == ["50"]
        assert pipeline.build_page_url(1).startswith("https://example.test/2.3/")

    def test_urls_differ_only_by_page(self, pipeline):
        assert pipeline.build_page_url(1) != pipeline.build_page_url(2)
        assert pipeline.build_page_url(2) == pipeline.build_page_url(2)


class TestGetPage:
    async def test_live_fetch_converts_items(self, pipeline, fake_fetch_client, make_page_content):
        fake_fetch_client.pages[1] = make_page_content(3)
        questions = await pipeline.get_page(1)
        assert [q.title for q in questions] == ["Question 1.0", "Question 1.1", "Question 1.2"]
        assert questions[0].description == "Body of question 1.0"
        assert fake_fetch_client.call_count == 1
        assert pipeline.last_from_cache is False
        assert pipeline.last_envelope is not None
        assert pipeline.last_envelope.quota_remaining == 299

    async def test_second_call_within_ttl_uses_cache(
        self, pipeline, fake_fetch_client, fake_clock, make_page_content
    ):
        fake_fetch_client.pages[1] = make_page_content(2)
        await pipeline.get_page(1)
        fake_clock.advance(CACHE_TTL_SECONDS - 1)
        questions = await pipeline.get_page(1)
        assert len(questions) == 2
        assert fake_fetch_client.call_count == 1
        assert pipeline.last_from_cache is True

    async def test_stale_entry_triggers_live_fetch(
        self, pipeline, fake_fetch_client, fake_clock, make_page_content
    ):
        fake_fetch_client.pages[1] = make_page_content(2)
        await pipeline.get_page(1)
        fake_clock.advance(CACHE_TTL_SECONDS)
        fake_fetch_client.pages[1] = make_page_content(4)
        questions = await pipeline.get_page(1)
        assert len(questions) == 4
        assert fake_fetch_client.call_count == 2
        assert pipeline.last_from_cache is False

    async def test_each_page_is_cached_separately(
        self, pipeline, fake_fetch_client, make_page_content
    ):
        fake_fetch_client.pages[1] = make_page_content(1, page=1)
        fake_fetch_client.pages[2] = make_page_content(1, page=2)
        await pipeline.get_page(1)
        await pipeline.get_page(2)
        await pipeline.get_page(1)
        assert fake_fetch_client.call_count == 2
        assert len(pipeline.cache) == 2

    async def test_fetch_failure_stores_nothing(self, pipeline, fake_fetch_client):
        fake_fetch_client.fail_with = FetchError("boom", url="x")
        with pytest.raises(FetchError):
            await pipeline.get_page(1)
        assert len(pipeline.cache) == 0

    async def test_malformed_content_raises_parse_error(self, pipeline, fake_fetch_client):
        fake_fetch_client.pages[1] = "<html>rate limited</html>"
        with pytest.raises(ParseError):
            await pipeline.get_page(1)

    async def test_empty_page(self, pipeline, fake_fetch_client, make_page_content):
        fake_fetch_client.pages[1] = make_page_content(0, has_more=False)
        assert await pipeline.get_page(1) == []
        assert pipeline.last_envelope.has_more is False

    def test_default_cache_is_created(self, fake_fetch_client):
        pipeline = QuestionPipeline(fake_fetch_client)
        assert isinstance(pipeline.cache, ResponseCache)
        assert pipeline.cache.ttl_seconds == CACHE_TTL_SECONDS
