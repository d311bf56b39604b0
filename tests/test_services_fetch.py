"""Tests for the httpx-backed fetch client."""

from __future__ import annotations

import httpx
import pytest

from stack_browser.errors import FetchError, PipelineError
from stack_browser.services.fetch_service import USER_AGENT, HttpFetchClient

URL = "https://api.stackexchange.com/2.3/questions/unanswered?site=stackoverflow&page=1"


def _client_with(handler) -> HttpFetchClient:
    return HttpFetchClient(httpx.AsyncClient(transport=httpx.MockTransport(handler)))


async def test_fetch_returns_body_text():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, text='{"items": []}')

    client = _client_with(handler)
    try:
        assert await client.fetch(URL) == '{"items": []}'
    finally:
        await client.aclose()

    assert len(seen) == 1
    assert str(seen[0].url) == URL
    assert seen[0].headers["User-Agent"] == USER_AGENT


@pytest.mark.parametrize("status", [400, 404, 429, 500, 503])
async def test_non_success_status_raises_fetch_error(status):
    client = _client_with(lambda request: httpx.Response(status, text="nope"))
    try:
        with pytest.raises(FetchError) as exc_info:
            await client.fetch(URL)
    finally:
        await client.aclose()

    assert exc_info.value.status_code == status
    assert exc_info.value.url == URL


async def test_timeout_raises_fetch_error_without_status():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    client = _client_with(handler)
    try:
        with pytest.raises(FetchError) as exc_info:
            await client.fetch(URL)
    finally:
        await client.aclose()

    assert exc_info.value.status_code is None
    assert "timed out" in str(exc_info.value)


async def test_transport_error_raises_pipeline_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = _client_with(handler)
    try:
        with pytest.raises(PipelineError):
            await client.fetch(URL)
    finally:
        await client.aclose()


async def test_custom_user_agent_and_timeout():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, text="ok")

    client = HttpFetchClient(
        httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        timeout_seconds=3,
        user_agent="custom/1.0",
    )
    try:
        await client.fetch(URL)
    finally:
        await client.aclose()

    assert seen[0].headers["User-Agent"] == "custom/1.0"
    assert seen[0].extensions["timeout"]["read"] == 3


async def test_aclose_closes_underlying_client():
    inner = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
    client = HttpFetchClient(inner)
    await client.aclose()
    assert inner.is_closed


async def test_invalid_url_raises_fetch_error():
    client = HttpFetchClient()
    try:
        with pytest.raises(PipelineError) as exc_info:
            await client.fetch("http://[::1/x")
    finally:
        await client.aclose()
    assert isinstance(exc_info.value, FetchError)
    assert exc_info.value.url == "http://[::1/x"
    assert exc_info.value.status_code is None
