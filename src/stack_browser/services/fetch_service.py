"""HTTP fetch client for the Stack Exchange API."""

from __future__ import annotations

import logging

import httpx

from stack_browser.errors import FetchError
from stack_browser.models import DEFAULT_REQUEST_TIMEOUT

logger = logging.getLogger(__name__)

USER_AGENT = "stack-browser/0.1"


class HttpFetchClient:
    """Fetch a URL as text through a shared ``httpx.AsyncClient``.

    The client is created on construction (connection pooling across pages)
    and closed with :meth:`aclose`. Any transport failure, timeout or
    non-2xx status is raised as :class:`~stack_browser.errors.FetchError`.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        timeout_seconds: float = DEFAULT_REQUEST_TIMEOUT,
        user_agent: str = USER_AGENT,
    ) -> None:
        self._client = client if client is not None else httpx.AsyncClient()
        self._timeout_seconds = timeout_seconds
        self._headers = {"User-Agent": user_agent, "Accept": "application/json"}

    async def fetch(self, url: str) -> str:
        """GET ``url`` and return the decoded response body."""
        logger.debug("GET %s", url)
        try:
            response = await self._client.get(
                url,
                headers=self._headers,
                timeout=self._timeout_seconds,
                follow_redirects=True,
            )
            response.raise_for_status()
        except httpx.TimeoutException as e:
            logger.warning("Request timed out after %ss: %s", self._timeout_seconds, url)
            raise FetchError(f"Request timed out: {e}", url=url) from e
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.warning("Request returned HTTP %d: %s", status, url)
            raise FetchError(f"HTTP {status}", url=url, status_code=status) from e
        except httpx.InvalidURL as e:
            logger.warning("Invalid request URL: %s (%s)", url, e)
            raise FetchError(f"Invalid URL: {e}", url=url) from e
        except httpx.HTTPError as e:
            logger.warning("Request failed: %s (%s)", url, e)
            raise FetchError(f"Request failed: {e}", url=url) from e
        return response.text

    async def aclose(self) -> None:
        await self._client.aclose()


__all__ = [
    "USER_AGENT",
    "HttpFetchClient",
]
