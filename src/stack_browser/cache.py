"""In-memory response cache with a per-entry freshness window.

Entries are keyed by the fully qualified request URL. Staleness is decided
lazily at lookup time; nothing is ever evicted except by replacement, which
is fine because a session only visits a handful of page URLs.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from stack_browser.models import CACHE_TTL_SECONDS, CacheEntry

logger = logging.getLogger(__name__)


class ResponseCache:
    """Map of request URL to raw response content plus fetch time.

    Args:
        ttl_seconds: Freshness window. An entry whose age is at least this
            many seconds is treated as a miss.
        now: Clock returning seconds. Defaults to :func:`time.monotonic`;
            tests pass a fake clock to simulate elapsed time.
    """

    def __init__(
        self,
        ttl_seconds: float = CACHE_TTL_SECONDS,
        now: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl_seconds = ttl_seconds
        self._now = now
        self._entries: dict[str, CacheEntry] = {}

    @property
    def ttl_seconds(self) -> float:
        return self._ttl_seconds

    def lookup(self, key: str) -> str | None:
        """Return cached content for ``key`` if present and still fresh."""
        entry = self._entries.get(key)
        if entry is None:
            logger.debug("Cache miss (absent): %s", key)
            return None
        age = self._now() - entry.fetched_at
        if age >= self._ttl_seconds:
            logger.debug("Cache miss (stale, %.1fs old): %s", age, key)
            return None
        logger.debug("Cache hit (%.1fs old): %s", age, key)
        return entry.content

    def store(self, key: str, content: str) -> None:
        """Insert or replace the entry for ``key``, stamped with the current time."""
        self._entries[key] = CacheEntry(content=content, fetched_at=self._now())

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)


__all__ = [
    "ResponseCache",
]
