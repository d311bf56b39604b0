"""Helpers for actions that leave the terminal (opening URLs)."""

from __future__ import annotations

import logging
import webbrowser
from collections.abc import Callable

logger = logging.getLogger(__name__)


def open_in_browser(url: str, *, opener: Callable[[str], bool] = webbrowser.open) -> bool:
    """Open ``url`` in the system browser. Returns True on success.

    Browser failures are logged and reported as False; they never propagate.
    """
    if not url:
        logger.debug("Refusing to open an empty URL")
        return False
    try:
        opened = opener(url)
    except (webbrowser.Error, OSError) as e:
        logger.warning("Failed to open browser for %s: %s", url, e)
        return False
    if not opened:
        logger.warning("No browser could be launched for %s", url)
        return False
    return True


__all__ = [
    "open_in_browser",
]
