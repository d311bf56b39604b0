"""Data models and constants for the Stack Overflow question browser."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# Application identity: single source of truth for platformdirs config paths
CONFIG_APP_NAME = "stack-browser"

# Stack Exchange API constants
STACK_API_BASE_URL = "https://api.stackexchange.com/"
UNANSWERED_QUESTIONS_PATH = "2.3/questions/unanswered"
# Named API filter that adds the question body to the default field set
QUESTION_FILTER = "!6VCr095Ee9eW)AbNMHD5dNZ4Q"
DEFAULT_SITE = "stackoverflow"
DEFAULT_PAGE_SIZE = 30
MAX_PAGE_SIZE = 100
DEFAULT_REQUEST_TIMEOUT = 15  # seconds
MAX_REQUEST_TIMEOUT = 120

# Response cache freshness window, per exact request URL
CACHE_TTL_SECONDS = 300

# Content conversion
BODY_WRAP_WIDTH = 60
DESCRIPTION_LINE_COUNT = 3
DESCRIPTION_SEPARATOR = ". "

FIRST_PAGE = 1


class ViewMode(Enum):
    """Top-level screen currently shown by the browser."""

    LIST = "list"
    DETAIL = "detail"


class Command(Enum):
    """Abstract user commands accepted by the view coordinator."""

    SELECT_NEXT = "select_next"
    SELECT_PREVIOUS = "select_previous"
    NEXT_PAGE = "next_page"
    PREVIOUS_PAGE = "previous_page"
    REFRESH = "refresh"
    TOGGLE_BODY = "toggle_body"
    ENTER_DETAIL = "enter_detail"
    EXIT_DETAIL = "exit_detail"
    SCROLL_UP = "scroll_up"
    SCROLL_DOWN = "scroll_down"
    OPEN_LINK = "open_link"
    QUIT = "quit"


@dataclass(slots=True)
class Question:
    """A display-ready question built from one API item."""

    title: str
    link: str
    body: str
    tags: list[str] = field(default_factory=list)
    answer_count: int = 0
    description: str = ""
    show_body: bool = False

    def copy(self) -> Question:
        """Return an independent copy (the tag list is not shared)."""
        return Question(
            title=self.title,
            link=self.link,
            body=self.body,
            tags=list(self.tags),
            answer_count=self.answer_count,
            description=self.description,
            show_body=self.show_body,
        )


@dataclass(slots=True, frozen=True)
class CacheEntry:
    """Raw response content plus the clock reading at fetch time."""

    content: str
    fetched_at: float


@dataclass(slots=True)
class PageEnvelope:
    """Decoded page-level API response (items plus pagination/quota hints)."""

    items: list[dict[str, Any]]
    has_more: bool = False
    quota_max: int | None = None
    quota_remaining: int | None = None


@dataclass(slots=True, frozen=True)
class NavigatorSnapshot:
    """Read-only view of the question list state for rendering."""

    questions: tuple[Question, ...]
    page: int
    selected_index: int | None


@dataclass(slots=True, frozen=True)
class DetailSnapshot:
    """Read-only view of the detail viewer state for rendering."""

    question: Question | None
    scroll_offset: int
    return_view: ViewMode


@dataclass(slots=True)
class UserConfig:
    """User configuration loaded from config.json (read-only at runtime)."""

    site: str = DEFAULT_SITE
    api_base_url: str = STACK_API_BASE_URL
    page_size: int = DEFAULT_PAGE_SIZE
    request_timeout: int = DEFAULT_REQUEST_TIMEOUT
    start_page: int = FIRST_PAGE
    theme_name: str = "monokai"
    config_defaulted: bool = False  # True when a corrupt file was replaced by defaults

    def __post_init__(self) -> None:
        """Clamp numeric fields to their valid ranges."""
        self.page_size = max(1, min(self.page_size, MAX_PAGE_SIZE))
        self.request_timeout = max(1, min(self.request_timeout, MAX_REQUEST_TIMEOUT))
        self.start_page = max(FIRST_PAGE, self.start_page)


__all__ = [
    "BODY_WRAP_WIDTH",
    "CACHE_TTL_SECONDS",
    "CONFIG_APP_NAME",
    "DEFAULT_PAGE_SIZE",
    "DEFAULT_REQUEST_TIMEOUT",
    "DEFAULT_SITE",
    "DESCRIPTION_LINE_COUNT",
    "DESCRIPTION_SEPARATOR",
    "FIRST_PAGE",
    "MAX_PAGE_SIZE",
    "MAX_REQUEST_TIMEOUT",
    "QUESTION_FILTER",
    "STACK_API_BASE_URL",
    "UNANSWERED_QUESTIONS_PATH",
    "CacheEntry",
    "Command",
    "DetailSnapshot",
    "NavigatorSnapshot",
    "PageEnvelope",
    "Question",
    "UserConfig",
    "ViewMode",
]
