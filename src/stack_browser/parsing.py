"""Conversion of Stack Exchange API responses into display-ready questions.

``render_markup`` turns the HTML fragment of a question body into plain text
wrapped to a fixed column width. ``parse_page_envelope`` decodes the JSON
page envelope, and ``to_display_record`` maps one raw item to a
:class:`~stack_browser.models.Question`.
"""

from __future__ import annotations

import html
import json
import logging
import textwrap
from collections.abc import Mapping
from html.parser import HTMLParser
from typing import Any

from stack_browser.errors import ParseError
from stack_browser.models import (
    BODY_WRAP_WIDTH,
    DESCRIPTION_LINE_COUNT,
    DESCRIPTION_SEPARATOR,
    PageEnvelope,
    Question,
)

logger = logging.getLogger(__name__)


class _MarkupTextRenderer(HTMLParser):
    """Render an HTML fragment as wrapped plain text, one block at a time."""

    _SKIP_TAGS = frozenset({"script", "style", "head", "title"})
    _BLOCK_TAGS = frozenset(
        {
            "p",
            "div",
            "h1",
            "h2",
            "h3",
            "h4",
            "h5",
            "h6",
            "li",
            "ul",
            "ol",
            "dl",
            "dt",
            "dd",
            "pre",
            "blockquote",
            "table",
            "tr",
            "section",
            "article",
            "figure",
            "figcaption",
        }
    )
    _HEADING_LEVELS = {"h1": 1, "h2": 2, "h3": 3, "h4": 4, "h5": 5, "h6": 6}
    _EMPHASIS_MARKS = {"strong": "**", "b": "**", "em": "*", "i": "*"}

    def __init__(self, width: int) -> None:
        super().__init__(convert_charrefs=True)
        self._width = width
        self._blocks: list[str] = []
        self._inline: list[str] = []
        self._pending_prefix = ""
        self._skip_depth = 0
        self._pre_depth = 0
        self._quote_depth = 0
        # One entry per open list: [ordered, next item number]
        self._lists: list[list[Any]] = []
        self._open_links: list[str | None] = []
        self._links: list[str] = []

    # ── Parser callbacks ────────────────────────────────────────────────

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if tag in self._SKIP_TAGS:
            self._skip_depth += 1
            return
        if tag in self._BLOCK_TAGS:
            self._flush()
        if tag in self._HEADING_LEVELS:
            self._pending_prefix = "#" * self._HEADING_LEVELS[tag] + " "
        elif tag in ("ul", "ol"):
            self._lists.append([tag == "ol", 1])
        elif tag == "li":
            self._pending_prefix = self._list_marker()
        elif tag == "blockquote":
            self._quote_depth += 1
        elif tag == "pre":
            self._pre_depth += 1
        elif tag == "br":
            self._inline.append("\n")
        elif tag == "hr":
            self._flush()
            self._blocks.append("-" * self._width)
        elif tag == "code" and not self._pre_depth:
            self._inline.append("`")
        elif tag in self._EMPHASIS_MARKS and not self._pre_depth:
            self._inline.append(self._EMPHASIS_MARKS[tag])
        elif tag == "a":
            href = dict(attrs).get("href")
            self._open_links.append(href)
            if href:
                self._inline.append("[")
        elif tag == "img":
            alt = dict(attrs).get("alt")
            if alt:
                self._inline.append(alt)

    def handle_endtag(self, tag: str) -> None:
        if tag in self._SKIP_TAGS:
            self._skip_depth = max(0, self._skip_depth - 1)
            return
        if tag == "code" and not self._pre_depth:
            self._inline.append("`")
        elif tag in self._EMPHASIS_MARKS and not self._pre_depth:
            self._inline.append(self._EMPHASIS_MARKS[tag])
        elif tag == "a" and self._open_links:
            href = self._open_links.pop()
            if href:
                self._links.append(href)
                self._inline.append(f"][{len(self._links)}]")
        elif tag in ("td", "th"):
            self._inline.append("  ")
        if tag in self._BLOCK_TAGS:
            self._flush()
        if tag in self._HEADING_LEVELS or tag == "li":
            self._pending_prefix = ""
        if tag in ("ul", "ol") and self._lists:
            self._lists.pop()
        elif tag == "blockquote":
            self._quote_depth = max(0, self._quote_depth - 1)
        elif tag == "pre":
            self._pre_depth = max(0, self._pre_depth - 1)

    def handle_data(self, data: str) -> None:
        if self._skip_depth:
            return
        if self._pre_depth:
            self._inline.append(data)
        else:
            self._inline.append(data.replace("\r", " ").replace("\n", " "))

    # ── Block assembly ──────────────────────────────────────────────────

    def _list_marker(self) -> str:
        if not self._lists:
            return "* "
        indent = "  " * (len(self._lists) - 1)
        current = self._lists[-1]
        if current[0]:
            marker = f"{current[1]}. "
            current[1] += 1
        else:
            marker = "* "
        return indent + marker

    def _flush(self) -> None:
        """Emit the pending inline text as one block (no-op when empty)."""
        raw = "".join(self._inline)
        self._inline = []
        if not raw.strip():
            return
        quote = "> " * self._quote_depth
        prefix = self._pending_prefix
        if not prefix and self._lists:
            prefix = "  " * len(self._lists)
        self._pending_prefix = ""

        if self._pre_depth:
            lines = raw.strip("\n").split("\n")
            rendered = [f"{quote}{prefix}{line.rstrip()}" for line in lines]
        else:
            rendered = []
            width = max(10, self._width - len(quote))
            segments = [" ".join(segment.split()) for segment in raw.split("\n")]
            first = True
            for segment in segments:
                if not segment:
                    continue
                wrapped = textwrap.wrap(
                    segment,
                    width=width,
                    initial_indent=prefix if first else " " * len(prefix),
                    subsequent_indent=" " * len(prefix),
                    break_on_hyphens=False,
                )
                rendered.extend(f"{quote}{line}" for line in wrapped)
                first = False
        if rendered:
            self._blocks.append("\n".join(rendered))

    def get_text(self) -> str:
        self._flush()
        blocks = list(self._blocks)
        if self._links:
            blocks.append("\n".join(f"[{n}]: {url}" for n, url in enumerate(self._links, 1)))
        return "\n\n".join(blocks)


def render_markup(raw: str, width: int = BODY_WRAP_WIDTH) -> str:
    """Convert an HTML fragment to plain text wrapped to ``width`` columns.

    Block-level elements are separated by a blank line. Preformatted blocks
    keep their original line structure; links become ``[text][n]`` with the
    numbered URLs listed at the end.
    """
    if not raw:
        return ""
    renderer = _MarkupTextRenderer(width)
    renderer.feed(raw)
    renderer.close()
    return renderer.get_text()


def build_description(body: str, line_count: int = DESCRIPTION_LINE_COUNT) -> str:
    """Join the first ``line_count`` non-blank body lines with a period separator."""
    lines = [line.strip() for line in body.splitlines() if line.strip()]
    return DESCRIPTION_SEPARATOR.join(lines[:line_count])


def _coerce_int(value: Any, default: int = 0) -> int:
    """Coerce untrusted values to int, excluding bool."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return default


def _coerce_str(value: Any, default: str = "") -> str:
    """Coerce untrusted values to str."""
    if isinstance(value, str):
        return value
    return default


def _coerce_optional_int(value: Any) -> int | None:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


def to_display_record(raw_item: Mapping[str, Any], width: int = BODY_WRAP_WIDTH) -> Question:
    """Map one raw API item to a :class:`Question`."""
    body = render_markup(_coerce_str(raw_item.get("body")), width)
    raw_tags = raw_item.get("tags")
    tags = [tag for tag in raw_tags if isinstance(tag, str)] if isinstance(raw_tags, list) else []
    return Question(
        # The API HTML-escapes titles (&quot;, &#39;, ...)
        title=html.unescape(_coerce_str(raw_item.get("title"))),
        link=_coerce_str(raw_item.get("link")),
        body=body,
        tags=tags,
        answer_count=max(0, _coerce_int(raw_item.get("answer_count"))),
        description=build_description(body),
        show_body=False,
    )


def parse_page_envelope(content: str) -> PageEnvelope:
    """Decode a page response into a :class:`PageEnvelope`.

    Raises:
        ParseError: The content is not JSON, the root is not an object, or
            the ``items`` list is missing.
    """
    try:
        data = json.loads(content)
    except (json.JSONDecodeError, TypeError) as e:
        raise ParseError(f"Response is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ParseError("Response root is not a JSON object")
    items = data.get("items")
    if not isinstance(items, list):
        raise ParseError("Response has no 'items' list")

    valid_items = [item for item in items if isinstance(item, dict)]
    if len(valid_items) != len(items):
        logger.warning("Dropped %d malformed item(s) from page", len(items) - len(valid_items))

    has_more = data.get("has_more", False)
    return PageEnvelope(
        items=valid_items,
        has_more=has_more if isinstance(has_more, bool) else False,
        quota_max=_coerce_optional_int(data.get("quota_max")),
        quota_remaining=_coerce_optional_int(data.get("quota_remaining")),
    )


__all__ = [
    "build_description",
    "parse_page_envelope",
    "render_markup",
    "to_display_record",
]
