"""Widget chrome: footer hints and the status line."""

from __future__ import annotations

from textual.widgets import Static

from stack_browser.models import NavigatorSnapshot, PageEnvelope
from stack_browser.themes import MONOKAI_THEME
from stack_browser.widgets.listing import escape_rich_text


class ContextFooter(Static):
    """Context-sensitive footer showing relevant keybindings."""

    DEFAULT_CSS = """
    ContextFooter {
        dock: bottom;
        height: 1;
        background: $th-background;
        color: $th-muted;
        padding: 0 1;
        border-top: solid $th-panel-alt;
    }
    """

    def render_bindings(
        self,
        bindings: list[tuple[str, str]],
        mode_badge: str = "",
        colors: dict[str, str] | None = None,
    ) -> None:
        """Update the footer with a list of (key, label) binding hints."""
        colors = colors or MONOKAI_THEME
        accent = colors["accent"]
        muted = colors["muted"]
        parts = []
        if mode_badge:
            parts.append(mode_badge)
        for key, label in bindings:
            parts.append(f"[bold {accent}]{escape_rich_text(key)}[/] [{muted}]{label}[/]")
        self.update("  ".join(parts))


def build_status_text(
    snapshot: NavigatorSnapshot,
    *,
    site: str,
    envelope: PageEnvelope | None = None,
    from_cache: bool = False,
    message: str = "",
) -> str:
    """Build the one-line status bar text for the list view."""
    count = len(snapshot.questions)
    parts = [
        escape_rich_text(site),
        f"page {snapshot.page}",
        f"{count} question{'s' if count != 1 else ''}",
    ]
    if envelope is not None:
        parts.append("cached" if from_cache else "live")
        if envelope.has_more:
            parts.append("more pages")
        if envelope.quota_remaining is not None and envelope.quota_max is not None:
            parts.append(f"quota {envelope.quota_remaining}/{envelope.quota_max}")
    if message:
        parts.append(escape_rich_text(message))
    return " · ".join(parts)


__all__ = [
    "ContextFooter",
    "build_status_text",
]
