"""Internal UI constants for the StackBrowser app."""

from __future__ import annotations

from textual.binding import Binding, BindingType

APP_CSS = """
Screen {
    background: $th-background;
}

Header {
    background: $th-panel-alt;
    color: $th-text;
}

#main-container {
    height: 1fr;
}

#list-pane {
    height: 100%;
    border: tall $th-accent;
    background: $th-panel;
}

#detail-pane {
    height: 100%;
    border: tall $th-accent-alt;
    background: $th-panel;
    display: none;
}

#main-container.detail-mode #list-pane {
    display: none;
}

#main-container.detail-mode #detail-pane {
    display: block;
}

#list-header {
    padding: 0 1;
    background: $th-panel;
    color: $th-accent;
    text-style: bold;
}

#details-header {
    padding: 0 1;
    background: $th-panel;
    color: $th-accent-alt;
    text-style: bold;
}

#question-list {
    height: 1fr;
    scrollbar-gutter: stable;
}

#question-list > .option-list--option-highlighted {
    background: $th-highlight;
}

#question-list > .option-list--option-hover {
    background: $th-panel-alt;
}

#details-scroll {
    height: 1fr;
    padding: 0 1;
}

QuestionDetails {
    padding: 0;
}

VerticalScroll {
    scrollbar-background: $th-scrollbar-bg;
    scrollbar-color: $th-scrollbar-thumb;
    scrollbar-color-hover: $th-scrollbar-hover;
    scrollbar-color-active: $th-scrollbar-active;
}

#status-bar {
    padding: 0 1;
    color: $th-muted;
}
"""

APP_BINDINGS: list[BindingType] = [
    Binding("q", "quit", "Quit", show=False),
    Binding("ctrl+c", "quit", "Quit", show=False, priority=True),
    Binding("j", "cursor_down", "Down", show=False),
    Binding("down", "cursor_down", "Down", show=False),
    Binding("k", "cursor_up", "Up", show=False),
    Binding("up", "cursor_up", "Up", show=False),
    Binding("r", "refresh", "Refresh", show=False),
    Binding("n", "next_page", "Next Page", show=False),
    Binding("p", "prev_page", "Prev Page", show=False),
    Binding("space", "toggle_body", "Body", show=False),
    Binding("enter", "enter_detail", "Details", show=False),
    Binding("l", "enter_detail", "Details", show=False),
    Binding("backspace", "exit_detail", "Back", show=False),
    Binding("h", "exit_detail", "Back", show=False),
    Binding("o", "open_url", "Open", show=False),
    Binding("escape", "back_or_quit", "Back/Quit", show=False),
    # Theme cycling
    Binding("ctrl+t", "cycle_theme", "Theme", show=False),
]

# Footer hints per view, as (key, label) pairs
LIST_FOOTER_BINDINGS: list[tuple[str, str]] = [
    ("j/k", "move"),
    ("space", "body"),
    ("enter", "details"),
    ("n/p", "page"),
    ("r", "refresh"),
    ("o", "open"),
    ("q", "quit"),
]
DETAIL_FOOTER_BINDINGS: list[tuple[str, str]] = [
    ("j/k", "scroll"),
    ("o", "open"),
    ("h", "back"),
    ("q", "quit"),
]

__all__ = [
    "APP_BINDINGS",
    "APP_CSS",
    "DETAIL_FOOTER_BINDINGS",
    "LIST_FOOTER_BINDINGS",
]
