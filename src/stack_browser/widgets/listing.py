"""List rendering helpers for question entries."""

from __future__ import annotations

from rich.markup import escape as escape_markup
from textual.widgets import OptionList

from stack_browser.models import NavigatorSnapshot, Question
from stack_browser.themes import MONOKAI_THEME, get_tag_color

SELECTION_MARKER = ">> "
LIST_TITLE_TEMPLATE = "Unanswered Questions (page {page})"


def escape_rich_text(text: str) -> str:
    """Escape text for safe Rich markup rendering."""
    return escape_markup(text) if text else ""


def format_list_title(page: int) -> str:
    return LIST_TITLE_TEMPLATE.format(page=page)


def _render_title_line(index: int, question: Question, selected: bool, colors: dict[str, str]) -> str:
    title = f"[bold]{index}) {escape_rich_text(question.title)}[/]"
    if selected:
        return f"[bold {colors['green']}]{SELECTION_MARKER}[/]{title}"
    return f"{' ' * len(SELECTION_MARKER)}{title}"


def _render_text_block(question: Question) -> list[str]:
    if question.show_body:
        return [escape_rich_text(line) for line in question.body.split("\n")]
    if not question.description:
        return ["[dim italic]No description available[/]"]
    return [f"[dim]{escape_rich_text(question.description)}[/]"]


def _render_meta_line(question: Question, colors: dict[str, str], theme_name: str) -> str:
    tags = ", ".join(
        f"[{get_tag_color(tag, theme_name)}]{escape_rich_text(tag)}[/]" for tag in question.tags
    )
    return (
        f"[{colors['muted']}]Tags:[/] {tags}    "
        f"[{colors['muted']}]Answers:[/] {question.answer_count}"
    )


def render_question_option(
    index: int,
    question: Question,
    *,
    selected: bool = False,
    colors: dict[str, str] | None = None,
    theme_name: str = "monokai",
) -> str:
    """Render a question as Rich markup for OptionList display."""
    colors = colors or MONOKAI_THEME
    lines = [_render_title_line(index, question, selected, colors)]
    lines.extend(_render_text_block(question))
    lines.append(_render_meta_line(question, colors, theme_name))
    return "\n".join(lines)


class QuestionList(OptionList, can_focus=False):
    """Question list driven by app-level bindings rather than its own cursor keys."""


def render_question_options(
    snapshot: NavigatorSnapshot,
    *,
    colors: dict[str, str] | None = None,
    theme_name: str = "monokai",
) -> list[str]:
    """Render every question of a navigator snapshot, marking the selection."""
    return [
        render_question_option(
            index,
            question,
            selected=index == snapshot.selected_index,
            colors=colors,
            theme_name=theme_name,
        )
        for index, question in enumerate(snapshot.questions)
    ]


__all__ = [
    "LIST_TITLE_TEMPLATE",
    "SELECTION_MARKER",
    "QuestionList",
    "escape_rich_text",
    "format_list_title",
    "render_question_option",
    "render_question_options",
]
