"""Detail pane widget for rendering a single question."""

from __future__ import annotations

from textual.widgets import Static

from stack_browser.models import Question
from stack_browser.themes import MONOKAI_THEME, get_tag_color
from stack_browser.widgets.listing import escape_rich_text


def render_question_details(
    question: Question | None,
    *,
    colors: dict[str, str] | None = None,
    theme_name: str = "monokai",
) -> str:
    """Build the Rich markup shown in the detail pane."""
    colors = colors or MONOKAI_THEME
    if question is None:
        return "[dim italic]Select a question to view details[/]"

    tags = ", ".join(
        f"[{get_tag_color(tag, theme_name)}]{escape_rich_text(tag)}[/]" for tag in question.tags
    )
    sections = [
        f"[bold {colors['text']}]{escape_rich_text(question.title)}[/]",
        f"  [bold {colors['accent']}]Tags:[/] {tags or '[dim]none[/]'}",
        f"  [bold {colors['accent']}]Answers:[/] {question.answer_count}",
        f"  [bold {colors['accent']}]Link:[/] [{colors['accent']}]{escape_rich_text(question.link)}[/]",
        "",
        f"[bold {colors['orange']}]Question[/]",
    ]
    if question.body:
        sections.append(f"[{colors['text']}]{escape_rich_text(question.body)}[/]")
    else:
        sections.append("[dim italic]No body available[/]")
    return "\n".join(sections)


class QuestionDetails(Static):
    """Widget to display the full question being read."""

    def __init__(self, *, id: str | None = None) -> None:
        super().__init__(id=id)
        self._question: Question | None = None

    def update_question(
        self,
        question: Question | None,
        *,
        colors: dict[str, str] | None = None,
        theme_name: str = "monokai",
    ) -> None:
        """Update the displayed question."""
        self._question = question
        self.update(render_question_details(question, colors=colors, theme_name=theme_name))

    @property
    def question(self) -> Question | None:
        return self._question


__all__ = [
    "QuestionDetails",
    "render_question_details",
]
