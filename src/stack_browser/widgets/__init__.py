"""Widget classes and render helpers for modular UI composition."""

from stack_browser.widgets.chrome import ContextFooter, build_status_text
from stack_browser.widgets.details import QuestionDetails, render_question_details
from stack_browser.widgets.listing import (
    SELECTION_MARKER,
    QuestionList,
    format_list_title,
    render_question_option,
    render_question_options,
)

__all__ = [
    "SELECTION_MARKER",
    "ContextFooter",
    "QuestionDetails",
    "QuestionList",
    "build_status_text",
    "format_list_title",
    "render_question_details",
    "render_question_option",
    "render_question_options",
]
