"""Question list navigation: selection, pagination and refresh."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from stack_browser.errors import EmptySelectionError, PipelineError
from stack_browser.models import FIRST_PAGE, NavigatorSnapshot, Question
from stack_browser.services.interfaces import QuestionSource

logger = logging.getLogger(__name__)


def _revalidate_selection(previous: int | None, count: int, *, reset: bool) -> int | None:
    """Return a selection that is valid for a list of ``count`` questions.

    An empty list has no selection. A reset (page change) or a missing
    previous selection starts at the first question; otherwise the previous
    index is clamped into range.
    """
    if count == 0:
        return None
    if reset or previous is None:
        return 0
    return max(0, min(previous, count - 1))


class QuestionListNavigator:
    """Ordered questions of one page plus the current selection.

    ``selected_index`` is ``None`` only while the list has never held a
    question (or is empty); once set it always indexes into ``questions``.
    """

    def __init__(
        self,
        source: QuestionSource,
        *,
        page: int = FIRST_PAGE,
        questions: Sequence[Question] | None = None,
    ) -> None:
        self._source = source
        self._page = max(FIRST_PAGE, page)
        self._questions: list[Question] = list(questions or [])
        self._selected_index: int | None = _revalidate_selection(
            None, len(self._questions), reset=True
        )

    @property
    def page(self) -> int:
        return self._page

    @property
    def questions(self) -> tuple[Question, ...]:
        return tuple(self._questions)

    @property
    def selected_index(self) -> int | None:
        return self._selected_index

    # ── Selection ───────────────────────────────────────────────────────

    def select_next(self) -> None:
        """Move the selection down, wrapping from the last question to the first."""
        if not self._questions:
            return
        if self._selected_index is None:
            self._selected_index = 0
        else:
            self._selected_index = (self._selected_index + 1) % len(self._questions)

    def select_previous(self) -> None:
        """Move the selection up, wrapping from the first question to the last."""
        if not self._questions:
            return
        if self._selected_index is None:
            self._selected_index = 0
        else:
            self._selected_index = (self._selected_index - 1) % len(self._questions)

    def selected_question(self) -> Question | None:
        if self._selected_index is None:
            return None
        return self._questions[self._selected_index]

    def require_selected(self) -> Question:
        """Return the selected question or raise :class:`EmptySelectionError`."""
        question = self.selected_question()
        if question is None:
            raise EmptySelectionError("No question is selected")
        return question

    def toggle_selected_body(self) -> None:
        """Flip between the short description and the full body of the selection."""
        question = self.selected_question()
        if question is not None:
            question.show_body = not question.show_body

    # ── Pagination ──────────────────────────────────────────────────────

    async def refresh(self) -> None:
        """Reload the current page through the question source.

        On failure the current questions and selection are left untouched
        and the :class:`PipelineError` propagates.
        """
        await self._load(reset_selection=False)

    async def change_page(self, delta: int) -> bool:
        """Move ``delta`` pages (never below the first page) and reload.

        A zero delta reloads the current page like :meth:`refresh`. Returns
        False without fetching only for a decrement at the first page. If the
        reload fails the page number is rolled back before re-raising, so the
        page always matches the displayed questions.
        """
        if delta == 0:
            await self.refresh()
            return True
        previous_page = self._page
        new_page = max(FIRST_PAGE, previous_page + delta)
        if new_page == previous_page:
            return False
        self._page = new_page
        try:
            await self._load(reset_selection=True)
        except PipelineError:
            self._page = previous_page
            raise
        logger.debug("Changed page %d -> %d", previous_page, new_page)
        return True

    async def next_page(self) -> bool:
        return await self.change_page(1)

    async def previous_page(self) -> bool:
        return await self.change_page(-1)

    async def _load(self, *, reset_selection: bool) -> None:
        questions = await self._source.get_page(self._page)
        self._questions = list(questions)
        self._selected_index = _revalidate_selection(
            self._selected_index, len(self._questions), reset=reset_selection
        )

    def snapshot(self) -> NavigatorSnapshot:
        """Return a read-only copy of the navigator state for rendering."""
        return NavigatorSnapshot(
            questions=tuple(question.copy() for question in self._questions),
            page=self._page,
            selected_index=self._selected_index,
        )


__all__ = [
    "QuestionListNavigator",
]
