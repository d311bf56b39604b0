"""Single-question detail view state."""

from __future__ import annotations

from stack_browser.models import DetailSnapshot, Question, ViewMode


class DetailViewer:
    """Holds the question being read, its scroll offset and the view to return to."""

    def __init__(self) -> None:
        self._question: Question | None = None
        self._scroll_offset = 0
        self._return_view = ViewMode.LIST

    @property
    def question(self) -> Question | None:
        return self._question

    @property
    def scroll_offset(self) -> int:
        return self._scroll_offset

    @property
    def return_view(self) -> ViewMode:
        return self._return_view

    def open(self, question: Question, return_view: ViewMode) -> None:
        """Load a copy of ``question`` and start reading from the top."""
        self._question = question.copy()
        self._scroll_offset = 0
        self._return_view = return_view

    def scroll_down(self) -> None:
        # Upper bound is enforced by the renderer via clamp_scroll()
        self._scroll_offset += 1

    def scroll_up(self) -> None:
        self._scroll_offset = max(0, self._scroll_offset - 1)

    def clamp_scroll(self, max_offset: int) -> None:
        """Clamp the offset to the rendered content height."""
        self._scroll_offset = max(0, min(self._scroll_offset, max_offset))

    def close(self) -> ViewMode:
        """Return the view that was active before the detail view was opened."""
        return self._return_view

    def snapshot(self) -> DetailSnapshot:
        return DetailSnapshot(
            question=self._question.copy() if self._question is not None else None,
            scroll_offset=self._scroll_offset,
            return_view=self._return_view,
        )


__all__ = [
    "DetailViewer",
]
