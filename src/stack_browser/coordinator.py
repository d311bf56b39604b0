"""View coordinator: routes abstract commands to the list or detail view."""

from __future__ import annotations

import logging
from collections.abc import Callable

from stack_browser.detail_viewer import DetailViewer
from stack_browser.errors import EmptySelectionError
from stack_browser.models import Command, DetailSnapshot, NavigatorSnapshot, ViewMode
from stack_browser.navigator import QuestionListNavigator

logger = logging.getLogger(__name__)

OpenUrl = Callable[[str], bool]

# Commands accepted in each view; anything else is ignored in that view
LIST_COMMANDS = frozenset(
    {
        Command.SELECT_NEXT,
        Command.SELECT_PREVIOUS,
        Command.NEXT_PAGE,
        Command.PREVIOUS_PAGE,
        Command.REFRESH,
        Command.TOGGLE_BODY,
        Command.ENTER_DETAIL,
        Command.OPEN_LINK,
        Command.QUIT,
    }
)
DETAIL_COMMANDS = frozenset(
    {
        Command.SCROLL_UP,
        Command.SCROLL_DOWN,
        Command.EXIT_DETAIL,
        Command.OPEN_LINK,
        Command.QUIT,
    }
)


def _never_open(url: str) -> bool:
    logger.debug("No browser opener configured; ignoring %s", url)
    return False


class ViewCoordinator:
    """Two-state machine (list / detail) over a navigator and a detail viewer.

    Commands are dispatched one at a time by the caller. Page and refresh
    commands may raise :class:`~stack_browser.errors.PipelineError`; the
    coordinator lets it propagate and its state stays consistent because the
    navigator never commits a failed load.
    """

    def __init__(
        self,
        navigator: QuestionListNavigator,
        viewer: DetailViewer | None = None,
        *,
        open_url: OpenUrl | None = None,
    ) -> None:
        self.navigator = navigator
        self.viewer = viewer if viewer is not None else DetailViewer()
        self._open_url = open_url if open_url is not None else _never_open
        self._mode = ViewMode.LIST
        self.running = True

    @property
    def mode(self) -> ViewMode:
        return self._mode

    def accepts(self, command: Command) -> bool:
        """Return True if ``command`` applies to the active view."""
        allowed = LIST_COMMANDS if self._mode is ViewMode.LIST else DETAIL_COMMANDS
        return command in allowed

    async def dispatch(self, command: Command) -> None:
        """Apply one command to the active view."""
        if not self.accepts(command):
            logger.debug("Ignoring %s in %s view", command.name, self._mode.value)
            return
        if command is Command.QUIT:
            self.running = False
        elif self._mode is ViewMode.LIST:
            await self._dispatch_list(command)
        else:
            self._dispatch_detail(command)

    async def _dispatch_list(self, command: Command) -> None:
        navigator = self.navigator
        if command is Command.SELECT_NEXT:
            navigator.select_next()
        elif command is Command.SELECT_PREVIOUS:
            navigator.select_previous()
        elif command is Command.NEXT_PAGE:
            await navigator.next_page()
        elif command is Command.PREVIOUS_PAGE:
            await navigator.previous_page()
        elif command is Command.REFRESH:
            await navigator.refresh()
        elif command is Command.TOGGLE_BODY:
            navigator.toggle_selected_body()
        elif command is Command.ENTER_DETAIL:
            self.enter_detail()
        elif command is Command.OPEN_LINK:
            question = navigator.selected_question()
            if question is not None:
                self._open_url(question.link)

    def _dispatch_detail(self, command: Command) -> None:
        viewer = self.viewer
        if command is Command.SCROLL_DOWN:
            viewer.scroll_down()
        elif command is Command.SCROLL_UP:
            viewer.scroll_up()
        elif command is Command.EXIT_DETAIL:
            self._mode = viewer.close()
        elif command is Command.OPEN_LINK and viewer.question is not None:
            self._open_url(viewer.question.link)

    def enter_detail(self) -> bool:
        """Open the selected question in the detail view.

        Returns False (and stays in the list view) when nothing is selected.
        """
        try:
            question = self.navigator.require_selected()
        except EmptySelectionError:
            logger.debug("Enter detail ignored: empty selection")
            return False
        self.viewer.open(question, self._mode)
        self._mode = ViewMode.DETAIL
        return True

    def navigator_snapshot(self) -> NavigatorSnapshot:
        return self.navigator.snapshot()

    def detail_snapshot(self) -> DetailSnapshot:
        return self.viewer.snapshot()


__all__ = [
    "DETAIL_COMMANDS",
    "LIST_COMMANDS",
    "OpenUrl",
    "ViewCoordinator",
]
