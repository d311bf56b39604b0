"""Textual application: the terminal front end of the question browser."""

from __future__ import annotations

import asyncio
import logging
import sys
from collections.abc import Callable
from typing import Any

from textual.app import App, ComposeResult
from textual.containers import Vertical, VerticalScroll
from textual.css.query import NoMatches
from textual.widgets import Header, Label

from stack_browser.action_messages import (
    build_actionable_error,
    build_config_defaulted_warning,
    build_open_link_notification,
    build_pipeline_error_message,
)
from stack_browser.cli import (
    _configure_color_mode,
    _configure_logging,
    _validate_interactive_tty,
)
from stack_browser.cli import main as _cli_main
from stack_browser.config import load_config
from stack_browser.coordinator import ViewCoordinator
from stack_browser.errors import PipelineError
from stack_browser.io_actions import open_in_browser
from stack_browser.models import Command, UserConfig, ViewMode
from stack_browser.navigator import QuestionListNavigator
from stack_browser.services import AppServices, build_default_app_services
from stack_browser.themes import TEXTUAL_THEMES, THEME_NAMES, THEMES, resolve_theme_name
from stack_browser.ui_constants import (
    APP_BINDINGS,
    APP_CSS,
    DETAIL_FOOTER_BINDINGS,
    LIST_FOOTER_BINDINGS,
)
from stack_browser.widgets import (
    ContextFooter,
    QuestionDetails,
    QuestionList,
    build_status_text,
    format_list_title,
    render_question_options,
)

logger = logging.getLogger(__name__)

# Actions whose meaning depends on the active view: (list command, detail command)
_CURSOR_COMMANDS: dict[str, tuple[Command, Command]] = {
    "down": (Command.SELECT_NEXT, Command.SCROLL_DOWN),
    "up": (Command.SELECT_PREVIOUS, Command.SCROLL_UP),
}


class StackBrowser(App):
    """A TUI application to browse unanswered Stack Overflow questions."""

    TITLE = "Unanswered Questions"

    # Theme-aware CSS and key bindings are defined in ui_constants for maintainability.
    CSS = APP_CSS

    BINDINGS = APP_BINDINGS

    def __init__(
        self,
        config: UserConfig | None = None,
        services: AppServices | None = None,
        open_url: Callable[[str], bool] = open_in_browser,
    ) -> None:
        super().__init__()
        # Register all Textual themes so $th-* CSS variables resolve before compose()
        for textual_theme in TEXTUAL_THEMES.values():
            self.register_theme(textual_theme)
        self._config = config or UserConfig()
        self._theme_name = resolve_theme_name(self._config.theme_name)
        # Activate before CSS parsing so $th-* variables resolve on first stylesheet load
        self.theme = self._theme_name
        self._services: AppServices = services or build_default_app_services(self._config)
        self._open_url = open_url
        self.navigator = QuestionListNavigator(
            self._services.pipeline, page=self._config.start_page
        )
        self.coordinator = ViewCoordinator(self.navigator, open_url=self._open_url_with_feedback)
        # One command at a time; a slow fetch blocks later keys instead of interleaving
        self._dispatch_lock = asyncio.Lock()
        self._background_tasks: set[asyncio.Task[None]] = set()
        self._status_message = ""

    @property
    def colors(self) -> dict[str, str]:
        return THEMES[self._theme_name]

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="main-container"):
            with Vertical(id="list-pane"):
                yield Label(format_list_title(self.navigator.page), id="list-header")
                yield QuestionList(id="question-list")
                yield Label("", id="status-bar")
            with Vertical(id="detail-pane"):
                yield Label(" Question Details", id="details-header")
                with VerticalScroll(id="details-scroll"):
                    yield QuestionDetails(id="question-details")
        yield ContextFooter()

    def on_mount(self) -> None:
        """Called when app is mounted. Starts loading the first page."""
        self.sub_title = self._services.pipeline.site

        # Warn if config was corrupt and defaults were used
        if self._config.config_defaulted:
            self.notify(build_config_defaulted_warning(), severity="warning", timeout=8)

        self._status_message = "Loading..."
        self._render_views()
        self._track_task(self._load_initial_page())
        logger.debug(
            "App mounted: site=%s, start_page=%d, theme=%s",
            self._services.pipeline.site,
            self.navigator.page,
            self._theme_name,
        )

    async def on_unmount(self) -> None:
        """Cancel background work and close the HTTP client."""
        pending = [task for task in self._background_tasks if not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            _, still_pending = await asyncio.wait(pending, timeout=0.5)
            for task in still_pending:
                logger.debug("Background task did not cancel before shutdown: %r", task)
        self._background_tasks.clear()

        try:
            await self._services.aclose()
        except Exception as e:
            logger.debug("Failed to close HTTP client during shutdown: %s", e, exc_info=True)

    def _track_task(self, coro: Any) -> asyncio.Task[None]:
        """Create an asyncio task and track it to prevent garbage collection."""
        task = asyncio.create_task(coro)
        self._background_tasks.add(task)
        task.add_done_callback(self._background_tasks.discard)
        task.add_done_callback(self._on_task_done)
        return task

    @staticmethod
    def _on_task_done(task: asyncio.Task[None]) -> None:
        """Log unhandled exceptions from background tasks."""
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Unhandled exception in background task: %s", exc, exc_info=exc)

    # ========================================================================
    # Command dispatch
    # ========================================================================

    async def _load_initial_page(self) -> None:
        async with self._dispatch_lock:
            try:
                await self.navigator.refresh()
            except PipelineError as e:
                self._report_pipeline_error("load questions", e)
            else:
                self._status_message = ""
            self._render_views()

    async def dispatch_command(self, command: Command) -> None:
        """Apply one command under the dispatch lock and re-render."""
        async with self._dispatch_lock:
            self._status_message = ""
            try:
                await self.coordinator.dispatch(command)
            except PipelineError as e:
                self._report_pipeline_error(_describe_command(command), e)
            if not self.coordinator.running:
                logger.debug("Quit requested")
                self.exit()
                return
            self._render_views()

    def _report_pipeline_error(self, action: str, error: PipelineError) -> None:
        logger.warning("Could not %s: %s", action, error)
        self._status_message = f"Error: {error}"
        self.notify(
            build_pipeline_error_message(action, error),
            title="Stack Exchange API",
            severity="error",
            timeout=8,
        )

    def _open_url_with_feedback(self, url: str) -> bool:
        """Open a question link, notifying the user about the outcome."""
        if self._open_url(url):
            self.notify(build_open_link_notification(url), timeout=3)
            return True
        self.notify(
            build_actionable_error(
                "open your browser",
                why="the system browser command failed",
                next_step=f"open {url} manually",
            ),
            title="Browser",
            severity="error",
            timeout=8,
        )
        return False

    # ========================================================================
    # Rendering
    # ========================================================================

    def _render_views(self) -> None:
        try:
            container = self.query_one("#main-container", Vertical)
        except NoMatches:
            return
        in_detail = self.coordinator.mode is ViewMode.DETAIL
        container.set_class(in_detail, "detail-mode")
        if in_detail:
            self._render_detail_view()
        else:
            self._render_list_view()
        self._render_footer()

    def _render_list_view(self) -> None:
        snapshot = self.coordinator.navigator_snapshot()
        self.query_one("#list-header", Label).update(format_list_title(snapshot.page))

        option_list = self.query_one("#question-list", QuestionList)
        option_list.clear_options()
        option_list.add_options(
            render_question_options(snapshot, colors=self.colors, theme_name=self._theme_name)
        )
        if snapshot.selected_index is not None:
            option_list.highlighted = snapshot.selected_index

        pipeline = self._services.pipeline
        self.query_one("#status-bar", Label).update(
            build_status_text(
                snapshot,
                site=pipeline.site,
                envelope=pipeline.last_envelope,
                from_cache=pipeline.last_from_cache,
                message=self._status_message,
            )
        )

    def _render_detail_view(self) -> None:
        snapshot = self.coordinator.detail_snapshot()
        self.query_one("#question-details", QuestionDetails).update_question(
            snapshot.question, colors=self.colors, theme_name=self._theme_name
        )
        self.call_after_refresh(self._sync_detail_scroll)

    def _sync_detail_scroll(self) -> None:
        """Clamp the viewer offset to the rendered height and scroll to it."""
        try:
            scroll = self.query_one("#details-scroll", VerticalScroll)
        except NoMatches:
            return
        viewer = self.coordinator.viewer
        viewer.clamp_scroll(int(scroll.max_scroll_y))
        scroll.scroll_to(y=viewer.scroll_offset, animate=False)

    def _render_footer(self) -> None:
        try:
            footer = self.query_one(ContextFooter)
        except NoMatches:
            return
        if self.coordinator.mode is ViewMode.DETAIL:
            footer.render_bindings(DETAIL_FOOTER_BINDINGS, "[bold]DETAIL[/]", self.colors)
        else:
            footer.render_bindings(LIST_FOOTER_BINDINGS, "[bold]LIST[/]", self.colors)

    # ========================================================================
    # Actions
    # ========================================================================

    async def _dispatch_cursor(self, direction: str) -> None:
        list_command, detail_command = _CURSOR_COMMANDS[direction]
        if self.coordinator.mode is ViewMode.DETAIL:
            await self.dispatch_command(detail_command)
        else:
            await self.dispatch_command(list_command)

    async def action_cursor_down(self) -> None:
        await self._dispatch_cursor("down")

    async def action_cursor_up(self) -> None:
        await self._dispatch_cursor("up")

    async def action_refresh(self) -> None:
        await self.dispatch_command(Command.REFRESH)

    async def action_next_page(self) -> None:
        await self.dispatch_command(Command.NEXT_PAGE)

    async def action_prev_page(self) -> None:
        await self.dispatch_command(Command.PREVIOUS_PAGE)

    async def action_toggle_body(self) -> None:
        await self.dispatch_command(Command.TOGGLE_BODY)

    async def action_enter_detail(self) -> None:
        await self.dispatch_command(Command.ENTER_DETAIL)

    async def action_exit_detail(self) -> None:
        await self.dispatch_command(Command.EXIT_DETAIL)

    async def action_open_url(self) -> None:
        await self.dispatch_command(Command.OPEN_LINK)

    async def action_back_or_quit(self) -> None:
        if self.coordinator.mode is ViewMode.DETAIL:
            await self.dispatch_command(Command.EXIT_DETAIL)
        else:
            await self.dispatch_command(Command.QUIT)

    async def action_quit(self) -> None:
        await self.dispatch_command(Command.QUIT)

    def action_cycle_theme(self) -> None:
        """Switch to the next color theme for this session."""
        index = THEME_NAMES.index(self._theme_name)
        self._theme_name = THEME_NAMES[(index + 1) % len(THEME_NAMES)]
        self.theme = self._theme_name
        self.notify(f"Theme: {self._theme_name}", timeout=2)
        self._render_views()


def _describe_command(command: Command) -> str:
    if command is Command.NEXT_PAGE:
        return "load the next page"
    if command is Command.PREVIOUS_PAGE:
        return "load the previous page"
    return "refresh questions"


def main() -> int:
    """Main entry point wrapper for CLI/bootstrap logic."""
    return _cli_main(
        load_config_fn=load_config,
        configure_logging_fn=_configure_logging,
        configure_color_mode_fn=_configure_color_mode,
        validate_interactive_tty_fn=_validate_interactive_tty,
        app_factory=StackBrowser,
    )


if __name__ == "__main__":
    sys.exit(main())
