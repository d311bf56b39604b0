"""CLI/bootstrap helpers for the Stack Overflow question browser."""

from __future__ import annotations

import argparse
import dataclasses
import logging
import logging.handlers
import os
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir

from stack_browser.action_messages import build_actionable_error
from stack_browser.config import load_config
from stack_browser.models import (
    CONFIG_APP_NAME,
    MAX_PAGE_SIZE,
    MAX_REQUEST_TIMEOUT,
    UserConfig,
)
from stack_browser.themes import THEME_NAMES

logger = logging.getLogger(__name__)


def _configure_logging(debug: bool) -> None:
    """Configure logging. When debug=True, logs to file at DEBUG level."""
    if not debug:
        # Default: suppress all logging (TUI captures stderr)
        logging.disable(logging.CRITICAL)
        return

    log_dir = Path(user_config_dir(CONFIG_APP_NAME))
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "debug.log"

    handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    logging.root.addHandler(handler)
    logging.root.setLevel(logging.DEBUG)


def _configure_color_mode(color_mode: str) -> None:
    """Configure environment hints for terminal color behavior."""
    if color_mode == "never":
        os.environ["NO_COLOR"] = "1"
        os.environ.pop("FORCE_COLOR", None)
        return
    if color_mode == "always":
        os.environ["FORCE_COLOR"] = "1"
        os.environ.pop("NO_COLOR", None)
        return
    # auto
    os.environ.pop("FORCE_COLOR", None)


def _validate_interactive_tty() -> bool:
    """Return True when stdin/stdout are interactive terminals."""
    return bool(sys.stdin.isatty() and sys.stdout.isatty())


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Browse unanswered Stack Overflow questions in a TUI"
    )
    parser.add_argument(
        "--site",
        type=str,
        default=None,
        help="Stack Exchange site to browse (default: config value, stackoverflow)",
    )
    parser.add_argument(
        "--page",
        type=int,
        default=None,
        help="Page to open at startup (default: config value, 1)",
    )
    parser.add_argument(
        "--page-size",
        type=int,
        default=None,
        help=f"Questions per page (1-{MAX_PAGE_SIZE}; default: config value)",
    )
    parser.add_argument(
        "--timeout",
        type=int,
        default=None,
        help=f"Request timeout in seconds (1-{MAX_REQUEST_TIMEOUT}; default: config value)",
    )
    parser.add_argument(
        "--theme",
        choices=THEME_NAMES,
        default=None,
        help="Color theme (default: config value, monokai)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging to file (~/.config/stack-browser/debug.log)",
    )
    parser.add_argument(
        "--color",
        choices=["auto", "always", "never"],
        default="auto",
        help="Color output mode for terminal UI (default: auto)",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable terminal colors (equivalent to --color never)",
    )
    return parser


def _validate_args(args: argparse.Namespace) -> str | None:
    """Return an error message for out-of-range numeric flags, else None."""
    if args.page is not None and args.page < 1:
        return "--page must be 1 or greater"
    if args.page_size is not None and not 1 <= args.page_size <= MAX_PAGE_SIZE:
        return f"--page-size must be between 1 and {MAX_PAGE_SIZE}"
    if args.timeout is not None and not 1 <= args.timeout <= MAX_REQUEST_TIMEOUT:
        return f"--timeout must be between 1 and {MAX_REQUEST_TIMEOUT}"
    if args.site is not None and not args.site.strip():
        return "--site must not be empty"
    return None


def _apply_overrides(config: UserConfig, args: argparse.Namespace) -> UserConfig:
    """Return a copy of ``config`` with command-line values taking precedence."""
    overrides: dict[str, Any] = {}
    if args.site is not None:
        overrides["site"] = args.site.strip()
    if args.page is not None:
        overrides["start_page"] = args.page
    if args.page_size is not None:
        overrides["page_size"] = args.page_size
    if args.timeout is not None:
        overrides["request_timeout"] = args.timeout
    if args.theme is not None:
        overrides["theme_name"] = args.theme
    if not overrides:
        return config
    return dataclasses.replace(config, **overrides)


def main(
    argv: list[str] | None = None,
    *,
    load_config_fn: Callable[[], UserConfig] = load_config,
    configure_logging_fn: Callable[[bool], None] = _configure_logging,
    configure_color_mode_fn: Callable[[str], None] = _configure_color_mode,
    validate_interactive_tty_fn: Callable[[], bool] = _validate_interactive_tty,
    app_factory: Callable[..., Any] | None = None,
) -> int:
    """Main entry point. Returns exit code."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    error = _validate_args(args)
    if error is not None:
        print(
            build_actionable_error(
                "start stack-browser",
                why=error,
                next_step="run stack-browser --help for the accepted values",
            ),
            file=sys.stderr,
        )
        return 1

    color_mode = "never" if args.no_color else args.color
    configure_color_mode_fn(color_mode)
    configure_logging_fn(args.debug)
    logger.debug("stack-browser starting, cwd=%s", Path.cwd())

    config = _apply_overrides(load_config_fn(), args)

    if not validate_interactive_tty_fn():
        print(
            "Error: stack-browser requires an interactive TTY for the full UI.",
            file=sys.stderr,
        )
        print("Next steps:", file=sys.stderr)
        print("  - Run stack-browser directly in a terminal session", file=sys.stderr)
        print("  - Use --help for command documentation", file=sys.stderr)
        return 2

    if app_factory is None:
        from stack_browser.app import StackBrowser as _StackBrowser

        app_factory = _StackBrowser

    app = app_factory(config=config)
    app.run()
    return 0


__all__ = [
    "_apply_overrides",
    "_configure_color_mode",
    "_configure_logging",
    "_validate_interactive_tty",
    "main",
]
