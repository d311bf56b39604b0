"""UI-facing copy builders for notifications and status messages."""

from __future__ import annotations

from stack_browser.errors import FetchError, ParseError, PipelineError


def _ensure_sentence(text: str) -> str:
    """Return text with terminal sentence punctuation."""
    cleaned = text.strip()
    if not cleaned:
        return ""
    if cleaned.endswith((".", "!", "?")):
        return cleaned
    return f"{cleaned}."


def build_actionable_error(
    action: str,
    *,
    next_step: str,
    why: str | None = None,
) -> str:
    """Build a 2-3 line actionable error message."""
    lines = [f"Could not {action.strip()}."]
    if why:
        lines.append(f"Why: {_ensure_sentence(why)}")
    lines.append(build_next_step_hint(next_step))
    return "\n".join(lines)


def build_next_step_hint(next_step: str) -> str:
    """Build a canonical next-step guidance line."""
    return f"Next step: {_ensure_sentence(next_step)}"


def build_actionable_warning(
    message: str,
    *,
    next_step: str,
    why: str | None = None,
) -> str:
    """Build a 2-3 line actionable warning message."""
    lines = [_ensure_sentence(message)]
    if why:
        lines.append(f"Why: {_ensure_sentence(why)}")
    lines.append(build_next_step_hint(next_step))
    return "\n".join(lines)


def build_pipeline_error_message(action: str, error: PipelineError) -> str:
    """Explain a failed page load in terms the user can act on."""
    if isinstance(error, FetchError):
        if error.status_code is not None:
            why = f"the Stack Exchange API answered with HTTP {error.status_code}"
        else:
            why = "the Stack Exchange API could not be reached"
        return build_actionable_error(
            action, why=why, next_step="check your connection and press r to retry"
        )
    if isinstance(error, ParseError):
        return build_actionable_error(
            action,
            why="the API response could not be decoded",
            next_step="wait a few minutes and press r to retry",
        )
    return build_actionable_error(action, why=str(error), next_step="press r to retry")


def build_config_defaulted_warning() -> str:
    """Build the one-time warning shown when a corrupt config was replaced."""
    return build_actionable_warning(
        "Config file was corrupt and has been backed up",
        why="defaults are used for this session",
        next_step="fix or delete config.json.corrupt in the config directory",
    )


def build_open_link_notification(url: str) -> str:
    """Build notification text for opening a question in the browser."""
    return f"Opening in your browser: {url}"


__all__ = [
    "build_actionable_error",
    "build_actionable_warning",
    "build_config_defaulted_warning",
    "build_next_step_hint",
    "build_open_link_notification",
    "build_pipeline_error_message",
]
