"""Exception taxonomy for fetching, decoding and navigation."""

from __future__ import annotations


class StackBrowserError(Exception):
    """Base class for all stack-browser errors."""


class PipelineError(StackBrowserError):
    """A page could not be produced by the cached fetch pipeline."""


class FetchError(PipelineError):
    """Transport failure, timeout, or non-success HTTP status."""

    def __init__(self, message: str, *, url: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class ParseError(PipelineError):
    """The page envelope could not be decoded."""


class EmptySelectionError(StackBrowserError):
    """A command needed a selected question but none is selected."""


__all__ = [
    "EmptySelectionError",
    "FetchError",
    "ParseError",
    "PipelineError",
    "StackBrowserError",
]
