"""Internal service layer: HTTP fetching and the cached question pipeline."""

from stack_browser.services.fetch_service import HttpFetchClient
from stack_browser.services.interfaces import (
    AppServices,
    FetchClient,
    QuestionSource,
    build_default_app_services,
)
from stack_browser.services.question_pipeline import QuestionPipeline

__all__ = [
    "AppServices",
    "FetchClient",
    "HttpFetchClient",
    "QuestionPipeline",
    "QuestionSource",
    "build_default_app_services",
]
