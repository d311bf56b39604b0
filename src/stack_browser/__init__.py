"""Terminal browser for unanswered Stack Overflow questions."""

__version__ = "0.1.0"

__all__ = [
    "__version__",
]
