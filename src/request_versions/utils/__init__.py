"""Utility interfaces and implementations."""

from .error_handler import CollectingErrorHandler, ErrorHandler, LoggingErrorHandler

__all__ = [
    "CollectingErrorHandler",
    "ErrorHandler",
    "LoggingErrorHandler",
]
