# SPDX-License-Identifier: MIT
"""Error reporting abstractions used by file loaders and the CLI."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import logfire


class ErrorHandler(ABC):
    """Interface for reporting errors.

    Implementations must not raise; callers decide whether to re-raise after
    reporting.
    """

    @abstractmethod
    def handle(
        self, message: str, exc: Exception | None = None, **context: Any
    ) -> None:
        """Record ``message`` with optional ``exc`` and structured ``context``."""


class LoggingErrorHandler(ErrorHandler):
    """Error handler that logs via ``logfire``."""

    def handle(
        self, message: str, exc: Exception | None = None, **context: Any
    ) -> None:
        """Log an error message.

        Args:
            message: Description of the error to record.
            exc: Exception instance providing additional context.
            **context: Extra attributes attached to the log record, such as a
                file path or line number.
        """
        if exc:
            logfire.error(
                "{message}: {error}",
                message=message,
                error=str(exc),
                error_type=type(exc).__name__,
                **context,
            )
        else:
            logfire.error("{message}", message=message, **context)


class CollectingErrorHandler(ErrorHandler):
    """Error handler that keeps reported messages in memory.

    Useful for batch commands that summarise failures at the end of a run.
    """

    def __init__(self) -> None:
        self.messages: list[str] = []

    def handle(
        self, message: str, exc: Exception | None = None, **context: Any
    ) -> None:
        self.messages.append(f"{message}: {exc}" if exc else message)


__all__ = ["CollectingErrorHandler", "ErrorHandler", "LoggingErrorHandler"]
