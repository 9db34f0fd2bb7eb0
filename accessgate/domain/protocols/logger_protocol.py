"""Structured logging port.

Call sites pass an event name plus key/value context and never format
values into the message. Bearer tokens and signing keys must not be passed
as context.

Usage:
    logger = get_logger()
    logger.info("policy_added", principal="admin", resource="/x", action="GET")
    logger.bind(subject="user:1").warning("access_denied")
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Event logger used by the engine, stores and HTTP dependencies."""

    def debug(self, message: str, /, **context: Any) -> None: ...

    def info(self, message: str, /, **context: Any) -> None: ...

    def warning(self, message: str, /, **context: Any) -> None: ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log a failure; ``error`` may be expanded into type and message fields."""
        ...

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log a fault that needs an operator, such as an unloaded engine."""
        ...

    def bind(self, **context: Any) -> LoggerProtocol:
        """Return a logger that adds context to every event."""
        ...
