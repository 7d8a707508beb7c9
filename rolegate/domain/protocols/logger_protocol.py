"""LoggerProtocol definition for structured logging.

Standardizes structured logging while remaining backend-agnostic.
Implementations MUST keep logs structured (key-value context) and safe.

Security:
    - NEVER log passwords, raw reset tokens, token hashes or JWTs

Usage:
    from rolegate.core.container import get_logger

    logger: LoggerProtocol = get_logger()
    logger.info("user_logged_out", user_id=str(user_id))
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Protocol for structured logging adapters."""

    def debug(self, message: str, /, **context: Any) -> None:
        """Log a debug-level message."""
        ...

    def info(self, message: str, /, **context: Any) -> None:
        """Log an info-level message."""
        ...

    def warning(self, message: str, /, **context: Any) -> None:
        """Log a warning-level message."""
        ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log an error-level message.

        Args:
            message: Human-readable message.
            error: Optional exception; type and message are added to context.
            **context: Structured key-value context fields.
        """
        ...

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log a critical-level message."""
        ...

    def bind(self, **context: Any) -> LoggerProtocol:
        """Return a logger with context bound to every subsequent call."""
        ...
