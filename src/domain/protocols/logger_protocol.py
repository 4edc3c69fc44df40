"""LoggerProtocol definition for structured logging.

Standardises structured logging across the identity core while staying
backend-agnostic. Implementations MUST keep logs structured (message plus
key-value context) and safe: values under sensitive keys (token, password,
session, card...) are redacted before rendering.

Usage:
    from src.core.container import get_logger

    logger = get_logger()
    logger.info("session_opened", user_id=str(user_id))

    request_logger = logger.bind(trace_id=trace_id)
    request_logger.warning("token_verification_failed", kind="expired")
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
        """Log an error-level message with optional exception details.

        Args:
            message: Event name or short message.
            error: Optional exception; implementations add error_type and
                error_message fields.
            **context: Structured key-value context fields.
        """
        ...

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log a critical-level message with optional exception details."""
        ...

    def bind(self, **context: Any) -> LoggerProtocol:
        """Return a new logger with permanently bound context.

        The original logger is unchanged.
        """
        ...
