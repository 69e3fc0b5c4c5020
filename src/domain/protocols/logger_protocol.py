"""LoggerProtocol definition for structured logging.

This protocol standardizes structured logging across the codebase while
remaining backend-agnostic. Implementations MUST ensure logs are structured
(key-value context) and safe (no secrets).

Security:
    - NEVER log webhook secrets, API keys, bearer tokens or raw payloads
    - Stripe ids (evt_, cus_, in_, sub_) are safe to log

Usage:
    from src.core.container import get_logger
    from src.domain.protocols.logger_protocol import LoggerProtocol

    logger: LoggerProtocol = get_logger()
    logger.info("Webhook processed", event_id=event_id, event_type=event_type)

    # Request-scoped logging with bind()
    request_logger = logger.bind(trace_id=trace_id)
    request_logger.info("Request started")  # trace_id auto-included
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Protocol for structured logging adapters.

    All logging calls MUST be structured: message + key-value context.
    """

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
            message: Human-readable message (avoid f-strings; use context).
            error: Optional exception instance; implementation may include
                error_type and error_message fields.
            **context: Structured key-value context fields.
        """
        ...

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log a critical-level message for system-wide failures."""
        ...

    def bind(self, **context: Any) -> "LoggerProtocol":
        """Return new logger with permanently bound context.

        Original logger instance remains unchanged (immutable pattern).

        Args:
            **context: Context to bind to all future logs.

        Returns:
            New logger instance with bound context.
        """
        ...
