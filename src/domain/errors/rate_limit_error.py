"""Rate Limit error types.

Used when rate limiting operations fail (store errors, Lua script failures).

Usage:
    from src.domain.errors import RateLimitError
    from src.core.enums import ErrorCode
    from src.core.result import Failure

    return Failure(error=RateLimitError(
        code=ErrorCode.RATE_LIMIT_RESET_FAILED,
        message="Failed to reset rate limit: Redis connection lost",
    ))
"""

from dataclasses import dataclass

from src.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class RateLimitError(DomainError):
    """Rate limit system failure.

    A DENIED request is NOT an error: it is a successful check that returns
    allowed=False. This error class is for actual store failures, and in
    practice only surfaces from reset(). check() and get_remaining() apply
    the configured failure policy instead.

    Attributes:
        code: ErrorCode enum (RATE_LIMIT_CHECK_FAILED, RATE_LIMIT_RESET_FAILED).
        message: Human-readable message.
        details: Additional context (key, backend).
    """

    pass  # Inherits all fields from DomainError
