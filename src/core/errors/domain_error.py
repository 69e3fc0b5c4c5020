"""Base domain error class for Railway-Oriented Programming.

DomainError is the base class for every error that flows through the service
as data. Rate limit store failures, webhook verification failures and billing
lookups all return a DomainError subclass inside a Failure.

Architecture:
- Does NOT inherit from Exception (not raised, returned in Result)
- Uses dataclass inheritance (NOT Protocol/ABC)
- Type-safe with Result[T, DomainError]

Usage:
    from src.core.errors import DomainError

    @dataclass(frozen=True, slots=True, kw_only=True)
    class BillingError(DomainError):
        pass  # Inherits code, message, details
"""

from dataclasses import dataclass

from src.core.enums import ErrorCode


@dataclass(frozen=True, slots=True, kw_only=True)
class DomainError:
    """Base domain error (does NOT inherit from Exception).

    Attributes:
        code: Machine-readable error code (enum).
        message: Human-readable error message.
        details: Optional context for debugging.
    """

    code: ErrorCode
    message: str
    details: dict[str, str] | None = None

    def __str__(self) -> str:
        """String representation of error."""
        return f"{self.code.value}: {self.message}"
