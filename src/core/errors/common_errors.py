"""Common error classes used across all domains and layers.

These are generic errors that don't belong to any specific domain.

Error Types:
- ValidationError: Input validation failures
- NotFoundError: Resource not found
- AuthenticationError: Authentication failures

Usage:
    from src.core.errors import NotFoundError
    from src.core.enums import ErrorCode
    from src.core.result import Failure

    return Failure(error=NotFoundError(
        code=ErrorCode.INVOICE_NOT_FOUND,
        message="Invoice not found",
        resource_type="Invoice",
        resource_id=str(invoice_id),
    ))
"""

from dataclasses import dataclass

from src.core.errors.domain_error import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class ValidationError(DomainError):
    """Input validation failure.

    Attributes:
        code: ErrorCode enum.
        message: Human-readable message.
        field: Field name that failed validation.
        details: Additional context.
    """

    field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class NotFoundError(DomainError):
    """Resource not found.

    Attributes:
        code: ErrorCode enum.
        message: Human-readable message.
        resource_type: Type of resource (Invoice, Subscription, etc.).
        resource_id: ID of the resource that was not found.
        details: Additional context.
    """

    resource_type: str
    resource_id: str


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthenticationError(DomainError):
    """Authentication failure (missing, malformed or expired token)."""

    pass
