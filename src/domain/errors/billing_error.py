"""Billing error types.

Returned by the webhook reconciler and the invoice command handlers.

Usage:
    from src.domain.errors import BillingError
    from src.core.enums import ErrorCode

    return Failure(error=BillingError(
        code=ErrorCode.WEBHOOK_SIGNATURE_INVALID,
        message="Webhook signature verification failed",
    ))
"""

from dataclasses import dataclass

from src.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class BillingError(DomainError):
    """Billing failure (webhook verification, processing, Stripe calls).

    Attributes:
        code: ErrorCode enum (WEBHOOK_*, INVOICE_*, BILLING_PROVIDER_ERROR).
        message: Human-readable message.
        details: Additional context (event_id, event_type, invoice_id).
    """

    pass  # Inherits all fields from DomainError
