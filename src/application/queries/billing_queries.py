"""Billing queries (CQRS read operations).

Queries NEVER change state and do not call Stripe; they read the local
mirror maintained by the webhook reconciler.
"""

from dataclasses import dataclass
from uuid import UUID

from src.domain.enums.invoice_status import InvoiceStatus


@dataclass(frozen=True, kw_only=True)
class GetSubscription:
    """Get the owner's subscription (FREE default when none exists)."""

    owner_id: str


@dataclass(frozen=True, kw_only=True)
class ListInvoices:
    """List the owner's invoices, newest first.

    Attributes:
        owner_id: Authenticated owner.
        limit: Maximum number of invoices (clamped to 1..50 by the handler).
        status: Optional status filter.
    """

    owner_id: str
    limit: int = 10
    status: InvoiceStatus | None = None


@dataclass(frozen=True, kw_only=True)
class GetInvoice:
    """Get one invoice of the owner by local id."""

    owner_id: str
    invoice_id: UUID
