"""Billing commands.

Commands that change local billing state: reconciling a Stripe webhook,
pulling an owner's invoices from Stripe, and voiding an invoice.

Architecture:
    - Commands are immutable value objects representing intent
    - Handlers execute them and return Result types
"""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, kw_only=True)
class ReconcileBillingEvent:
    """Apply one inbound Stripe webhook delivery.

    Attributes:
        payload: Raw request body, byte-for-byte as received.
        signature_header: Stripe-Signature header (None when absent).
    """

    payload: bytes
    signature_header: str | None


@dataclass(frozen=True, kw_only=True)
class SyncInvoices:
    """Pull the owner's invoices from Stripe and upsert them locally.

    Attributes:
        owner_id: Authenticated owner.
        limit: Maximum invoices fetched from Stripe.
    """

    owner_id: str
    limit: int = 100


@dataclass(frozen=True, kw_only=True)
class VoidInvoice:
    """Void one of the owner's invoices.

    Paid invoices are credited in full instead of voided in Stripe; locally
    both end as VOID.

    Attributes:
        owner_id: Authenticated owner (ownership check).
        invoice_id: Local invoice id.
    """

    owner_id: str
    invoice_id: UUID
