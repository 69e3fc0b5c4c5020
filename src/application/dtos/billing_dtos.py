"""Billing DTOs (Data Transfer Objects).

Result dataclasses carried from billing handlers to the presentation layer.
Amounts stay in minor units here; response schemas convert them.
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from src.domain.entities.invoice import Invoice
from src.domain.entities.subscription import Subscription


@dataclass
class WebhookReceipt:
    """Outcome of an accepted webhook delivery.

    Attributes:
        event_id: Stripe event id.
        event_type: Stripe event type.
        duplicate: True when the event was already processed (no changes).
    """

    event_id: str
    event_type: str
    duplicate: bool = False
    received: bool = True


@dataclass
class InvoiceResult:
    """Invoice view."""

    id: UUID
    provider_invoice_id: str
    amount_due: int
    amount_paid: int
    currency: str
    status: str
    description: str
    invoice_pdf_url: str | None
    hosted_invoice_url: str | None
    period_start: datetime | None
    period_end: datetime | None
    due_date: datetime | None
    paid_at: datetime | None
    voided_at: datetime | None
    created_at: datetime

    @classmethod
    def from_entity(cls, invoice: Invoice) -> "InvoiceResult":
        return cls(
            id=invoice.id,
            provider_invoice_id=invoice.provider_invoice_id,
            amount_due=invoice.amount_due,
            amount_paid=invoice.amount_paid,
            currency=invoice.currency,
            status=invoice.status.value,
            description=invoice.description,
            invoice_pdf_url=invoice.invoice_pdf_url,
            hosted_invoice_url=invoice.hosted_invoice_url,
            period_start=invoice.period_start,
            period_end=invoice.period_end,
            due_date=invoice.due_date,
            paid_at=invoice.paid_at,
            voided_at=invoice.voided_at,
            created_at=invoice.created_at,
        )


@dataclass
class InvoiceListResult:
    """List of invoices.

    Attributes:
        invoices: Invoice views, newest first.
        total: Number of invoices returned.
    """

    invoices: list[InvoiceResult]
    total: int


@dataclass
class SubscriptionResult:
    """Subscription view."""

    plan_tier: str
    status: str
    storage_limit: int
    storage_used: int
    current_period_end: datetime | None
    cancel_at_period_end: bool

    @classmethod
    def from_entity(cls, subscription: Subscription) -> "SubscriptionResult":
        return cls(
            plan_tier=subscription.plan_tier.value,
            status=subscription.status.value,
            storage_limit=subscription.storage_limit,
            storage_used=subscription.storage_used,
            current_period_end=subscription.current_period_end,
            cancel_at_period_end=subscription.cancel_at_period_end,
        )


@dataclass
class SyncInvoicesResult:
    """Result of an invoice sync.

    Attributes:
        synced: Number of invoices upserted.
        message: Human-readable summary.
    """

    synced: int
    message: str


@dataclass
class VoidInvoiceResult:
    """Result of voiding an invoice.

    Attributes:
        invoice: The invoice after voidance.
        credit_note_id: Credit note issued for a paid invoice (None otherwise).
        credit_note_url: PDF of that credit note.
    """

    invoice: InvoiceResult
    credit_note_id: str | None = None
    credit_note_url: str | None = None
