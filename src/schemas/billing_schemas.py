"""Billing request and response schemas.

Pydantic schemas for the webhook, invoice and subscription endpoints.
Invoice amounts are stored in minor units (cents) and exposed here in
major units.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from src.application.dtos.billing_dtos import (
    InvoiceListResult,
    InvoiceResult,
    SubscriptionResult,
    SyncInvoicesResult,
    VoidInvoiceResult,
    WebhookReceipt,
)


def _to_major_units(amount: int) -> float:
    return amount / 100


# =============================================================================
# Webhook Schemas
# =============================================================================


class WebhookReceivedResponse(BaseModel):
    """Acknowledgement returned to Stripe.

    `duplicate` is only present when the event was already processed.
    """

    received: bool = Field(True, description="Event accepted")
    duplicate: bool | None = Field(None, description="Event was already processed")

    @classmethod
    def from_dto(cls, dto: WebhookReceipt) -> "WebhookReceivedResponse":
        return cls(received=dto.received, duplicate=True if dto.duplicate else None)


class WebhookErrorResponse(BaseModel):
    """Webhook rejection body."""

    error: str = Field(..., description="Reason the event was rejected")


# =============================================================================
# Invoice Schemas
# =============================================================================


class InvoiceResponse(BaseModel):
    """Single invoice response.

    Attributes:
        id: Local invoice identifier.
        provider_invoice_id: Stripe invoice id.
        amount_due: Amount due in major units.
        amount_paid: Amount paid in major units.
        currency: ISO 4217 currency code (lowercase, as Stripe reports it).
        status: DRAFT, OPEN, PAID, UNCOLLECTIBLE or VOID.
        description: Invoice description.
        invoice_pdf_url: Stripe-hosted PDF.
        hosted_invoice_url: Stripe-hosted invoice page.
        period_start: Billing period start.
        period_end: Billing period end.
        due_date: Payment due date.
        paid_at: When the invoice was paid.
        voided_at: When the invoice was voided.
        created_at: Record creation timestamp.
    """

    id: UUID = Field(..., description="Invoice unique identifier")
    provider_invoice_id: str = Field(..., description="Stripe invoice id")
    amount_due: float = Field(..., description="Amount due", examples=[9.99])
    amount_paid: float = Field(..., description="Amount paid", examples=[9.99])
    currency: str = Field(..., description="Currency code", examples=["usd"])
    status: str = Field(..., description="Invoice status", examples=["PAID"])
    description: str = Field(..., description="Invoice description")
    invoice_pdf_url: str | None = Field(None, description="Invoice PDF URL")
    hosted_invoice_url: str | None = Field(None, description="Hosted invoice URL")
    period_start: datetime | None = Field(None, description="Billing period start")
    period_end: datetime | None = Field(None, description="Billing period end")
    due_date: datetime | None = Field(None, description="Payment due date")
    paid_at: datetime | None = Field(None, description="Payment timestamp")
    voided_at: datetime | None = Field(None, description="Void timestamp")
    created_at: datetime = Field(..., description="Creation timestamp")

    @classmethod
    def from_dto(cls, dto: InvoiceResult) -> "InvoiceResponse":
        """Convert application DTO to response schema.

        Args:
            dto: InvoiceResult from handler.

        Returns:
            InvoiceResponse with amounts in major units.
        """
        return cls(
            id=dto.id,
            provider_invoice_id=dto.provider_invoice_id,
            amount_due=_to_major_units(dto.amount_due),
            amount_paid=_to_major_units(dto.amount_paid),
            currency=dto.currency,
            status=dto.status,
            description=dto.description,
            invoice_pdf_url=dto.invoice_pdf_url,
            hosted_invoice_url=dto.hosted_invoice_url,
            period_start=dto.period_start,
            period_end=dto.period_end,
            due_date=dto.due_date,
            paid_at=dto.paid_at,
            voided_at=dto.voided_at,
            created_at=dto.created_at,
        )


class InvoiceListResponse(BaseModel):
    """Invoice list response (newest first)."""

    invoices: list[InvoiceResponse] = Field(..., description="Invoices")
    total_count: int = Field(..., description="Number of invoices returned")

    @classmethod
    def from_dto(cls, dto: InvoiceListResult) -> "InvoiceListResponse":
        return cls(
            invoices=[InvoiceResponse.from_dto(invoice) for invoice in dto.invoices],
            total_count=dto.total,
        )


class SyncInvoicesResponse(BaseModel):
    """Invoice sync result."""

    synced: int = Field(..., description="Number of invoices upserted")
    message: str = Field(..., description="Summary message")

    @classmethod
    def from_dto(cls, dto: SyncInvoicesResult) -> "SyncInvoicesResponse":
        return cls(synced=dto.synced, message=dto.message)


class VoidInvoiceResponse(BaseModel):
    """Voided invoice, with the credit note issued for paid invoices."""

    invoice: InvoiceResponse = Field(..., description="Invoice after voidance")
    credit_note_id: str | None = Field(None, description="Stripe credit note id")
    credit_note_url: str | None = Field(None, description="Credit note PDF URL")

    @classmethod
    def from_dto(cls, dto: VoidInvoiceResult) -> "VoidInvoiceResponse":
        return cls(
            invoice=InvoiceResponse.from_dto(dto.invoice),
            credit_note_id=dto.credit_note_id,
            credit_note_url=dto.credit_note_url,
        )


# =============================================================================
# Subscription Schemas
# =============================================================================


class SubscriptionResponse(BaseModel):
    """Owner's subscription.

    Attributes:
        plan_tier: FREE, STANDARD or PRO.
        status: ACTIVE, INACTIVE, PAST_DUE, CANCELED or TRIALING.
        storage_limit: Storage quota in bytes.
        storage_used: Storage consumed in bytes.
        current_period_end: End of the current billing period.
        cancel_at_period_end: Whether the plan ends at period end.
    """

    plan_tier: str = Field(..., description="Plan tier", examples=["PRO"])
    status: str = Field(..., description="Subscription status", examples=["ACTIVE"])
    storage_limit: int = Field(..., description="Storage quota in bytes")
    storage_used: int = Field(..., description="Storage used in bytes")
    current_period_end: datetime | None = Field(
        None, description="Current billing period end"
    )
    cancel_at_period_end: bool = Field(
        False, description="Subscription ends at period end"
    )

    @classmethod
    def from_dto(cls, dto: SubscriptionResult) -> "SubscriptionResponse":
        return cls(
            plan_tier=dto.plan_tier,
            status=dto.status,
            storage_limit=dto.storage_limit,
            storage_used=dto.storage_used,
            current_period_end=dto.current_period_end,
            cancel_at_period_end=dto.cancel_at_period_end,
        )
