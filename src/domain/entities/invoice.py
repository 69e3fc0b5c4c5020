"""Invoice domain entity.

Local mirror of a Stripe invoice. One row per provider_invoice_id.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID, uuid4

from src.domain.enums.invoice_status import InvoiceStatus
from src.domain.value_objects.provider_billing import ProviderInvoice


def _utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass
class Invoice:
    """An owner's invoice.

    Amounts are stored in minor units (cents); presentation converts them.

    Attributes:
        owner_id: Local owner identifier.
        provider_invoice_id: Stripe invoice id (unique).
        provider_customer_id: Stripe customer id.
        status: Local invoice status.
        amount_due: Amount due in minor units.
        amount_paid: Amount paid in minor units.
        currency: ISO 4217 code, lower-case as Stripe sends it.
        description: Human-readable description.
    """

    owner_id: str
    provider_invoice_id: str
    provider_customer_id: str
    status: InvoiceStatus = InvoiceStatus.DRAFT
    amount_due: int = 0
    amount_paid: int = 0
    currency: str = "eur"
    description: str = ""
    provider_subscription_id: str | None = None
    invoice_pdf_url: str | None = None
    hosted_invoice_url: str | None = None
    period_start: datetime | None = None
    period_end: datetime | None = None
    due_date: datetime | None = None
    paid_at: datetime | None = None
    voided_at: datetime | None = None
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=_utc_now)
    updated_at: datetime = field(default_factory=_utc_now)

    @classmethod
    def from_provider(
        cls,
        snapshot: ProviderInvoice,
        *,
        owner_id: str,
        status: InvoiceStatus,
    ) -> "Invoice":
        """Create a local invoice from a Stripe snapshot.

        Args:
            snapshot: Parsed Stripe invoice.
            owner_id: Resolved local owner.
            status: Status to record.

        Returns:
            Invoice: New, unsaved invoice.
        """
        return cls(
            owner_id=owner_id,
            provider_invoice_id=snapshot.invoice_id,
            provider_customer_id=snapshot.customer_id,
            provider_subscription_id=snapshot.subscription_id,
            status=status,
            amount_due=snapshot.amount_due,
            amount_paid=snapshot.amount_paid,
            currency=snapshot.currency,
            description=snapshot.display_description,
            invoice_pdf_url=snapshot.invoice_pdf_url,
            hosted_invoice_url=snapshot.hosted_invoice_url,
            period_start=snapshot.period_start,
            period_end=snapshot.period_end,
            due_date=snapshot.due_date,
            paid_at=snapshot.paid_at,
            voided_at=snapshot.voided_at,
        )

    def refresh_amounts(self, snapshot: ProviderInvoice) -> None:
        """Copy amounts and document links from a newer snapshot."""
        self.amount_due = snapshot.amount_due
        self.amount_paid = snapshot.amount_paid
        self.invoice_pdf_url = snapshot.invoice_pdf_url
        self.hosted_invoice_url = snapshot.hosted_invoice_url
        self._touch()

    def sync_from_provider(self, snapshot: ProviderInvoice) -> None:
        """Overwrite status and timestamps with Stripe's current view."""
        self.refresh_amounts(snapshot)
        self.status = InvoiceStatus.from_provider(snapshot.status)
        self.paid_at = snapshot.paid_at if self.status == InvoiceStatus.PAID else None
        self.voided_at = snapshot.voided_at if self.status == InvoiceStatus.VOID else None

    def mark_open(self) -> None:
        """Finalized (or payment failed): the invoice awaits payment."""
        self.status = InvoiceStatus.OPEN
        self._touch()

    def mark_paid(self, paid_at: datetime) -> None:
        """Record a successful payment."""
        self.status = InvoiceStatus.PAID
        self.paid_at = paid_at
        self._touch()

    def mark_void(self, voided_at: datetime) -> None:
        """Record voidance (direct void or credit note)."""
        self.status = InvoiceStatus.VOID
        self.voided_at = voided_at
        self._touch()

    def _touch(self) -> None:
        self.updated_at = _utc_now()
