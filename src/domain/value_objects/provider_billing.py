"""Provider-side billing snapshots.

Plain, typed copies of the Stripe objects the reconciler acts on. The
infrastructure parser builds these from raw Stripe payloads so the
application layer never touches SDK objects or untyped dicts.
"""

from dataclasses import dataclass
from datetime import datetime

from src.domain.enums.plan_tier import PlanTier


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderSubscription:
    """Snapshot of a Stripe subscription.

    Attributes:
        subscription_id: Stripe subscription id (sub_...).
        customer_id: Stripe customer id (cus_...).
        status: Raw Stripe status string.
        owner_id: Local owner from metadata.userId (None when absent).
        plan_tier: Plan from metadata.planType (None when absent/unknown).
        price_id: Price of the first subscription item.
        current_period_end: End of the current billing period.
        cancel_at_period_end: Whether the subscription ends with the period.
    """

    subscription_id: str
    customer_id: str
    status: str
    owner_id: str | None = None
    plan_tier: PlanTier | None = None
    price_id: str | None = None
    current_period_end: datetime | None = None
    cancel_at_period_end: bool = False


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderInvoice:
    """Snapshot of a Stripe invoice.

    Amounts are integers in the currency's minor unit (cents).
    """

    invoice_id: str
    customer_id: str
    subscription_id: str | None = None
    amount_due: int = 0
    amount_paid: int = 0
    currency: str = "eur"
    status: str | None = None
    number: str | None = None
    description: str | None = None
    invoice_pdf_url: str | None = None
    hosted_invoice_url: str | None = None
    period_start: datetime | None = None
    period_end: datetime | None = None
    due_date: datetime | None = None
    paid_at: datetime | None = None
    voided_at: datetime | None = None

    @property
    def display_description(self) -> str:
        """Description, defaulting to "Invoice <number or id>"."""
        return self.description or f"Invoice {self.number or self.invoice_id}"


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderCreditNote:
    """Credit note issued against a paid invoice."""

    credit_note_id: str
    invoice_id: str
    pdf_url: str | None = None
