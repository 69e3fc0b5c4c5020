"""Inbound billing events (closed union).

Stripe webhook payloads are parsed into exactly one of these variants before
dispatch. Each variant carries only the typed data its handler needs, so the
reconciler's dispatch is an exhaustive `match` over this union.

Architecture:
    - Frozen dataclasses (immutable after parsing)
    - event_id / event_type are Stripe's identifiers, kept for logging and
      deduplication
    - UnknownBillingEvent covers every Stripe event type we do not handle

Usage:
    match event:
        case CheckoutCompleted(owner_id=owner_id, plan_tier=tier):
            ...
        case UnknownBillingEvent():
            logger.info("Ignoring billing event", event_type=event.event_type)
"""

from dataclasses import dataclass

from src.domain.enums.plan_tier import PlanTier
from src.domain.value_objects.provider_billing import (
    ProviderInvoice,
    ProviderSubscription,
)


@dataclass(frozen=True, slots=True, kw_only=True)
class BillingEvent:
    """Base class for parsed Stripe events.

    Attributes:
        event_id: Stripe event id (evt_...), the deduplication key.
        event_type: Stripe event type (e.g., "invoice.voided").
    """

    event_id: str
    event_type: str


@dataclass(frozen=True, slots=True, kw_only=True)
class CheckoutCompleted(BillingEvent):
    """checkout.session.completed.

    owner_id and plan_tier come from the session metadata and are None when
    missing; such sessions are acknowledged without changes.
    """

    owner_id: str | None
    plan_tier: PlanTier | None
    customer_id: str | None
    subscription_id: str | None


@dataclass(frozen=True, slots=True, kw_only=True)
class SubscriptionChanged(BillingEvent):
    """customer.subscription.created / customer.subscription.updated."""

    subscription: ProviderSubscription


@dataclass(frozen=True, slots=True, kw_only=True)
class SubscriptionDeleted(BillingEvent):
    """customer.subscription.deleted."""

    subscription: ProviderSubscription


@dataclass(frozen=True, slots=True, kw_only=True)
class InvoiceFinalized(BillingEvent):
    """invoice.finalized."""

    invoice: ProviderInvoice


@dataclass(frozen=True, slots=True, kw_only=True)
class InvoicePaymentSucceeded(BillingEvent):
    """invoice.payment_succeeded."""

    invoice: ProviderInvoice


@dataclass(frozen=True, slots=True, kw_only=True)
class InvoicePaymentFailed(BillingEvent):
    """invoice.payment_failed."""

    invoice: ProviderInvoice


@dataclass(frozen=True, slots=True, kw_only=True)
class InvoiceVoided(BillingEvent):
    """invoice.voided."""

    invoice: ProviderInvoice


@dataclass(frozen=True, slots=True, kw_only=True)
class CreditNoteCreated(BillingEvent):
    """credit_note.created.

    Attributes:
        credit_note_id: Stripe credit note id (cn_...).
        invoice_id: Invoice the note applies to (None for standalone notes).
        amount: Credited amount in minor units.
        currency: ISO 4217 code.
    """

    credit_note_id: str
    invoice_id: str | None
    amount: int
    currency: str


@dataclass(frozen=True, slots=True, kw_only=True)
class UnknownBillingEvent(BillingEvent):
    """Any Stripe event type without a handler (logged and acknowledged)."""


type ParsedBillingEvent = (
    CheckoutCompleted
    | SubscriptionChanged
    | SubscriptionDeleted
    | InvoiceFinalized
    | InvoicePaymentSucceeded
    | InvoicePaymentFailed
    | InvoiceVoided
    | CreditNoteCreated
    | UnknownBillingEvent
)
