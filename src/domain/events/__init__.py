"""Domain events package.

Exports the parsed billing event union consumed by the webhook reconciler.
"""

from src.domain.events.billing_events import (
    BillingEvent,
    CheckoutCompleted,
    CreditNoteCreated,
    InvoiceFinalized,
    InvoicePaymentFailed,
    InvoicePaymentSucceeded,
    InvoiceVoided,
    ParsedBillingEvent,
    SubscriptionChanged,
    SubscriptionDeleted,
    UnknownBillingEvent,
)

__all__ = [
    "BillingEvent",
    "CheckoutCompleted",
    "CreditNoteCreated",
    "InvoiceFinalized",
    "InvoicePaymentFailed",
    "InvoicePaymentSucceeded",
    "InvoiceVoided",
    "ParsedBillingEvent",
    "SubscriptionChanged",
    "SubscriptionDeleted",
    "UnknownBillingEvent",
]
