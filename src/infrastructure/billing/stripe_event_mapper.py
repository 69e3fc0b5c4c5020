"""Stripe event mapper.

Converts verified Stripe webhook JSON into the closed ParsedBillingEvent
union. Contains all Stripe-specific knowledge about payload structure, so
handlers only ever see typed snapshots.

Stripe Event Structure:
    {
        "id": "evt_1Pq...",
        "type": "invoice.voided",
        "data": {"object": {...}}
    }

Expandable references (customer, subscription, invoice) arrive either as an
id string or as the expanded object; both are accepted. Timestamps are Unix
epoch seconds and become timezone-aware UTC datetimes.

Reference:
    - https://docs.stripe.com/api/events/object
"""

from datetime import UTC, datetime
from typing import Any

import structlog

from src.domain.enums.plan_tier import PlanTier
from src.domain.events.billing_events import (
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
from src.domain.value_objects.provider_billing import (
    ProviderInvoice,
    ProviderSubscription,
)

logger = structlog.get_logger(__name__)

# Metadata keys set on checkout sessions and subscriptions at checkout time
OWNER_METADATA_KEY = "userId"
PLAN_METADATA_KEY = "planType"


class StripeEventMapper:
    """Mapper for converting Stripe event JSON to billing events.

    Thread-safe: No mutable state, can be shared across requests.

    Example:
        >>> mapper = StripeEventMapper()
        >>> event = mapper.map_event(
        ...     {"id": "evt_1", "type": "ping", "data": {"object": {}}}
        ... )
        >>> type(event).__name__
        'UnknownBillingEvent'
    """

    def map_event(self, data: dict[str, Any]) -> ParsedBillingEvent | None:
        """Map a Stripe event to a ParsedBillingEvent.

        Args:
            data: Decoded webhook body.

        Returns:
            The parsed event, or None if the payload is malformed.
        """
        try:
            return self._map_event_internal(data)
        except (KeyError, TypeError, ValueError, AttributeError, IndexError) as e:
            logger.warning(
                "stripe_event_mapping_failed",
                error=str(e),
                error_type=type(e).__name__,
            )
            return None

    def map_subscription(self, data: dict[str, Any]) -> ProviderSubscription:
        """Map a Stripe subscription object.

        Raises:
            KeyError: If the subscription id is missing.
        """
        metadata = data.get("metadata") or {}
        items = (data.get("items") or {}).get("data") or []
        first_item = items[0] if items else {}
        price = first_item.get("price") or {}

        # Newer API versions moved the billing period onto subscription items
        period_end = data.get("current_period_end") or first_item.get(
            "current_period_end"
        )

        return ProviderSubscription(
            subscription_id=data["id"],
            customer_id=_ref_id(data.get("customer")) or "",
            status=data.get("status") or "",
            owner_id=metadata.get(OWNER_METADATA_KEY) or None,
            plan_tier=PlanTier.parse(metadata.get(PLAN_METADATA_KEY)),
            price_id=price.get("id") if isinstance(price, dict) else price,
            current_period_end=_from_epoch(period_end),
            cancel_at_period_end=bool(data.get("cancel_at_period_end")),
        )

    def map_invoice(self, data: dict[str, Any]) -> ProviderInvoice:
        """Map a Stripe invoice object.

        Raises:
            KeyError: If the invoice id is missing.
        """
        transitions = data.get("status_transitions") or {}

        return ProviderInvoice(
            invoice_id=data["id"],
            customer_id=_ref_id(data.get("customer")) or "",
            subscription_id=_invoice_subscription_id(data),
            amount_due=int(data.get("amount_due") or 0),
            amount_paid=int(data.get("amount_paid") or 0),
            currency=data.get("currency") or "eur",
            status=data.get("status"),
            number=data.get("number"),
            description=data.get("description"),
            invoice_pdf_url=data.get("invoice_pdf"),
            hosted_invoice_url=data.get("hosted_invoice_url"),
            period_start=_from_epoch(data.get("period_start")),
            period_end=_from_epoch(data.get("period_end")),
            due_date=_from_epoch(data.get("due_date")),
            paid_at=_from_epoch(transitions.get("paid_at")),
            voided_at=_from_epoch(transitions.get("voided_at")),
        )

    def _map_event_internal(self, data: dict[str, Any]) -> ParsedBillingEvent | None:
        """Internal mapping logic.

        Raises exceptions on invalid data (caught by map_event).
        """
        event_id = data.get("id")
        event_type = data.get("type")
        if not event_id or not event_type:
            logger.debug("stripe_event_missing_id_or_type")
            return None

        obj: dict[str, Any] = data["data"]["object"]
        base = {"event_id": event_id, "event_type": event_type}

        match event_type:
            case "checkout.session.completed":
                metadata = obj.get("metadata") or {}
                return CheckoutCompleted(
                    **base,
                    owner_id=metadata.get(OWNER_METADATA_KEY) or None,
                    plan_tier=PlanTier.parse(metadata.get(PLAN_METADATA_KEY)),
                    customer_id=_ref_id(obj.get("customer")),
                    subscription_id=_ref_id(obj.get("subscription")),
                )
            case "customer.subscription.created" | "customer.subscription.updated":
                return SubscriptionChanged(
                    **base, subscription=self.map_subscription(obj)
                )
            case "customer.subscription.deleted":
                return SubscriptionDeleted(
                    **base, subscription=self.map_subscription(obj)
                )
            case "invoice.finalized":
                return InvoiceFinalized(**base, invoice=self.map_invoice(obj))
            case "invoice.payment_succeeded":
                return InvoicePaymentSucceeded(**base, invoice=self.map_invoice(obj))
            case "invoice.payment_failed":
                return InvoicePaymentFailed(**base, invoice=self.map_invoice(obj))
            case "invoice.voided":
                return InvoiceVoided(**base, invoice=self.map_invoice(obj))
            case "credit_note.created":
                return CreditNoteCreated(
                    **base,
                    credit_note_id=obj["id"],
                    invoice_id=_ref_id(obj.get("invoice")),
                    amount=int(obj.get("amount") or 0),
                    currency=obj.get("currency") or "eur",
                )
            case _:
                return UnknownBillingEvent(**base)


def _ref_id(value: Any) -> str | None:
    """Id of an expandable reference (string id or expanded object)."""
    if value is None:
        return None
    if isinstance(value, str):
        return value or None
    return value.get("id")


def _invoice_subscription_id(data: dict[str, Any]) -> str | None:
    """Subscription id of an invoice across API versions."""
    if data.get("subscription"):
        return _ref_id(data["subscription"])
    parent = data.get("parent") or {}
    details = parent.get("subscription_details") or {}
    return _ref_id(details.get("subscription"))


def _from_epoch(value: Any) -> datetime | None:
    """Unix seconds to an aware UTC datetime (None passes through)."""
    if value is None:
        return None
    return datetime.fromtimestamp(int(value), tz=UTC)
