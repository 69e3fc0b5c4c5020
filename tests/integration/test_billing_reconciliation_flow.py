"""Integration tests for webhook reconciliation end to end.

Signed Stripe payloads go through the real StripeGateway (HMAC verification
and event mapping), ReconcileBillingEventHandler and the SQLAlchemy
repositories on SQLite. Stripe API calls are replaced on the SDK resource.
"""

import pytest
import stripe

from src.application.commands.billing_commands import ReconcileBillingEvent
from src.application.commands.handlers.reconcile_billing_event_handler import (
    ReconcileBillingEventHandler,
)
from src.core.result import Success
from src.domain.enums.invoice_status import InvoiceStatus
from src.domain.enums.plan_tier import PlanTier
from src.domain.enums.subscription_status import SubscriptionStatus
from src.infrastructure.billing import InMemoryProcessedEventStore, StripeGateway
from src.infrastructure.persistence.repositories import (
    BillingCustomerRepository,
    InvoiceRepository,
    SubscriptionRepository,
)
from tests.utils.billing import (
    WEBHOOK_SECRET,
    encode_event,
    sign_stripe_payload,
    stripe_event,
    stripe_invoice_object,
    stripe_subscription_object,
)


@pytest.fixture
def gateway() -> StripeGateway:
    return StripeGateway(secret_key="sk_test_cloudvault", webhook_secret=WEBHOOK_SECRET)


@pytest.fixture
def processed() -> InMemoryProcessedEventStore:
    return InMemoryProcessedEventStore(capacity=100)


@pytest.fixture
def deliver(test_database, gateway, processed, mock_logger):
    """Deliver one signed event through a handler on a fresh session."""

    async def _deliver(event: dict):
        payload = encode_event(event)
        async with test_database.get_session() as session:
            handler = ReconcileBillingEventHandler(
                payment_provider=gateway,
                processed_events=processed,
                subscription_repo=SubscriptionRepository(session),
                invoice_repo=InvoiceRepository(session),
                customer_repo=BillingCustomerRepository(session),
                logger=mock_logger,
            )
            return await handler.handle(
                ReconcileBillingEvent(
                    payload=payload, signature_header=sign_stripe_payload(payload)
                )
            )

    return _deliver


async def _subscription(test_database, owner_id: str = "owner-1"):
    async with test_database.get_session() as session:
        return await SubscriptionRepository(session).find_by_owner(owner_id)


async def _invoice(test_database, provider_invoice_id: str = "in_1"):
    async with test_database.get_session() as session:
        return await InvoiceRepository(session).find_by_provider_id(provider_invoice_id)


@pytest.mark.integration
class TestReconciliationFlow:
    """Checkout to renewal to cancellation."""

    async def test_subscription_lifecycle(self, deliver, test_database, monkeypatch):
        monkeypatch.setattr(
            stripe.Subscription,
            "retrieve",
            lambda subscription_id: stripe_subscription_object(
                subscription_id=subscription_id, plan_type="PRO"
            ),
        )

        # Checkout links the customer and activates the plan
        result = await deliver(
            stripe_event(
                "checkout.session.completed",
                {
                    "id": "cs_1",
                    "customer": "cus_1",
                    "subscription": "sub_1",
                    "metadata": {"userId": "owner-1", "planType": "PRO"},
                },
                event_id="evt_1",
            )
        )
        assert isinstance(result, Success)
        subscription = await _subscription(test_database)
        assert subscription.plan_tier == PlanTier.PRO
        assert subscription.status == SubscriptionStatus.ACTIVE

        # Finalized invoice is mirrored for the linked owner
        await deliver(
            stripe_event("invoice.finalized", stripe_invoice_object(), event_id="evt_2")
        )
        invoice = await _invoice(test_database)
        assert invoice.owner_id == "owner-1"
        assert invoice.status == InvoiceStatus.OPEN

        # Failed renewal marks the subscription past due
        await deliver(
            stripe_event(
                "invoice.payment_failed", stripe_invoice_object(), event_id="evt_3"
            )
        )
        assert (await _subscription(test_database)).status == SubscriptionStatus.PAST_DUE

        # Successful retry pays the invoice and refreshes the subscription
        await deliver(
            stripe_event(
                "invoice.payment_succeeded",
                stripe_invoice_object(
                    status="paid", amount_paid=1999, paid_at=1_767_225_600
                ),
                event_id="evt_4",
            )
        )
        invoice = await _invoice(test_database)
        assert invoice.status == InvoiceStatus.PAID
        assert invoice.amount_paid == 1999
        assert (await _subscription(test_database)).status == SubscriptionStatus.ACTIVE

        # Deletion falls back to FREE
        await deliver(
            stripe_event(
                "customer.subscription.deleted",
                stripe_subscription_object(status="canceled"),
                event_id="evt_5",
            )
        )
        subscription = await _subscription(test_database)
        assert subscription.plan_tier == PlanTier.FREE
        assert subscription.status == SubscriptionStatus.CANCELED
        assert subscription.provider_subscription_id is None

    async def test_redelivery_is_acknowledged_once(self, deliver, test_database):
        event = stripe_event(
            "customer.subscription.updated",
            stripe_subscription_object(status="trialing"),
            event_id="evt_dup",
        )

        first = await deliver(event)
        second = await deliver(event)

        assert first.value.duplicate is False
        assert second.value.duplicate is True
        assert (await _subscription(test_database)).status == SubscriptionStatus.TRIALING

    async def test_credit_note_voids_mirrored_invoice(self, deliver, test_database):
        await deliver(
            stripe_event(
                "checkout.session.completed",
                {
                    "id": "cs_1",
                    "customer": "cus_1",
                    "metadata": {"userId": "owner-1", "planType": "STANDARD"},
                },
                event_id="evt_a",
            )
        )
        await deliver(
            stripe_event("invoice.finalized", stripe_invoice_object(), event_id="evt_b")
        )

        await deliver(
            stripe_event(
                "credit_note.created",
                {"id": "cn_1", "invoice": "in_1", "amount": 1999, "currency": "eur"},
                event_id="evt_c",
            )
        )

        invoice = await _invoice(test_database)
        assert invoice.status == InvoiceStatus.VOID
        assert invoice.voided_at is not None
