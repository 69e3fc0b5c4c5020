"""Integration tests for billing repositories.

Tests SubscriptionRepository, InvoiceRepository and BillingCustomerRepository
against a real SQLite database (aiosqlite):
- Upserts by natural key (owner id, provider invoice id)
- Newest-first listing with status filter
- Customer link replacement
- Timezone-aware datetimes after a round trip
"""

from datetime import UTC, datetime, timedelta

import pytest

from src.domain.entities.subscription import Subscription
from src.domain.enums.invoice_status import InvoiceStatus
from src.domain.enums.plan_tier import PlanTier
from src.domain.enums.subscription_status import SubscriptionStatus
from src.infrastructure.persistence.repositories import (
    BillingCustomerRepository,
    InvoiceRepository,
    SubscriptionRepository,
)
from tests.utils.billing import make_invoice, provider_subscription

BASE_TIME = datetime(2026, 10, 1, 12, 0, tzinfo=UTC)


# =============================================================================
# SubscriptionRepository
# =============================================================================


@pytest.mark.integration
class TestSubscriptionRepository:
    """One row per owner."""

    async def test_find_missing_owner(self, test_database):
        async with test_database.get_session() as session:
            assert await SubscriptionRepository(session).find_by_owner("nobody") is None

    async def test_save_and_find(self, test_database):
        subscription = Subscription.new_free(
            owner_id="owner-1", provider_customer_id="cus_1"
        )
        subscription.apply_provider_state(
            provider_subscription(
                plan_tier=PlanTier.PRO,
                current_period_end=BASE_TIME,
                cancel_at_period_end=True,
            )
        )

        async with test_database.get_session() as session:
            await SubscriptionRepository(session).save(subscription)

        async with test_database.get_session() as session:
            found = await SubscriptionRepository(session).find_by_owner("owner-1")

        assert found is not None
        assert found.id == subscription.id
        assert found.plan_tier == PlanTier.PRO
        assert found.status == SubscriptionStatus.ACTIVE
        assert found.storage_limit == subscription.storage_limit
        assert found.current_period_end == BASE_TIME
        assert found.current_period_end.tzinfo is not None
        assert found.cancel_at_period_end is True

    async def test_save_twice_updates_single_row(self, test_database):
        subscription = Subscription.new_free(
            owner_id="owner-1", provider_customer_id="cus_1"
        )
        async with test_database.get_session() as session:
            await SubscriptionRepository(session).save(subscription)

        async with test_database.get_session() as session:
            repo = SubscriptionRepository(session)
            loaded = await repo.find_by_owner("owner-1")
            loaded.mark_past_due()
            await repo.save(loaded)

            # A second entity for the same owner updates the same row
            duplicate = Subscription.new_free(
                owner_id="owner-1", provider_customer_id="cus_2"
            )
            duplicate.downgrade_to_free()
            await repo.save(duplicate)

        async with test_database.get_session() as session:
            found = await SubscriptionRepository(session).find_by_owner("owner-1")

        assert found.id == subscription.id
        assert found.status == SubscriptionStatus.CANCELED
        assert found.provider_customer_id == "cus_2"


# =============================================================================
# InvoiceRepository
# =============================================================================


@pytest.mark.integration
class TestInvoiceRepository:
    """Invoice mirror keyed by provider invoice id."""

    async def test_save_and_find_by_both_ids(self, test_database):
        invoice = make_invoice(paid_at=BASE_TIME, status=InvoiceStatus.PAID)

        async with test_database.get_session() as session:
            await InvoiceRepository(session).save(invoice)

        async with test_database.get_session() as session:
            repo = InvoiceRepository(session)
            by_id = await repo.find_by_id(invoice.id)
            by_provider = await repo.find_by_provider_id("in_1")

        assert by_id == by_provider
        assert by_id.status == InvoiceStatus.PAID
        assert by_id.paid_at == BASE_TIME
        assert by_id.amount_due == 1999
        assert by_id.description == "Invoice CV-0001"

    async def test_save_existing_provider_id_updates(self, test_database):
        async with test_database.get_session() as session:
            await InvoiceRepository(session).save(make_invoice())

        async with test_database.get_session() as session:
            repo = InvoiceRepository(session)
            invoice = await repo.find_by_provider_id("in_1")
            invoice.mark_void(BASE_TIME)
            await repo.save(invoice)

        async with test_database.get_session() as session:
            rows = await InvoiceRepository(session).list_by_owner("owner-1", limit=10)

        assert len(rows) == 1
        assert rows[0].status == InvoiceStatus.VOID
        assert rows[0].voided_at == BASE_TIME

    async def test_list_newest_first_with_filter_and_limit(self, test_database):
        async with test_database.get_session() as session:
            repo = InvoiceRepository(session)
            for day in range(5):
                invoice = make_invoice(
                    invoice_id=f"in_{day}",
                    status=InvoiceStatus.PAID if day % 2 == 0 else InvoiceStatus.OPEN,
                )
                invoice.created_at = BASE_TIME + timedelta(days=day)
                await repo.save(invoice)
            await repo.save(make_invoice(invoice_id="in_other", owner_id="owner-2"))

        async with test_database.get_session() as session:
            repo = InvoiceRepository(session)
            everything = await repo.list_by_owner("owner-1", limit=10)
            paid = await repo.list_by_owner(
                "owner-1", limit=10, status=InvoiceStatus.PAID
            )
            limited = await repo.list_by_owner("owner-1", limit=2)

        assert [i.provider_invoice_id for i in everything] == [
            "in_4",
            "in_3",
            "in_2",
            "in_1",
            "in_0",
        ]
        assert [i.provider_invoice_id for i in paid] == ["in_4", "in_2", "in_0"]
        assert [i.provider_invoice_id for i in limited] == ["in_4", "in_3"]


# =============================================================================
# BillingCustomerRepository
# =============================================================================


@pytest.mark.integration
class TestBillingCustomerRepository:
    """Owner <-> Stripe customer links."""

    async def test_link_and_lookup_both_ways(self, test_database):
        async with test_database.get_session() as session:
            await BillingCustomerRepository(session).link(
                owner_id="owner-1", provider_customer_id="cus_1"
            )

        async with test_database.get_session() as session:
            repo = BillingCustomerRepository(session)
            assert await repo.find_owner_id("cus_1") == "owner-1"
            assert await repo.find_customer_id("owner-1") == "cus_1"
            assert await repo.find_owner_id("cus_unknown") is None

    async def test_relink_is_idempotent(self, test_database):
        async with test_database.get_session() as session:
            repo = BillingCustomerRepository(session)
            await repo.link(owner_id="owner-1", provider_customer_id="cus_1")
            await repo.link(owner_id="owner-1", provider_customer_id="cus_1")

            assert await repo.find_customer_id("owner-1") == "cus_1"

    async def test_new_customer_replaces_old(self, test_database):
        async with test_database.get_session() as session:
            repo = BillingCustomerRepository(session)
            await repo.link(owner_id="owner-1", provider_customer_id="cus_1")
            await repo.link(owner_id="owner-1", provider_customer_id="cus_2")

            assert await repo.find_customer_id("owner-1") == "cus_2"
            assert await repo.find_owner_id("cus_1") is None

    async def test_customer_moves_to_new_owner(self, test_database):
        async with test_database.get_session() as session:
            repo = BillingCustomerRepository(session)
            await repo.link(owner_id="owner-1", provider_customer_id="cus_1")
            await repo.link(owner_id="owner-2", provider_customer_id="cus_1")

            assert await repo.find_owner_id("cus_1") == "owner-2"
            assert await repo.find_customer_id("owner-1") is None
