"""Unit tests for invoice command and query handlers.

Tests:
- SyncInvoicesHandler: Stripe pull and local upsert
- VoidInvoiceHandler: void vs credit note, ownership, status guards
- ListInvoicesHandler / GetInvoiceHandler: local reads
- GetSubscriptionHandler: FREE default for owners without a row

Reference:
    - src/application/commands/handlers/sync_invoices_handler.py
    - src/application/commands/handlers/void_invoice_handler.py
    - src/application/queries/handlers/
"""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from src.application.commands.billing_commands import SyncInvoices, VoidInvoice
from src.application.commands.handlers.sync_invoices_handler import (
    SyncInvoicesHandler,
)
from src.application.commands.handlers.void_invoice_handler import VoidInvoiceHandler
from src.application.queries.billing_queries import (
    GetInvoice,
    GetSubscription,
    ListInvoices,
)
from src.application.queries.handlers.get_invoice_handler import GetInvoiceHandler
from src.application.queries.handlers.get_subscription_handler import (
    GetSubscriptionHandler,
)
from src.application.queries.handlers.list_invoices_handler import (
    ListInvoicesHandler,
)
from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.domain.entities.subscription import Subscription
from src.domain.enums.invoice_status import InvoiceStatus
from src.domain.enums.plan_tier import PlanTier
from src.domain.value_objects.provider_billing import ProviderCreditNote
from tests.utils.billing import (
    FakePaymentProvider,
    InMemoryCustomerRepository,
    InMemoryInvoiceRepository,
    InMemorySubscriptionRepository,
    make_invoice,
    provider_invoice,
)

FIXED_NOW = datetime(2026, 10, 17, 9, 0, tzinfo=UTC)


# =============================================================================
# SyncInvoices
# =============================================================================


@pytest.mark.unit
class TestSyncInvoicesHandler:
    """Pulling invoices from Stripe."""

    async def test_upserts_listed_invoices(self, mock_logger):
        invoices = InMemoryInvoiceRepository(make_invoice(invoice_id="in_1"))
        provider = FakePaymentProvider(
            invoices=[
                provider_invoice(invoice_id="in_1", status="paid", amount_paid=1999),
                provider_invoice(invoice_id="in_2", status="open"),
            ]
        )
        handler = SyncInvoicesHandler(
            payment_provider=provider,
            invoice_repo=invoices,
            customer_repo=InMemoryCustomerRepository({"owner-1": "cus_1"}),
            logger=mock_logger,
        )

        result = await handler.handle(SyncInvoices(owner_id="owner-1", limit=20))

        assert isinstance(result, Success)
        assert result.value.synced == 2
        assert result.value.message == "Invoices synchronized successfully"
        assert provider.called("list_invoices") == [("cus_1", 20)]
        assert invoices.rows["in_1"].status == InvoiceStatus.PAID
        assert invoices.rows["in_1"].amount_paid == 1999
        assert invoices.rows["in_2"].status == InvoiceStatus.OPEN
        assert invoices.rows["in_2"].owner_id == "owner-1"

    async def test_unknown_provider_status_becomes_draft(self, mock_logger):
        invoices = InMemoryInvoiceRepository()
        handler = SyncInvoicesHandler(
            payment_provider=FakePaymentProvider(
                invoices=[provider_invoice(status="something_new")]
            ),
            invoice_repo=invoices,
            customer_repo=InMemoryCustomerRepository({"owner-1": "cus_1"}),
            logger=mock_logger,
        )

        await handler.handle(SyncInvoices(owner_id="owner-1"))

        assert invoices.rows["in_1"].status == InvoiceStatus.DRAFT

    async def test_owner_without_customer_syncs_nothing(self, mock_logger):
        provider = FakePaymentProvider()
        handler = SyncInvoicesHandler(
            payment_provider=provider,
            invoice_repo=InMemoryInvoiceRepository(),
            customer_repo=InMemoryCustomerRepository(),
            logger=mock_logger,
        )

        result = await handler.handle(SyncInvoices(owner_id="owner-1"))

        assert result.value.synced == 0
        assert provider.calls == []

    async def test_provider_error_is_returned(self, mock_logger):
        handler = SyncInvoicesHandler(
            payment_provider=FakePaymentProvider(api_error=True),
            invoice_repo=InMemoryInvoiceRepository(),
            customer_repo=InMemoryCustomerRepository({"owner-1": "cus_1"}),
            logger=mock_logger,
        )

        result = await handler.handle(SyncInvoices(owner_id="owner-1"))

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.BILLING_PROVIDER_ERROR


# =============================================================================
# VoidInvoice
# =============================================================================


@pytest.fixture
def void_setup(mock_logger):
    """Factory for a VoidInvoiceHandler around one invoice."""

    def _make(status: InvoiceStatus, **provider_kwargs):
        invoice = make_invoice(status=status, amount_paid=1999)
        repo = InMemoryInvoiceRepository(invoice)
        provider = FakePaymentProvider(**provider_kwargs)
        handler = VoidInvoiceHandler(
            payment_provider=provider,
            invoice_repo=repo,
            logger=mock_logger,
            clock=lambda: FIXED_NOW,
        )
        return handler, provider, invoice

    return _make


@pytest.mark.unit
class TestVoidInvoiceHandler:
    """Voiding and crediting invoices."""

    @pytest.mark.parametrize("status", [InvoiceStatus.OPEN, InvoiceStatus.DRAFT])
    async def test_voids_unpaid_invoice_in_stripe(self, void_setup, status):
        handler, provider, invoice = void_setup(status)

        result = await handler.handle(
            VoidInvoice(owner_id="owner-1", invoice_id=invoice.id)
        )

        assert isinstance(result, Success)
        assert provider.called("void_invoice") == ["in_1"]
        assert provider.called("create_credit_note") == []
        assert result.value.credit_note_id is None
        assert result.value.invoice.status == "VOID"
        assert invoice.voided_at == FIXED_NOW

    async def test_credits_paid_invoice(self, void_setup):
        handler, provider, invoice = void_setup(
            InvoiceStatus.PAID,
            credit_note=ProviderCreditNote(
                credit_note_id="cn_7",
                invoice_id="in_1",
                pdf_url="https://pay.stripe.test/cn_7.pdf",
            ),
        )

        result = await handler.handle(
            VoidInvoice(owner_id="owner-1", invoice_id=invoice.id)
        )

        assert provider.called("create_credit_note") == [("in_1", 1999, "order_change")]
        assert provider.called("void_invoice") == []
        assert result.value.credit_note_id == "cn_7"
        assert result.value.credit_note_url == "https://pay.stripe.test/cn_7.pdf"
        assert invoice.status == InvoiceStatus.VOID

    async def test_already_void(self, void_setup):
        handler, provider, invoice = void_setup(InvoiceStatus.VOID)

        result = await handler.handle(
            VoidInvoice(owner_id="owner-1", invoice_id=invoice.id)
        )

        assert result.error.code == ErrorCode.INVOICE_ALREADY_VOID
        assert provider.calls == []

    async def test_uncollectible_is_not_voidable(self, void_setup):
        handler, provider, invoice = void_setup(InvoiceStatus.UNCOLLECTIBLE)

        result = await handler.handle(
            VoidInvoice(owner_id="owner-1", invoice_id=invoice.id)
        )

        assert result.error.code == ErrorCode.INVOICE_NOT_VOIDABLE
        assert result.error.details == {"status": "UNCOLLECTIBLE"}

    async def test_other_owner_gets_not_found(self, void_setup):
        handler, provider, invoice = void_setup(InvoiceStatus.OPEN)

        result = await handler.handle(
            VoidInvoice(owner_id="owner-2", invoice_id=invoice.id)
        )

        assert result.error.code == ErrorCode.INVOICE_NOT_FOUND
        assert invoice.status == InvoiceStatus.OPEN

    async def test_missing_invoice(self, void_setup):
        handler, _, _ = void_setup(InvoiceStatus.OPEN)

        result = await handler.handle(VoidInvoice(owner_id="owner-1", invoice_id=uuid4()))

        assert result.error.code == ErrorCode.INVOICE_NOT_FOUND

    async def test_provider_error_leaves_invoice_unchanged(self, void_setup):
        handler, _, invoice = void_setup(InvoiceStatus.OPEN, api_error=True)

        result = await handler.handle(
            VoidInvoice(owner_id="owner-1", invoice_id=invoice.id)
        )

        assert result.error.code == ErrorCode.BILLING_PROVIDER_ERROR
        assert invoice.status == InvoiceStatus.OPEN
        assert invoice.voided_at is None


# =============================================================================
# Queries
# =============================================================================


@pytest.mark.unit
class TestListInvoicesHandler:
    """Local invoice listing."""

    async def test_newest_first_with_filter(self):
        old = make_invoice(invoice_id="in_old", status=InvoiceStatus.PAID)
        old.created_at = FIXED_NOW - timedelta(days=30)
        new = make_invoice(invoice_id="in_new", status=InvoiceStatus.PAID)
        new.created_at = FIXED_NOW
        open_invoice = make_invoice(invoice_id="in_open", status=InvoiceStatus.OPEN)
        handler = ListInvoicesHandler(
            invoice_repo=InMemoryInvoiceRepository(old, new, open_invoice)
        )

        result = await handler.handle(
            ListInvoices(owner_id="owner-1", status=InvoiceStatus.PAID)
        )

        assert [i.provider_invoice_id for i in result.value.invoices] == [
            "in_new",
            "in_old",
        ]
        assert result.value.total == 2

    @pytest.mark.parametrize(("requested", "expected"), [(0, 1), (-5, 1), (500, 50)])
    async def test_limit_is_clamped(self, requested, expected):
        repo = AsyncMock()
        repo.list_by_owner.return_value = []
        handler = ListInvoicesHandler(invoice_repo=repo)

        await handler.handle(ListInvoices(owner_id="owner-1", limit=requested))

        repo.list_by_owner.assert_awaited_once_with(
            "owner-1", limit=expected, status=None
        )

    async def test_other_owners_invoices_are_hidden(self):
        handler = ListInvoicesHandler(
            invoice_repo=InMemoryInvoiceRepository(make_invoice(owner_id="owner-2"))
        )

        result = await handler.handle(ListInvoices(owner_id="owner-1"))

        assert result.value.invoices == []
        assert result.value.total == 0


@pytest.mark.unit
class TestGetInvoiceHandler:
    """Single invoice lookup."""

    async def test_returns_owned_invoice(self):
        invoice = make_invoice()
        handler = GetInvoiceHandler(invoice_repo=InMemoryInvoiceRepository(invoice))

        result = await handler.handle(GetInvoice(owner_id="owner-1", invoice_id=invoice.id))

        assert result.value.id == invoice.id
        assert result.value.status == "OPEN"
        assert result.value.amount_due == 1999

    async def test_foreign_invoice_is_not_found(self):
        invoice = make_invoice(owner_id="owner-2")
        handler = GetInvoiceHandler(invoice_repo=InMemoryInvoiceRepository(invoice))

        result = await handler.handle(GetInvoice(owner_id="owner-1", invoice_id=invoice.id))

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.INVOICE_NOT_FOUND


@pytest.mark.unit
class TestGetSubscriptionHandler:
    """Subscription view."""

    async def test_existing_subscription(self):
        subscription = Subscription.new_free(
            owner_id="owner-1", provider_customer_id="cus_1"
        )
        subscription.activate_plan(
            plan_tier=PlanTier.STANDARD,
            provider_customer_id="cus_1",
            provider_subscription_id="sub_1",
        )
        handler = GetSubscriptionHandler(
            subscription_repo=InMemorySubscriptionRepository(subscription),
            customer_repo=InMemoryCustomerRepository(),
        )

        result = await handler.handle(GetSubscription(owner_id="owner-1"))

        assert result.value.plan_tier == "STANDARD"
        assert result.value.status == "ACTIVE"
        assert result.value.storage_limit == 500 * 1024**3

    async def test_owner_without_row_gets_free_default(self):
        handler = GetSubscriptionHandler(
            subscription_repo=InMemorySubscriptionRepository(),
            customer_repo=InMemoryCustomerRepository(),
        )

        result = await handler.handle(GetSubscription(owner_id="owner-1"))

        assert result.value.plan_tier == "FREE"
        assert result.value.status == "INACTIVE"
        assert result.value.storage_limit == 5 * 1024**3
        assert result.value.storage_used == 0
        assert result.value.current_period_end is None
