"""Billing handler dependency factories.

Request-scoped handler instances built on a per-request database session:
- ReconcileBillingEvent (webhooks)
- SyncInvoices / VoidInvoice commands
- GetSubscription / ListInvoices / GetInvoice queries
"""

from typing import TYPE_CHECKING

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config import settings
from src.core.container.infrastructure import (
    get_db_session,
    get_logger,
    get_payment_provider,
    get_processed_event_store,
)

if TYPE_CHECKING:
    from src.application.commands.handlers.reconcile_billing_event_handler import (
        ReconcileBillingEventHandler,
    )
    from src.application.commands.handlers.sync_invoices_handler import (
        SyncInvoicesHandler,
    )
    from src.application.commands.handlers.void_invoice_handler import (
        VoidInvoiceHandler,
    )
    from src.application.queries.handlers.get_invoice_handler import (
        GetInvoiceHandler,
    )
    from src.application.queries.handlers.get_subscription_handler import (
        GetSubscriptionHandler,
    )
    from src.application.queries.handlers.list_invoices_handler import (
        ListInvoicesHandler,
    )


# ============================================================================
# Command Handler Factories (Request-Scoped)
# ============================================================================


async def get_reconcile_billing_event_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "ReconcileBillingEventHandler":
    """Get ReconcileBillingEvent handler (request-scoped).

    Creates handler with:
    - Stripe gateway and processed-event store (app-scoped)
    - Subscription, invoice and customer repositories (request-scoped)

    Returns:
        ReconcileBillingEventHandler instance.
    """
    from src.application.commands.handlers.reconcile_billing_event_handler import (
        ReconcileBillingEventHandler,
    )
    from src.domain.enums import UnresolvedOwnerPolicy
    from src.infrastructure.persistence.repositories import (
        BillingCustomerRepository,
        InvoiceRepository,
        SubscriptionRepository,
    )

    return ReconcileBillingEventHandler(
        payment_provider=get_payment_provider(),
        processed_events=get_processed_event_store(),
        subscription_repo=SubscriptionRepository(session=session),
        invoice_repo=InvoiceRepository(session=session),
        customer_repo=BillingCustomerRepository(session=session),
        logger=get_logger(),
        unresolved_owner_policy=UnresolvedOwnerPolicy(
            settings.billing_unresolved_owner_policy
        ),
    )


async def get_sync_invoices_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "SyncInvoicesHandler":
    """Get SyncInvoices command handler (request-scoped)."""
    from src.application.commands.handlers.sync_invoices_handler import (
        SyncInvoicesHandler,
    )
    from src.infrastructure.persistence.repositories import (
        BillingCustomerRepository,
        InvoiceRepository,
    )

    return SyncInvoicesHandler(
        payment_provider=get_payment_provider(),
        invoice_repo=InvoiceRepository(session=session),
        customer_repo=BillingCustomerRepository(session=session),
        logger=get_logger(),
    )


async def get_void_invoice_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "VoidInvoiceHandler":
    """Get VoidInvoice command handler (request-scoped)."""
    from src.application.commands.handlers.void_invoice_handler import (
        VoidInvoiceHandler,
    )
    from src.infrastructure.persistence.repositories import InvoiceRepository

    return VoidInvoiceHandler(
        payment_provider=get_payment_provider(),
        invoice_repo=InvoiceRepository(session=session),
        logger=get_logger(),
    )


# ============================================================================
# Query Handler Factories (Request-Scoped)
# ============================================================================


async def get_get_subscription_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "GetSubscriptionHandler":
    """Get GetSubscription query handler (request-scoped)."""
    from src.application.queries.handlers.get_subscription_handler import (
        GetSubscriptionHandler,
    )
    from src.infrastructure.persistence.repositories import (
        BillingCustomerRepository,
        SubscriptionRepository,
    )

    return GetSubscriptionHandler(
        subscription_repo=SubscriptionRepository(session=session),
        customer_repo=BillingCustomerRepository(session=session),
    )


async def get_list_invoices_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "ListInvoicesHandler":
    """Get ListInvoices query handler (request-scoped)."""
    from src.application.queries.handlers.list_invoices_handler import (
        ListInvoicesHandler,
    )
    from src.infrastructure.persistence.repositories import InvoiceRepository

    return ListInvoicesHandler(invoice_repo=InvoiceRepository(session=session))


async def get_get_invoice_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "GetInvoiceHandler":
    """Get GetInvoice query handler (request-scoped)."""
    from src.application.queries.handlers.get_invoice_handler import (
        GetInvoiceHandler,
    )
    from src.infrastructure.persistence.repositories import InvoiceRepository

    return GetInvoiceHandler(invoice_repo=InvoiceRepository(session=session))
