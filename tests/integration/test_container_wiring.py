"""Integration tests for container wiring.

Verifies that the factories build real handlers and app-scoped singletons
from settings, with a real database session for request-scoped handlers.
"""

import pytest

from src.application.commands.handlers.create_project_handler import (
    CreateProjectHandler,
)
from src.application.commands.handlers.delete_project_handler import (
    DeleteProjectHandler,
)
from src.application.commands.handlers.login_user_handler import LoginUserHandler
from src.application.commands.handlers.reconcile_billing_event_handler import (
    ReconcileBillingEventHandler,
)
from src.application.commands.handlers.refresh_access_token_handler import (
    RefreshAccessTokenHandler,
)
from src.application.commands.handlers.register_user_handler import (
    RegisterUserHandler,
)
from src.application.commands.handlers.sync_invoices_handler import (
    SyncInvoicesHandler,
)
from src.application.commands.handlers.update_project_handler import (
    UpdateProjectHandler,
)
from src.application.commands.handlers.void_invoice_handler import (
    VoidInvoiceHandler,
)
from src.application.queries.handlers.get_invoice_handler import GetInvoiceHandler
from src.application.queries.handlers.get_project_handler import GetProjectHandler
from src.application.queries.handlers.get_subscription_handler import (
    GetSubscriptionHandler,
)
from src.application.queries.handlers.list_invoices_handler import (
    ListInvoicesHandler,
)
from src.application.queries.handlers.list_projects_handler import (
    ListProjectsHandler,
)
from src.core.container import (
    get_create_project_handler,
    get_delete_project_handler,
    get_get_invoice_handler,
    get_get_project_handler,
    get_get_subscription_handler,
    get_list_invoices_handler,
    get_list_projects_handler,
    get_login_user_handler,
    get_password_service,
    get_payment_provider,
    get_processed_event_store,
    get_rate_limit,
    get_rate_limit_store,
    get_reconcile_billing_event_handler,
    get_refresh_access_token_handler,
    get_register_user_handler,
    get_sync_invoices_handler,
    get_token_service,
    get_update_project_handler,
    get_void_invoice_handler,
)
from src.infrastructure.billing import InMemoryProcessedEventStore, StripeGateway
from src.infrastructure.rate_limit import (
    FixedWindowRateLimiter,
    InMemoryRateLimitStore,
)
from src.infrastructure.security import BcryptPasswordService, JWTService


@pytest.mark.integration
class TestAppScopedSingletons:
    """lru_cache singletons configured from settings."""

    def test_rate_limit_uses_memory_store_by_default(self):
        assert isinstance(get_rate_limit_store(), InMemoryRateLimitStore)
        assert isinstance(get_rate_limit(), FixedWindowRateLimiter)
        assert get_rate_limit() is get_rate_limit()

    def test_billing_singletons(self):
        assert isinstance(get_payment_provider(), StripeGateway)
        assert isinstance(get_processed_event_store(), InMemoryProcessedEventStore)
        assert get_processed_event_store() is get_processed_event_store()

    def test_token_service(self):
        service = get_token_service()

        assert isinstance(service, JWTService)
        assert service.access_token_ttl_seconds == 15 * 60

    def test_password_service(self):
        assert isinstance(get_password_service(), BcryptPasswordService)


@pytest.mark.integration
class TestRequestScopedHandlers:
    """Handler factories on a real session."""

    @pytest.mark.parametrize(
        ("factory", "handler_type"),
        [
            (get_reconcile_billing_event_handler, ReconcileBillingEventHandler),
            (get_sync_invoices_handler, SyncInvoicesHandler),
            (get_void_invoice_handler, VoidInvoiceHandler),
            (get_get_subscription_handler, GetSubscriptionHandler),
            (get_list_invoices_handler, ListInvoicesHandler),
            (get_get_invoice_handler, GetInvoiceHandler),
            (get_register_user_handler, RegisterUserHandler),
            (get_login_user_handler, LoginUserHandler),
            (get_refresh_access_token_handler, RefreshAccessTokenHandler),
            (get_create_project_handler, CreateProjectHandler),
            (get_update_project_handler, UpdateProjectHandler),
            (get_delete_project_handler, DeleteProjectHandler),
            (get_list_projects_handler, ListProjectsHandler),
            (get_get_project_handler, GetProjectHandler),
        ],
    )
    async def test_factory_builds_handler(self, db_session, factory, handler_type):
        handler = await factory(session=db_session)

        assert isinstance(handler, handler_type)
