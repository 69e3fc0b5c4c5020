"""Container module - Centralized dependency injection.

Re-exports all factory functions from submodules:

    from src.core.container import get_logger, get_rate_limit, ...

The container is organized into modules:
- infrastructure: Core services (db, logging, security, rate limiting, Stripe)
- auth_handlers: Registration, login and token refresh handler factories
- project_handlers: Project command/query handler factories
- billing_handlers: Billing command/query handler factories
"""

# Infrastructure services
from src.core.container.infrastructure import (
    get_database,
    get_db_session,
    get_logger,
    get_password_service,
    get_payment_provider,
    get_processed_event_store,
    get_rate_limit,
    get_rate_limit_store,
    get_token_service,
)

# Auth handlers
from src.core.container.auth_handlers import (
    get_login_user_handler,
    get_refresh_access_token_handler,
    get_register_user_handler,
)

# Project handlers
from src.core.container.project_handlers import (
    get_create_project_handler,
    get_delete_project_handler,
    get_get_project_handler,
    get_list_projects_handler,
    get_update_project_handler,
)

# Billing handlers
from src.core.container.billing_handlers import (
    get_get_invoice_handler,
    get_get_subscription_handler,
    get_list_invoices_handler,
    get_reconcile_billing_event_handler,
    get_sync_invoices_handler,
    get_void_invoice_handler,
)

__all__ = [
    # Infrastructure
    "get_database",
    "get_db_session",
    "get_logger",
    "get_password_service",
    "get_payment_provider",
    "get_processed_event_store",
    "get_rate_limit",
    "get_rate_limit_store",
    "get_token_service",
    # Auth handlers
    "get_login_user_handler",
    "get_refresh_access_token_handler",
    "get_register_user_handler",
    # Project handlers
    "get_create_project_handler",
    "get_delete_project_handler",
    "get_get_project_handler",
    "get_list_projects_handler",
    "get_update_project_handler",
    # Billing handlers
    "get_get_invoice_handler",
    "get_get_subscription_handler",
    "get_list_invoices_handler",
    "get_reconcile_billing_event_handler",
    "get_sync_invoices_handler",
    "get_void_invoice_handler",
]
