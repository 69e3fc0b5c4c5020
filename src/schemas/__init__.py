"""Request/response schemas for API endpoints.

All Pydantic models for HTTP request validation and response serialization.
Schemas are kept separate from domain entities (HTTP-layer concerns only).

Usage:
    from src.schemas import InvoiceResponse, SubscriptionResponse
"""

from src.schemas.auth_schemas import (
    SessionCreateRequest,
    TokenCreateRequest,
    TokenPairResponse,
    UserCreateRequest,
    UserCreateResponse,
)
from src.schemas.billing_schemas import (
    # Webhooks
    WebhookErrorResponse,
    WebhookReceivedResponse,
    # Invoices
    InvoiceListResponse,
    InvoiceResponse,
    SyncInvoicesResponse,
    VoidInvoiceResponse,
    # Subscription
    SubscriptionResponse,
)
from src.schemas.project_schemas import (
    ProjectCreateRequest,
    ProjectListResponse,
    ProjectResponse,
    ProjectUpdateRequest,
)

__all__ = [
    "InvoiceListResponse",
    "InvoiceResponse",
    "ProjectCreateRequest",
    "ProjectListResponse",
    "ProjectResponse",
    "ProjectUpdateRequest",
    "SessionCreateRequest",
    "SubscriptionResponse",
    "SyncInvoicesResponse",
    "TokenCreateRequest",
    "TokenPairResponse",
    "UserCreateRequest",
    "UserCreateResponse",
    "VoidInvoiceResponse",
    "WebhookErrorResponse",
    "WebhookReceivedResponse",
]
