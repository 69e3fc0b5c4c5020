"""Data Transfer Objects (DTOs) for application layer.

DTOs are result dataclasses returned by command and query handlers. They
are NOT API schemas (Pydantic models live in src/schemas).

Usage:
    from src.application.dtos import InvoiceListResult, WebhookReceipt
"""

from src.application.dtos.auth_dtos import AuthTokens, RegisteredUser
from src.application.dtos.billing_dtos import (
    InvoiceListResult,
    InvoiceResult,
    SubscriptionResult,
    SyncInvoicesResult,
    VoidInvoiceResult,
    WebhookReceipt,
)
from src.application.dtos.project_dtos import ProjectListResult, ProjectResult

__all__ = [
    "AuthTokens",
    "InvoiceListResult",
    "InvoiceResult",
    "ProjectListResult",
    "ProjectResult",
    "RegisteredUser",
    "SubscriptionResult",
    "SyncInvoicesResult",
    "VoidInvoiceResult",
    "WebhookReceipt",
]
