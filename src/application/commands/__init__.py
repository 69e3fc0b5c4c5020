"""Commands - Write operations that change state.

Commands represent intent to perform an action. They are immutable
dataclasses with imperative names (VoidInvoice, SyncInvoices).

Each command has a corresponding handler in commands/handlers/.
"""

from src.application.commands.auth_commands import (
    LoginUser,
    RefreshAccessToken,
    RegisterUser,
)
from src.application.commands.billing_commands import (
    ReconcileBillingEvent,
    SyncInvoices,
    VoidInvoice,
)
from src.application.commands.project_commands import (
    CreateProject,
    DeleteProject,
    UpdateProject,
)

__all__ = [
    "CreateProject",
    "DeleteProject",
    "LoginUser",
    "ReconcileBillingEvent",
    "RefreshAccessToken",
    "RegisterUser",
    "SyncInvoices",
    "UpdateProject",
    "VoidInvoice",
]
