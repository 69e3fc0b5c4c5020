"""Repository implementations (SQLAlchemy adapters)."""

from src.infrastructure.persistence.repositories.billing_customer_repository import (
    BillingCustomerRepository,
)
from src.infrastructure.persistence.repositories.invoice_repository import (
    InvoiceRepository,
)
from src.infrastructure.persistence.repositories.project_repository import (
    ProjectRepository,
)
from src.infrastructure.persistence.repositories.subscription_repository import (
    SubscriptionRepository,
)
from src.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)

__all__ = [
    "BillingCustomerRepository",
    "InvoiceRepository",
    "ProjectRepository",
    "SubscriptionRepository",
    "UserRepository",
]
