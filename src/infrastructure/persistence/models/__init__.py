"""SQLAlchemy models.

Importing this package registers every table on BaseModel.metadata (used by
Alembic autogenerate and Database.create_all).
"""

from src.infrastructure.persistence.models.billing_customer import BillingCustomer
from src.infrastructure.persistence.models.invoice import Invoice
from src.infrastructure.persistence.models.project import Project
from src.infrastructure.persistence.models.subscription import Subscription
from src.infrastructure.persistence.models.user import User

__all__ = [
    "BillingCustomer",
    "Invoice",
    "Project",
    "Subscription",
    "User",
]
