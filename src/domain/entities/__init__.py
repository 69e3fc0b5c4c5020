"""Domain entities.

Mutable dataclasses with identity. Persistence models in
src/infrastructure/persistence/models map to and from these.
"""

from src.domain.entities.invoice import Invoice
from src.domain.entities.project import Project
from src.domain.entities.subscription import Subscription
from src.domain.entities.user import User

__all__ = [
    "Invoice",
    "Project",
    "Subscription",
    "User",
]
