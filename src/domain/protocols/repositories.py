"""Repository protocols (ports) for billing, project and user persistence.

Adapters live in src/infrastructure/persistence/repositories/ and map
between SQLAlchemy models and domain entities. Every save() is an upsert on
the entity's natural key so webhook replays stay idempotent.
"""

from typing import Protocol
from uuid import UUID

from src.domain.entities.invoice import Invoice
from src.domain.entities.project import Project
from src.domain.entities.subscription import Subscription
from src.domain.entities.user import User
from src.domain.enums.invoice_status import InvoiceStatus
from src.domain.enums.project_status import ProjectStatus


class SubscriptionRepository(Protocol):
    """Subscription persistence (one row per owner)."""

    async def find_by_owner(self, owner_id: str) -> Subscription | None:
        """Find the subscription of an owner."""
        ...

    async def save(self, subscription: Subscription) -> None:
        """Insert or update by owner_id."""
        ...


class InvoiceRepository(Protocol):
    """Invoice persistence (one row per provider invoice id)."""

    async def find_by_id(self, invoice_id: UUID) -> Invoice | None:
        """Find an invoice by its local id."""
        ...

    async def find_by_provider_id(self, provider_invoice_id: str) -> Invoice | None:
        """Find an invoice by its Stripe id."""
        ...

    async def list_by_owner(
        self,
        owner_id: str,
        *,
        limit: int,
        status: InvoiceStatus | None = None,
    ) -> list[Invoice]:
        """List an owner's invoices, newest first."""
        ...

    async def save(self, invoice: Invoice) -> None:
        """Insert or update by provider_invoice_id."""
        ...


class BillingCustomerRepository(Protocol):
    """Link between local owners and Stripe customers."""

    async def find_owner_id(self, provider_customer_id: str) -> str | None:
        """Resolve the local owner of a Stripe customer."""
        ...

    async def find_customer_id(self, owner_id: str) -> str | None:
        """Resolve the Stripe customer of a local owner."""
        ...

    async def link(self, *, owner_id: str, provider_customer_id: str) -> None:
        """Record (or update) the owner's Stripe customer."""
        ...


class ProjectRepository(Protocol):
    """Project persistence.

    Reads are scoped to one owner and never return DELETED projects.
    """

    async def find_by_id(self, owner_id: str, project_id: UUID) -> Project | None:
        """Find a live project of the owner."""
        ...

    async def list_by_owner(
        self,
        owner_id: str,
        *,
        limit: int,
        offset: int = 0,
        status: ProjectStatus | None = None,
    ) -> list[Project]:
        """List live projects, most recently updated first."""
        ...

    async def count_by_owner(
        self, owner_id: str, *, status: ProjectStatus | None = None
    ) -> int:
        """Count live projects (optionally of one status)."""
        ...

    async def save(self, project: Project) -> None:
        """Insert or update by id."""
        ...


class UserRepository(Protocol):
    """User persistence (email is unique, stored lower-case)."""

    async def find_by_id(self, user_id: UUID) -> User | None:
        """Find a user by id."""
        ...

    async def find_by_email(self, email: str) -> User | None:
        """Find a user by email (case-insensitive)."""
        ...

    async def save(self, user: User) -> None:
        """Insert or update by id."""
        ...
