"""BillingCustomerRepository - SQLAlchemy implementation.

Resolves owners from Stripe customer ids and back.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.infrastructure.persistence.models.billing_customer import BillingCustomer


class BillingCustomerRepository:
    """SQLAlchemy implementation of the BillingCustomerRepository protocol.

    Attributes:
        session: SQLAlchemy async session for database operations.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_owner_id(self, provider_customer_id: str) -> str | None:
        stmt = select(BillingCustomer.owner_id).where(
            BillingCustomer.provider_customer_id == provider_customer_id
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def find_customer_id(self, owner_id: str) -> str | None:
        stmt = select(BillingCustomer.provider_customer_id).where(
            BillingCustomer.owner_id == owner_id
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def link(self, *, owner_id: str, provider_customer_id: str) -> None:
        """Record the owner's Stripe customer.

        An owner has one customer; re-linking replaces the customer id, and
        a customer id already linked to another owner is moved.

        Args:
            owner_id: Local owner identifier.
            provider_customer_id: Stripe customer id.
        """
        stmt = select(BillingCustomer).where(
            (BillingCustomer.owner_id == owner_id)
            | (BillingCustomer.provider_customer_id == provider_customer_id)
        )
        result = await self.session.execute(stmt)
        rows = list(result.scalars().all())

        if any(
            row.owner_id == owner_id and row.provider_customer_id == provider_customer_id
            for row in rows
        ):
            return

        for row in rows:
            await self.session.delete(row)
        await self.session.flush()

        self.session.add(
            BillingCustomer(owner_id=owner_id, provider_customer_id=provider_customer_id)
        )
        await self.session.commit()
