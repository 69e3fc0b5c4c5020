"""SubscriptionRepository - SQLAlchemy implementation.

Adapter for hexagonal architecture.
Maps between domain Subscription entities and the subscriptions table.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities.subscription import Subscription
from src.domain.enums.plan_tier import PlanTier
from src.domain.enums.subscription_status import SubscriptionStatus
from src.infrastructure.persistence.base import as_utc
from src.infrastructure.persistence.models.subscription import (
    Subscription as SubscriptionModel,
)


class SubscriptionRepository:
    """SQLAlchemy implementation of the SubscriptionRepository protocol.

    This class does NOT inherit from the protocol (structural typing).

    Attributes:
        session: SQLAlchemy async session for database operations.

    Example:
        >>> async with database.get_session() as session:
        ...     repo = SubscriptionRepository(session)
        ...     subscription = await repo.find_by_owner("user-1")
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_owner(self, owner_id: str) -> Subscription | None:
        """Find the subscription of an owner.

        Args:
            owner_id: Local owner identifier.

        Returns:
            Domain Subscription if found, None otherwise.
        """
        model = await self._get_model(owner_id)
        if model is None:
            return None
        return self._to_domain(model)

    async def save(self, subscription: Subscription) -> None:
        """Create or update the owner's subscription.

        Upserts on owner_id, so at most one row exists per owner.

        Args:
            subscription: Subscription entity to persist.
        """
        existing = await self._get_model(subscription.owner_id)

        if existing is None:
            self.session.add(self._to_model(subscription))
        else:
            existing.provider_customer_id = subscription.provider_customer_id
            existing.provider_subscription_id = subscription.provider_subscription_id
            existing.price_id = subscription.price_id
            existing.plan_tier = subscription.plan_tier.value
            existing.status = subscription.status.value
            existing.storage_limit = subscription.storage_limit
            existing.storage_used = subscription.storage_used
            existing.current_period_end = subscription.current_period_end
            existing.cancel_at_period_end = subscription.cancel_at_period_end
            existing.updated_at = subscription.updated_at

        await self.session.commit()

    async def _get_model(self, owner_id: str) -> SubscriptionModel | None:
        stmt = select(SubscriptionModel).where(SubscriptionModel.owner_id == owner_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    def _to_domain(self, model: SubscriptionModel) -> Subscription:
        """Convert database model to domain entity."""
        return Subscription(
            id=model.id,
            owner_id=model.owner_id,
            provider_customer_id=model.provider_customer_id,
            provider_subscription_id=model.provider_subscription_id,
            price_id=model.price_id,
            plan_tier=PlanTier(model.plan_tier),
            status=SubscriptionStatus(model.status),
            storage_limit=model.storage_limit,
            storage_used=model.storage_used,
            current_period_end=as_utc(model.current_period_end),
            cancel_at_period_end=model.cancel_at_period_end,
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )

    def _to_model(self, entity: Subscription) -> SubscriptionModel:
        """Convert domain entity to database model."""
        return SubscriptionModel(
            id=entity.id,
            owner_id=entity.owner_id,
            provider_customer_id=entity.provider_customer_id,
            provider_subscription_id=entity.provider_subscription_id,
            price_id=entity.price_id,
            plan_tier=entity.plan_tier.value,
            status=entity.status.value,
            storage_limit=entity.storage_limit,
            storage_used=entity.storage_used,
            current_period_end=entity.current_period_end,
            cancel_at_period_end=entity.cancel_at_period_end,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
