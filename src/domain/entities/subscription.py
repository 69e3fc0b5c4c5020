"""Subscription domain entity.

One subscription row exists per owner. Webhook reconciliation mutates it
through the transition methods below; rows are never hard-deleted, a
cancelled subscription falls back to the FREE plan.

Usage:
    from src.domain.entities import Subscription

    subscription = Subscription.new_free(owner_id="user-1", provider_customer_id="cus_1")
    subscription.activate_plan(
        plan_tier=PlanTier.PRO,
        provider_customer_id="cus_1",
        provider_subscription_id="sub_1",
    )
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID, uuid4

from src.domain.enums.plan_tier import PlanTier
from src.domain.enums.subscription_status import SubscriptionStatus
from src.domain.value_objects.plan import storage_limit_for
from src.domain.value_objects.provider_billing import ProviderSubscription


def _utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass
class Subscription:
    """An owner's storage subscription.

    Attributes:
        owner_id: Local owner identifier (upsert key).
        provider_customer_id: Stripe customer id.
        plan_tier: Current plan.
        status: Local subscription status.
        storage_limit: Quota in bytes (derived from plan_tier).
        storage_used: Bytes in use. Only reset when the row is created.
        provider_subscription_id: Stripe subscription id (None on FREE).
        price_id: Stripe price of the active plan.
        current_period_end: End of the billing period.
        cancel_at_period_end: Whether Stripe cancels at period end.
        id: Row identifier.
        created_at: Record creation timestamp.
        updated_at: Last modification timestamp.
    """

    owner_id: str
    provider_customer_id: str
    plan_tier: PlanTier = PlanTier.FREE
    status: SubscriptionStatus = SubscriptionStatus.INACTIVE
    storage_limit: int = field(default_factory=lambda: storage_limit_for(PlanTier.FREE))
    storage_used: int = 0
    provider_subscription_id: str | None = None
    price_id: str | None = None
    current_period_end: datetime | None = None
    cancel_at_period_end: bool = False
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=_utc_now)
    updated_at: datetime = field(default_factory=_utc_now)

    @classmethod
    def new_free(cls, *, owner_id: str, provider_customer_id: str) -> "Subscription":
        """Create a FREE subscription with an empty quota usage."""
        return cls(owner_id=owner_id, provider_customer_id=provider_customer_id)

    def activate_plan(
        self,
        *,
        plan_tier: PlanTier,
        provider_customer_id: str,
        provider_subscription_id: str | None,
    ) -> None:
        """Apply a completed checkout: the plan becomes ACTIVE.

        Args:
            plan_tier: Purchased plan.
            provider_customer_id: Stripe customer that paid.
            provider_subscription_id: Subscription created by the checkout.
        """
        self.plan_tier = plan_tier
        self.storage_limit = storage_limit_for(plan_tier)
        self.status = SubscriptionStatus.ACTIVE
        self.provider_customer_id = provider_customer_id
        self.provider_subscription_id = provider_subscription_id
        self._touch()

    def apply_provider_state(self, snapshot: ProviderSubscription) -> None:
        """Copy Stripe's view of the subscription onto this row.

        The plan tier and storage limit only change when the snapshot names
        a known plan.

        Args:
            snapshot: Parsed Stripe subscription.
        """
        self.provider_customer_id = snapshot.customer_id
        self.provider_subscription_id = snapshot.subscription_id
        self.price_id = snapshot.price_id
        self.status = SubscriptionStatus.from_provider(snapshot.status)
        self.current_period_end = snapshot.current_period_end
        self.cancel_at_period_end = snapshot.cancel_at_period_end
        if snapshot.plan_tier is not None:
            self.plan_tier = snapshot.plan_tier
            self.storage_limit = storage_limit_for(snapshot.plan_tier)
        self._touch()

    def downgrade_to_free(self) -> None:
        """Fall back to FREE after Stripe deleted the subscription."""
        self.plan_tier = PlanTier.FREE
        self.status = SubscriptionStatus.CANCELED
        self.storage_limit = storage_limit_for(PlanTier.FREE)
        self.provider_subscription_id = None
        self.cancel_at_period_end = False
        self._touch()

    def mark_past_due(self) -> None:
        """Record a failed renewal payment."""
        self.status = SubscriptionStatus.PAST_DUE
        self._touch()

    def has_capacity_for(self, additional_bytes: int) -> bool:
        """Whether `additional_bytes` more fit within the storage quota."""
        return self.storage_used + additional_bytes <= self.storage_limit

    def _touch(self) -> None:
        self.updated_at = _utc_now()
