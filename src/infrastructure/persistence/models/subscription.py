"""Subscription database model.

One row per owner, upserted by the webhook reconciler. Storage sizes are
bytes and exceed 32-bit range (PRO is 2 TiB), hence BigInteger.
"""

from datetime import datetime

from sqlalchemy import BigInteger, Boolean, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseMutableModel


class Subscription(BaseMutableModel):
    """Subscription model.

    Fields:
        id: UUID primary key (from BaseMutableModel)
        owner_id: Local owner (unique, upsert key)
        provider_customer_id: Stripe customer id
        provider_subscription_id: Stripe subscription id (null on FREE)
        price_id: Stripe price of the first subscription item
        plan_tier: FREE, STANDARD, PRO
        status: ACTIVE, PAST_DUE, CANCELED, TRIALING, INACTIVE
        storage_limit: Quota in bytes
        storage_used: Usage in bytes
        current_period_end: End of the current billing period
        cancel_at_period_end: Stripe cancels at period end
    """

    __tablename__ = "subscriptions"

    owner_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        comment="Local owner identifier",
    )

    provider_customer_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
        comment="Stripe customer id (cus_...)",
    )

    provider_subscription_id: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        unique=True,
        comment="Stripe subscription id (sub_...)",
    )

    price_id: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )

    plan_tier: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="FREE",
    )

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        index=True,
        default="INACTIVE",
    )

    storage_limit: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
        comment="Quota in bytes",
    )

    storage_used: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
        default=0,
        comment="Bytes in use",
    )

    current_period_end: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    cancel_at_period_end: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )
