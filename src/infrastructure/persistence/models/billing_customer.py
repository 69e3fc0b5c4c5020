"""Billing customer database model.

Links a local owner to the Stripe customer created for them at checkout.
Invoice events only carry the Stripe customer id, so the reconciler resolves
owners through this table.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseMutableModel


class BillingCustomer(BaseMutableModel):
    """Owner to Stripe customer link (one row per owner).

    Fields:
        owner_id: Local owner identifier (unique)
        provider_customer_id: Stripe customer id (unique)
    """

    __tablename__ = "billing_customers"

    owner_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        comment="Local owner identifier",
    )

    provider_customer_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        comment="Stripe customer id (cus_...)",
    )
