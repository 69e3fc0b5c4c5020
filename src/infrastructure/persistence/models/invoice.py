"""Invoice database model.

Local mirror of Stripe invoices, one row per Stripe invoice id. Amounts are
integers in minor units (cents).
"""

from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseMutableModel


class Invoice(BaseMutableModel):
    """Invoice model.

    Indexes:
        - idx_invoices_owner_created: (owner_id, created_at) for newest-first listing
    """

    __tablename__ = "invoices"

    owner_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
    )

    provider_invoice_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        comment="Stripe invoice id (in_...)",
    )

    provider_customer_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    provider_subscription_id: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )

    amount_due: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    amount_paid: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="eur")

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        index=True,
        comment="DRAFT, OPEN, PAID, VOID, UNCOLLECTIBLE",
    )

    description: Mapped[str] = mapped_column(String(500), nullable=False, default="")

    invoice_pdf_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    hosted_invoice_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)

    period_start: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    period_end: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    due_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    paid_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    voided_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    __table_args__ = (
        Index("idx_invoices_owner_created", "owner_id", "created_at"),
    )
