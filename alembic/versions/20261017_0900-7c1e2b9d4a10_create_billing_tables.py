"""create_billing_tables

Revision ID: 7c1e2b9d4a10
Revises:
Create Date: 2026-10-17 09:00:00.000000+00:00

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "7c1e2b9d4a10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    """Primary key and timestamps from BaseMutableModel."""
    return [
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Create billing_customers, subscriptions and invoices tables."""
    op.create_table(
        "billing_customers",
        *_timestamps(),
        sa.Column(
            "owner_id",
            sa.String(length=255),
            nullable=False,
            comment="Local owner identifier",
        ),
        sa.Column(
            "provider_customer_id",
            sa.String(length=255),
            nullable=False,
            comment="Stripe customer id (cus_...)",
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("owner_id"),
        sa.UniqueConstraint("provider_customer_id"),
    )

    op.create_table(
        "subscriptions",
        *_timestamps(),
        sa.Column("owner_id", sa.String(length=255), nullable=False),
        sa.Column("provider_customer_id", sa.String(length=255), nullable=False),
        sa.Column(
            "provider_subscription_id",
            sa.String(length=255),
            nullable=True,
            comment="Stripe subscription id (sub_...), cleared on deletion",
        ),
        sa.Column("price_id", sa.String(length=255), nullable=True),
        sa.Column(
            "plan_tier",
            sa.String(length=20),
            nullable=False,
            comment="FREE, STANDARD or PRO",
        ),
        sa.Column(
            "status",
            sa.String(length=20),
            nullable=False,
            comment="ACTIVE, PAST_DUE, CANCELED, TRIALING or INACTIVE",
        ),
        sa.Column(
            "storage_limit",
            sa.BigInteger(),
            nullable=False,
            comment="Storage quota in bytes",
        ),
        sa.Column(
            "storage_used",
            sa.BigInteger(),
            nullable=False,
            comment="Storage used in bytes",
        ),
        sa.Column(
            "current_period_end", sa.DateTime(timezone=True), nullable=True
        ),
        sa.Column("cancel_at_period_end", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("owner_id"),
        sa.UniqueConstraint("provider_subscription_id"),
    )
    op.create_index(
        "ix_subscriptions_provider_customer_id",
        "subscriptions",
        ["provider_customer_id"],
    )
    op.create_index("ix_subscriptions_status", "subscriptions", ["status"])

    op.create_table(
        "invoices",
        *_timestamps(),
        sa.Column("owner_id", sa.String(length=255), nullable=False),
        sa.Column(
            "provider_invoice_id",
            sa.String(length=255),
            nullable=False,
            comment="Stripe invoice id (in_...)",
        ),
        sa.Column("provider_customer_id", sa.String(length=255), nullable=False),
        sa.Column("provider_subscription_id", sa.String(length=255), nullable=True),
        sa.Column(
            "amount_due",
            sa.Integer(),
            nullable=False,
            comment="Minor units (cents)",
        ),
        sa.Column(
            "amount_paid",
            sa.Integer(),
            nullable=False,
            comment="Minor units (cents)",
        ),
        sa.Column("currency", sa.String(length=3), nullable=False),
        sa.Column(
            "status",
            sa.String(length=20),
            nullable=False,
            comment="DRAFT, OPEN, PAID, VOID or UNCOLLECTIBLE",
        ),
        sa.Column("description", sa.String(length=500), nullable=False),
        sa.Column("invoice_pdf_url", sa.String(length=2048), nullable=True),
        sa.Column("hosted_invoice_url", sa.String(length=2048), nullable=True),
        sa.Column("period_start", sa.DateTime(timezone=True), nullable=True),
        sa.Column("period_end", sa.DateTime(timezone=True), nullable=True),
        sa.Column("due_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("paid_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("voided_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("provider_invoice_id"),
    )
    op.create_index("ix_invoices_owner_id", "invoices", ["owner_id"])
    op.create_index("ix_invoices_status", "invoices", ["status"])
    op.create_index(
        "idx_invoices_owner_created", "invoices", ["owner_id", "created_at"]
    )


def downgrade() -> None:
    """Drop billing tables."""
    op.drop_index("idx_invoices_owner_created", table_name="invoices")
    op.drop_index("ix_invoices_status", table_name="invoices")
    op.drop_index("ix_invoices_owner_id", table_name="invoices")
    op.drop_table("invoices")
    op.drop_index("ix_subscriptions_status", table_name="subscriptions")
    op.drop_index(
        "ix_subscriptions_provider_customer_id", table_name="subscriptions"
    )
    op.drop_table("subscriptions")
    op.drop_table("billing_customers")
