"""create_users_and_projects

Revision ID: b4d8e61f2c37
Revises: 7c1e2b9d4a10
Create Date: 2026-10-17 14:00:00.000000+00:00

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "b4d8e61f2c37"
down_revision: Union[str, Sequence[str], None] = "7c1e2b9d4a10"
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
    """Create users and projects tables."""
    op.create_table(
        "users",
        *_timestamps(),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column(
            "password_hash",
            sa.String(length=255),
            nullable=False,
            comment="Bcrypt hash",
        ),
        sa.Column("firstname", sa.String(length=100), nullable=True),
        sa.Column("lastname", sa.String(length=100), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "projects",
        *_timestamps(),
        sa.Column("owner_id", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.String(length=500), nullable=True),
        sa.Column(
            "status",
            sa.String(length=20),
            nullable=False,
            comment="ACTIVE, ARCHIVED or DELETED",
        ),
        sa.Column(
            "storage_used",
            sa.BigInteger(),
            nullable=False,
            comment="Bytes stored in the project",
        ),
        sa.Column("files_count", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_projects_owner_updated", "projects", ["owner_id", "updated_at"]
    )
    op.create_index(
        "idx_projects_owner_status", "projects", ["owner_id", "status"]
    )


def downgrade() -> None:
    """Drop users and projects tables."""
    op.drop_index("idx_projects_owner_status", table_name="projects")
    op.drop_index("idx_projects_owner_updated", table_name="projects")
    op.drop_table("projects")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
