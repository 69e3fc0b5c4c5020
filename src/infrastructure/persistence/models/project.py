"""Project database model.

Projects are soft-deleted (status DELETED); rows are never removed.
"""

from sqlalchemy import BigInteger, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseMutableModel


class Project(BaseMutableModel):
    """Project model.

    Indexes:
        - idx_projects_owner_updated: (owner_id, updated_at) for listing
        - idx_projects_owner_status: (owner_id, status) for plan cap counts
    """

    __tablename__ = "projects"

    owner_id: Mapped[str] = mapped_column(String(255), nullable=False)

    name: Mapped[str] = mapped_column(String(100), nullable=False)

    description: Mapped[str | None] = mapped_column(String(500), nullable=True)

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="ACTIVE",
        comment="ACTIVE, ARCHIVED or DELETED",
    )

    storage_used: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
        default=0,
        comment="Bytes stored in the project",
    )

    files_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        Index("idx_projects_owner_updated", "owner_id", "updated_at"),
        Index("idx_projects_owner_status", "owner_id", "status"),
    )
