"""Project domain entity.

A project groups an owner's stored files. The number of live projects an
owner may hold is capped by their plan (see PLAN_PROJECT_LIMITS).
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID, uuid4

from src.domain.enums.project_status import ProjectStatus

MAX_NAME_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 500


def _utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass
class Project:
    """An owner's project.

    Attributes:
        owner_id: Local owner identifier.
        name: Display name (1..100 characters).
        description: Optional description (up to 500 characters).
        status: ACTIVE, ARCHIVED or DELETED (soft delete).
        storage_used: Bytes stored in the project.
        files_count: Number of files in the project.
        id: Project identifier.
        created_at: Record creation timestamp.
        updated_at: Last modification timestamp.

    Example:
        >>> project = Project(owner_id="user-1", name="Photos")
        >>> project.archive()
        >>> project.status
        <ProjectStatus.ARCHIVED: 'ARCHIVED'>
    """

    owner_id: str
    name: str
    description: str | None = None
    status: ProjectStatus = ProjectStatus.ACTIVE
    storage_used: int = 0
    files_count: int = 0
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=_utc_now)
    updated_at: datetime = field(default_factory=_utc_now)

    @property
    def is_deleted(self) -> bool:
        return self.status == ProjectStatus.DELETED

    def rename(self, name: str) -> None:
        self.name = name
        self._touch()

    def describe(self, description: str | None) -> None:
        """Replace the description; None clears it."""
        self.description = description
        self._touch()

    def archive(self) -> None:
        self.status = ProjectStatus.ARCHIVED
        self._touch()

    def restore(self) -> None:
        self.status = ProjectStatus.ACTIVE
        self._touch()

    def mark_deleted(self) -> None:
        """Soft delete. The row is kept for storage accounting."""
        self.status = ProjectStatus.DELETED
        self._touch()

    def _touch(self) -> None:
        self.updated_at = _utc_now()
