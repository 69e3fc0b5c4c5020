"""Project DTOs."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from src.domain.entities.project import Project


@dataclass
class ProjectResult:
    """Project view."""

    id: UUID
    name: str
    description: str | None
    status: str
    storage_used: int
    files_count: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, project: Project) -> "ProjectResult":
        return cls(
            id=project.id,
            name=project.name,
            description=project.description,
            status=project.status.value,
            storage_used=project.storage_used,
            files_count=project.files_count,
            created_at=project.created_at,
            updated_at=project.updated_at,
        )


@dataclass
class ProjectListResult:
    """One page of projects.

    Attributes:
        projects: Project views on this page.
        total: Number of matching projects across all pages.
        limit: Effective (clamped) page size.
        offset: Effective offset.
    """

    projects: list[ProjectResult]
    total: int
    limit: int
    offset: int
