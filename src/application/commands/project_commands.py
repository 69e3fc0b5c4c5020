"""Project commands.

Create, update and soft-delete an owner's projects. Every command carries
the authenticated owner id; projects of other owners are reported as not
found.
"""

from dataclasses import dataclass
from uuid import UUID

from src.domain.enums.project_status import ProjectStatus


@dataclass(frozen=True, kw_only=True)
class CreateProject:
    """Create a project, subject to the owner's plan cap.

    Attributes:
        owner_id: Authenticated owner.
        name: Project name.
        description: Optional description.
    """

    owner_id: str
    name: str
    description: str | None = None


@dataclass(frozen=True, kw_only=True)
class UpdateProject:
    """Partially update a project.

    Fields left as None are unchanged. Because None is also a valid
    description, clearing it requires `update_description=True`.

    Attributes:
        owner_id: Authenticated owner.
        project_id: Project to update.
        name: New name.
        description: New description (None clears when update_description).
        update_description: Whether `description` should be applied.
        status: ACTIVE or ARCHIVED.
    """

    owner_id: str
    project_id: UUID
    name: str | None = None
    description: str | None = None
    update_description: bool = False
    status: ProjectStatus | None = None


@dataclass(frozen=True, kw_only=True)
class DeleteProject:
    """Soft-delete a project (status DELETED)."""

    owner_id: str
    project_id: UUID
