"""Project queries (CQRS read operations).

DELETED projects never appear in query results.
"""

from dataclasses import dataclass
from uuid import UUID

from src.domain.enums.project_status import ProjectStatus


@dataclass(frozen=True, kw_only=True)
class ListProjects:
    """List the owner's projects, most recently updated first.

    Attributes:
        owner_id: Authenticated owner.
        limit: Page size (clamped to 1..100 by the handler).
        offset: Rows skipped (negative values read as 0).
        status: Optional ACTIVE or ARCHIVED filter.
    """

    owner_id: str
    limit: int = 50
    offset: int = 0
    status: ProjectStatus | None = None


@dataclass(frozen=True, kw_only=True)
class GetProject:
    """Get one live project of the owner."""

    owner_id: str
    project_id: UUID
