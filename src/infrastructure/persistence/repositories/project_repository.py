"""ProjectRepository - SQLAlchemy implementation.

Adapter for hexagonal architecture.
Maps between domain Project entities and the projects table. DELETED rows
are invisible to every read.
"""

from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities.project import Project
from src.domain.enums.project_status import ProjectStatus
from src.infrastructure.persistence.base import as_utc
from src.infrastructure.persistence.models.project import Project as ProjectModel


class ProjectRepository:
    """SQLAlchemy implementation of the ProjectRepository protocol.

    Attributes:
        session: SQLAlchemy async session for database operations.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, owner_id: str, project_id: UUID) -> Project | None:
        stmt = self._live(owner_id).where(ProjectModel.id == project_id)
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model is not None else None

    async def list_by_owner(
        self,
        owner_id: str,
        *,
        limit: int,
        offset: int = 0,
        status: ProjectStatus | None = None,
    ) -> list[Project]:
        """List an owner's live projects, most recently updated first.

        Args:
            owner_id: Local owner identifier.
            limit: Maximum rows returned.
            offset: Rows skipped.
            status: Optional status filter (ACTIVE or ARCHIVED).

        Returns:
            List of projects (empty if none found).
        """
        stmt = self._live(owner_id, status)
        stmt = stmt.order_by(ProjectModel.updated_at.desc()).offset(offset).limit(limit)

        result = await self.session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def count_by_owner(
        self, owner_id: str, *, status: ProjectStatus | None = None
    ) -> int:
        stmt = select(func.count()).select_from(
            self._live(owner_id, status).subquery()
        )
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def save(self, project: Project) -> None:
        """Create or update a project by id.

        Args:
            project: Project entity to persist.
        """
        existing = await self.session.get(ProjectModel, project.id)

        if existing is None:
            self.session.add(self._to_model(project))
        else:
            existing.name = project.name
            existing.description = project.description
            existing.status = project.status.value
            existing.storage_used = project.storage_used
            existing.files_count = project.files_count
            existing.updated_at = project.updated_at

        await self.session.commit()

    @staticmethod
    def _live(
        owner_id: str, status: ProjectStatus | None = None
    ) -> Select[tuple[ProjectModel]]:
        stmt = select(ProjectModel).where(
            ProjectModel.owner_id == owner_id,
            ProjectModel.status != ProjectStatus.DELETED.value,
        )
        if status is not None:
            stmt = stmt.where(ProjectModel.status == status.value)
        return stmt

    def _to_domain(self, model: ProjectModel) -> Project:
        """Convert database model to domain entity."""
        return Project(
            id=model.id,
            owner_id=model.owner_id,
            name=model.name,
            description=model.description,
            status=ProjectStatus(model.status),
            storage_used=model.storage_used,
            files_count=model.files_count,
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )

    def _to_model(self, entity: Project) -> ProjectModel:
        """Convert domain entity to database model."""
        return ProjectModel(
            id=entity.id,
            owner_id=entity.owner_id,
            name=entity.name,
            description=entity.description,
            status=entity.status.value,
            storage_used=entity.storage_used,
            files_count=entity.files_count,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
