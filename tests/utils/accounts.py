"""Account and project test helpers.

In-memory UserRepository / ProjectRepository fakes that follow the same
rules as the SQLAlchemy adapters (lower-case emails, owner scoping, no
DELETED rows in reads).
"""

from datetime import UTC, datetime, timedelta
from uuid import UUID

from src.domain.entities.project import Project
from src.domain.entities.user import User
from src.domain.enums.project_status import ProjectStatus

BASE_TIME = datetime(2026, 10, 1, 12, 0, tzinfo=UTC)


def make_projects(owner_id: str, count: int, **overrides) -> list[Project]:
    """Projects with strictly increasing updated_at (oldest first)."""
    return [
        Project(
            owner_id=owner_id,
            name=f"Project {i}",
            created_at=BASE_TIME + timedelta(minutes=i),
            updated_at=BASE_TIME + timedelta(minutes=i),
            **overrides,
        )
        for i in range(count)
    ]


class InMemoryProjectRepository:
    """ProjectRepository backed by a dict keyed by project id."""

    def __init__(self, *projects: Project) -> None:
        self.rows: dict[UUID, Project] = {p.id: p for p in projects}
        self.saved: list[Project] = []

    def _live(self, owner_id: str, status: ProjectStatus | None) -> list[Project]:
        return [
            p
            for p in self.rows.values()
            if p.owner_id == owner_id
            and not p.is_deleted
            and (status is None or p.status == status)
        ]

    async def find_by_id(self, owner_id: str, project_id: UUID) -> Project | None:
        project = self.rows.get(project_id)
        if project is None or project.owner_id != owner_id or project.is_deleted:
            return None
        return project

    async def list_by_owner(
        self,
        owner_id: str,
        *,
        limit: int,
        offset: int = 0,
        status: ProjectStatus | None = None,
    ) -> list[Project]:
        rows = sorted(
            self._live(owner_id, status), key=lambda p: p.updated_at, reverse=True
        )
        return rows[offset : offset + limit]

    async def count_by_owner(
        self, owner_id: str, *, status: ProjectStatus | None = None
    ) -> int:
        return len(self._live(owner_id, status))

    async def save(self, project: Project) -> None:
        self.rows[project.id] = project
        self.saved.append(project)


class InMemoryUserRepository:
    """UserRepository backed by a dict keyed by user id."""

    def __init__(self, *users: User) -> None:
        self.rows: dict[UUID, User] = {u.id: u for u in users}

    async def find_by_id(self, user_id: UUID) -> User | None:
        return self.rows.get(user_id)

    async def find_by_email(self, email: str) -> User | None:
        wanted = email.lower()
        return next((u for u in self.rows.values() if u.email == wanted), None)

    async def save(self, user: User) -> None:
        self.rows[user.id] = user
