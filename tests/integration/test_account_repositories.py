"""Integration tests for the project and user repositories.

Runs ProjectRepository and UserRepository against a real SQLite database
(aiosqlite):
- Owner scoping and DELETED rows hidden from every read
- Most-recently-updated-first paging and live counts
- Case-insensitive email lookup
"""

import pytest

from src.domain.entities.project import Project
from src.domain.entities.user import User
from src.domain.enums.project_status import ProjectStatus
from src.infrastructure.persistence.repositories import (
    ProjectRepository,
    UserRepository,
)
from tests.utils.accounts import make_projects


# =============================================================================
# ProjectRepository
# =============================================================================


@pytest.mark.integration
class TestProjectRepository:
    """Owner-scoped live projects."""

    async def test_save_and_find(self, test_database):
        project = Project(owner_id="owner-1", name="Photos", description="Family")

        async with test_database.get_session() as session:
            await ProjectRepository(session).save(project)

        async with test_database.get_session() as session:
            found = await ProjectRepository(session).find_by_id("owner-1", project.id)

        assert found is not None
        assert found.name == "Photos"
        assert found.description == "Family"
        assert found.status == ProjectStatus.ACTIVE
        assert found.created_at.tzinfo is not None

    async def test_other_owner_cannot_find(self, test_database):
        project = Project(owner_id="owner-1", name="Photos")

        async with test_database.get_session() as session:
            repo = ProjectRepository(session)
            await repo.save(project)

            assert await repo.find_by_id("owner-2", project.id) is None

    async def test_update_and_soft_delete(self, test_database):
        project = Project(owner_id="owner-1", name="Photos")

        async with test_database.get_session() as session:
            repo = ProjectRepository(session)
            await repo.save(project)
            project.rename("Pictures")
            await repo.save(project)
            renamed = await repo.find_by_id("owner-1", project.id)
            project.mark_deleted()
            await repo.save(project)
            deleted = await repo.find_by_id("owner-1", project.id)
            count = await repo.count_by_owner("owner-1")

        assert renamed is not None
        assert renamed.name == "Pictures"
        assert deleted is None
        assert count == 0

    async def test_list_pages_newest_update_first(self, test_database):
        projects = make_projects("owner-1", 5) + make_projects("owner-2", 2)

        async with test_database.get_session() as session:
            repo = ProjectRepository(session)
            for project in projects:
                await repo.save(project)

            page = await repo.list_by_owner("owner-1", limit=2, offset=1)
            total = await repo.count_by_owner("owner-1")

        assert [p.name for p in page] == ["Project 3", "Project 2"]
        assert total == 5

    async def test_status_filter(self, test_database):
        active, archived, deleted = make_projects("owner-1", 3)
        archived.status = ProjectStatus.ARCHIVED
        deleted.status = ProjectStatus.DELETED

        async with test_database.get_session() as session:
            repo = ProjectRepository(session)
            for project in (active, archived, deleted):
                await repo.save(project)

            listed = await repo.list_by_owner(
                "owner-1", limit=10, status=ProjectStatus.ARCHIVED
            )
            live = await repo.count_by_owner("owner-1")
            archived_count = await repo.count_by_owner(
                "owner-1", status=ProjectStatus.ARCHIVED
            )

        assert [p.id for p in listed] == [archived.id]
        assert live == 2
        assert archived_count == 1


# =============================================================================
# UserRepository
# =============================================================================


@pytest.mark.integration
class TestUserRepository:
    """Users keyed by id, unique lower-case email."""

    async def test_save_and_find_by_email_case_insensitive(self, test_database):
        user = User(email="ada@example.com", password_hash="$2b$04$hash", firstname="Ada")

        async with test_database.get_session() as session:
            await UserRepository(session).save(user)

        async with test_database.get_session() as session:
            repo = UserRepository(session)
            by_email = await repo.find_by_email("ADA@Example.com")
            by_id = await repo.find_by_id(user.id)

        assert by_email is not None
        assert by_email.id == user.id
        assert by_email.firstname == "Ada"
        assert by_id is not None
        assert by_id.is_active is True

    async def test_missing_user(self, test_database):
        async with test_database.get_session() as session:
            repo = UserRepository(session)

            assert await repo.find_by_email("nobody@example.com") is None

    async def test_deactivate(self, test_database):
        user = User(email="ada@example.com", password_hash="$2b$04$hash")

        async with test_database.get_session() as session:
            repo = UserRepository(session)
            await repo.save(user)
            user.is_active = False
            await repo.save(user)

        async with test_database.get_session() as session:
            found = await UserRepository(session).find_by_id(user.id)

        assert found is not None
        assert found.is_active is False
