"""Unit tests for project command and query handlers.

Tests:
- CreateProjectHandler: plan caps (FREE 3, STANDARD 20, PRO 100)
- UpdateProjectHandler: partial updates, description clearing, archive
- DeleteProjectHandler: soft delete
- GetProjectHandler / ListProjectsHandler: owner scoping, pagination

Reference:
    - src/application/commands/handlers/create_project_handler.py
    - src/application/queries/handlers/list_projects_handler.py
"""

from uuid import uuid4

import pytest

from src.application.commands.handlers.create_project_handler import (
    CreateProjectHandler,
)
from src.application.commands.handlers.delete_project_handler import (
    DeleteProjectHandler,
)
from src.application.commands.handlers.update_project_handler import (
    UpdateProjectHandler,
)
from src.application.commands.project_commands import (
    CreateProject,
    DeleteProject,
    UpdateProject,
)
from src.application.queries.handlers.get_project_handler import GetProjectHandler
from src.application.queries.handlers.list_projects_handler import (
    ListProjectsHandler,
)
from src.application.queries.project_queries import GetProject, ListProjects
from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.domain.entities.project import Project
from src.domain.entities.subscription import Subscription
from src.domain.enums.plan_tier import PlanTier
from src.domain.enums.project_status import ProjectStatus
from tests.utils.accounts import InMemoryProjectRepository, make_projects
from tests.utils.billing import InMemorySubscriptionRepository


def _subscription(tier: PlanTier) -> Subscription:
    return Subscription(owner_id="owner-1", provider_customer_id="cus_1", plan_tier=tier)


# =============================================================================
# CreateProject
# =============================================================================


@pytest.mark.unit
class TestCreateProjectHandler:
    """Plan cap on live projects."""

    @pytest.fixture
    def make_handler(self, mock_logger):
        def _make(projects, subscription=None):
            repo = InMemoryProjectRepository(*projects)
            subscriptions = (
                InMemorySubscriptionRepository(subscription)
                if subscription
                else InMemorySubscriptionRepository()
            )
            handler = CreateProjectHandler(
                project_repo=repo,
                subscription_repo=subscriptions,
                logger=mock_logger,
            )
            return handler, repo

        return _make

    async def test_creates_active_project(self, make_handler):
        handler, repo = make_handler([])

        result = await handler.handle(
            CreateProject(owner_id="owner-1", name="Photos", description="Family")
        )

        assert isinstance(result, Success)
        assert result.value.name == "Photos"
        assert result.value.description == "Family"
        assert result.value.status == "ACTIVE"
        assert len(repo.saved) == 1
        assert repo.saved[0].owner_id == "owner-1"

    async def test_owner_without_subscription_is_capped_at_free(self, make_handler):
        handler, repo = make_handler(make_projects("owner-1", 3))

        result = await handler.handle(CreateProject(owner_id="owner-1", name="Fourth"))

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.PROJECT_LIMIT_REACHED
        assert result.error.details == {"plan_tier": "FREE", "limit": "3"}
        assert repo.saved == []

    @pytest.mark.parametrize(
        ("tier", "limit"),
        [(PlanTier.FREE, 3), (PlanTier.STANDARD, 20), (PlanTier.PRO, 100)],
    )
    async def test_cap_follows_plan(self, make_handler, tier, limit):
        handler, _ = make_handler(make_projects("owner-1", limit - 1), _subscription(tier))

        last = await handler.handle(CreateProject(owner_id="owner-1", name="Last"))
        over = await handler.handle(CreateProject(owner_id="owner-1", name="Over"))

        assert isinstance(last, Success)
        assert isinstance(over, Failure)
        assert over.error.code == ErrorCode.PROJECT_LIMIT_REACHED

    async def test_archived_projects_count_toward_cap(self, make_handler):
        projects = make_projects("owner-1", 3, status=ProjectStatus.ARCHIVED)
        handler, _ = make_handler(projects)

        result = await handler.handle(CreateProject(owner_id="owner-1", name="New"))

        assert isinstance(result, Failure)

    async def test_deleted_projects_free_a_slot(self, make_handler):
        projects = make_projects("owner-1", 3)
        projects[0].mark_deleted()
        handler, _ = make_handler(projects)

        result = await handler.handle(CreateProject(owner_id="owner-1", name="New"))

        assert isinstance(result, Success)

    async def test_other_owners_projects_do_not_count(self, make_handler):
        handler, _ = make_handler(make_projects("owner-2", 3))

        result = await handler.handle(CreateProject(owner_id="owner-1", name="New"))

        assert isinstance(result, Success)


# =============================================================================
# UpdateProject / DeleteProject
# =============================================================================


@pytest.mark.unit
class TestUpdateProjectHandler:
    """Partial updates."""

    async def test_rename_keeps_description(self):
        project = Project(owner_id="owner-1", name="Photos", description="Family")
        handler = UpdateProjectHandler(project_repo=InMemoryProjectRepository(project))

        result = await handler.handle(
            UpdateProject(owner_id="owner-1", project_id=project.id, name="Pictures")
        )

        assert isinstance(result, Success)
        assert result.value.name == "Pictures"
        assert result.value.description == "Family"

    async def test_explicit_none_description_clears(self):
        project = Project(owner_id="owner-1", name="Photos", description="Family")
        handler = UpdateProjectHandler(project_repo=InMemoryProjectRepository(project))

        result = await handler.handle(
            UpdateProject(
                owner_id="owner-1",
                project_id=project.id,
                description=None,
                update_description=True,
            )
        )

        assert isinstance(result, Success)
        assert result.value.description is None
        assert result.value.name == "Photos"

    async def test_archive_and_restore(self):
        project = Project(owner_id="owner-1", name="Photos")
        handler = UpdateProjectHandler(project_repo=InMemoryProjectRepository(project))

        archived = await handler.handle(
            UpdateProject(
                owner_id="owner-1", project_id=project.id, status=ProjectStatus.ARCHIVED
            )
        )
        restored = await handler.handle(
            UpdateProject(
                owner_id="owner-1", project_id=project.id, status=ProjectStatus.ACTIVE
            )
        )

        assert archived.value.status == "ARCHIVED"
        assert restored.value.status == "ACTIVE"

    async def test_other_owner_gets_not_found(self):
        project = Project(owner_id="owner-2", name="Theirs")
        repo = InMemoryProjectRepository(project)
        handler = UpdateProjectHandler(project_repo=repo)

        result = await handler.handle(
            UpdateProject(owner_id="owner-1", project_id=project.id, name="Mine")
        )

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.PROJECT_NOT_FOUND
        assert project.name == "Theirs"
        assert repo.saved == []


@pytest.mark.unit
class TestDeleteProjectHandler:
    """Soft delete."""

    async def test_marks_deleted_and_hides_project(self, mock_logger):
        project = Project(owner_id="owner-1", name="Photos")
        repo = InMemoryProjectRepository(project)
        handler = DeleteProjectHandler(project_repo=repo, logger=mock_logger)

        result = await handler.handle(
            DeleteProject(owner_id="owner-1", project_id=project.id)
        )

        assert result == Success(value=None)
        assert repo.rows[project.id].status == ProjectStatus.DELETED
        assert await repo.find_by_id("owner-1", project.id) is None

    async def test_deleting_twice_is_not_found(self, mock_logger):
        project = Project(owner_id="owner-1", name="Photos")
        handler = DeleteProjectHandler(
            project_repo=InMemoryProjectRepository(project), logger=mock_logger
        )
        command = DeleteProject(owner_id="owner-1", project_id=project.id)

        await handler.handle(command)
        result = await handler.handle(command)

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.PROJECT_NOT_FOUND


# =============================================================================
# Queries
# =============================================================================


@pytest.mark.unit
class TestGetProjectHandler:
    """Owner-scoped lookup."""

    async def test_get_own_project(self):
        project = Project(owner_id="owner-1", name="Photos")
        handler = GetProjectHandler(project_repo=InMemoryProjectRepository(project))

        result = await handler.handle(GetProject(owner_id="owner-1", project_id=project.id))

        assert isinstance(result, Success)
        assert result.value.id == project.id

    async def test_unknown_project(self):
        handler = GetProjectHandler(project_repo=InMemoryProjectRepository())

        result = await handler.handle(GetProject(owner_id="owner-1", project_id=uuid4()))

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.PROJECT_NOT_FOUND


@pytest.mark.unit
class TestListProjectsHandler:
    """Pagination and filters."""

    async def test_most_recently_updated_first_with_total(self):
        projects = make_projects("owner-1", 5)
        handler = ListProjectsHandler(project_repo=InMemoryProjectRepository(*projects))

        result = await handler.handle(ListProjects(owner_id="owner-1", limit=2, offset=1))

        assert isinstance(result, Success)
        page = result.value
        assert [p.name for p in page.projects] == ["Project 3", "Project 2"]
        assert page.total == 5
        assert page.limit == 2
        assert page.offset == 1

    @pytest.mark.parametrize(("requested", "effective"), [(0, 1), (-5, 1), (500, 100)])
    async def test_limit_is_clamped(self, requested, effective):
        handler = ListProjectsHandler(project_repo=InMemoryProjectRepository())

        result = await handler.handle(ListProjects(owner_id="owner-1", limit=requested))

        assert result.value.limit == effective

    async def test_negative_offset_reads_as_zero(self):
        handler = ListProjectsHandler(
            project_repo=InMemoryProjectRepository(*make_projects("owner-1", 2))
        )

        result = await handler.handle(ListProjects(owner_id="owner-1", offset=-3))

        assert result.value.offset == 0
        assert len(result.value.projects) == 2

    async def test_status_filter_and_deleted_hidden(self):
        active, archived, deleted = make_projects("owner-1", 3)
        archived.archive()
        deleted.mark_deleted()
        handler = ListProjectsHandler(
            project_repo=InMemoryProjectRepository(active, archived, deleted)
        )

        everything = await handler.handle(ListProjects(owner_id="owner-1"))
        only_archived = await handler.handle(
            ListProjects(owner_id="owner-1", status=ProjectStatus.ARCHIVED)
        )

        assert {p.id for p in everything.value.projects} == {active.id, archived.id}
        assert [p.id for p in only_archived.value.projects] == [archived.id]
        assert only_archived.value.total == 1
