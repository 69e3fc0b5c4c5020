"""ListProjects query handler.

Returns one page of the owner's live projects, most recently updated
first, limit clamped to 1..100.
"""

from src.application.dtos.project_dtos import ProjectListResult, ProjectResult
from src.application.queries.project_queries import ListProjects
from src.core.result import Result, Success
from src.domain.errors import ProjectError
from src.domain.protocols.repositories import ProjectRepository

MAX_PROJECT_PAGE_SIZE = 100


class ListProjectsHandler:
    """Handler for ListProjects query.

    Dependencies (injected via constructor):
        - ProjectRepository: For project retrieval
    """

    def __init__(self, *, project_repo: ProjectRepository) -> None:
        self._project_repo = project_repo

    async def handle(self, query: ListProjects) -> Result[ProjectListResult, ProjectError]:
        """Handle ListProjects query.

        Returns:
            Success(ProjectListResult): Always (empty page when none). `total`
                counts every matching project, not just this page.
        """
        limit = max(1, min(query.limit, MAX_PROJECT_PAGE_SIZE))
        offset = max(0, query.offset)

        projects = await self._project_repo.list_by_owner(
            query.owner_id, limit=limit, offset=offset, status=query.status
        )
        total = await self._project_repo.count_by_owner(query.owner_id, status=query.status)
        return Success(
            value=ProjectListResult(
                projects=[ProjectResult.from_entity(project) for project in projects],
                total=total,
                limit=limit,
                offset=offset,
            )
        )
