"""GetProject query handler."""

from src.application.dtos.project_dtos import ProjectResult
from src.application.queries.project_queries import GetProject
from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.errors import ProjectError
from src.domain.protocols.repositories import ProjectRepository


class GetProjectHandler:
    """Handler for GetProject query."""

    def __init__(self, *, project_repo: ProjectRepository) -> None:
        self._project_repo = project_repo

    async def handle(self, query: GetProject) -> Result[ProjectResult, ProjectError]:
        project = await self._project_repo.find_by_id(query.owner_id, query.project_id)
        if project is None:
            return Failure(
                error=ProjectError(
                    code=ErrorCode.PROJECT_NOT_FOUND,
                    message="Project not found",
                    details={"project_id": str(query.project_id)},
                )
            )
        return Success(value=ProjectResult.from_entity(project))
