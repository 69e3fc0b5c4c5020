"""UpdateProject command handler."""

from src.application.commands.project_commands import UpdateProject
from src.application.dtos.project_dtos import ProjectResult
from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.enums.project_status import ProjectStatus
from src.domain.errors import ProjectError
from src.domain.protocols.repositories import ProjectRepository


class UpdateProjectHandler:
    """Handler for UpdateProject command.

    Dependencies (injected via constructor):
        - ProjectRepository: Project lookup and update
    """

    def __init__(self, *, project_repo: ProjectRepository) -> None:
        self._project_repo = project_repo

    async def handle(self, cmd: UpdateProject) -> Result[ProjectResult, ProjectError]:
        """Handle UpdateProject command.

        Returns:
            Success(ProjectResult): Updated project.
            Failure(ProjectError): PROJECT_NOT_FOUND (missing, deleted or
                owned by someone else).
        """
        project = await self._project_repo.find_by_id(cmd.owner_id, cmd.project_id)
        if project is None:
            return Failure(
                error=ProjectError(
                    code=ErrorCode.PROJECT_NOT_FOUND,
                    message="Project not found",
                    details={"project_id": str(cmd.project_id)},
                )
            )

        if cmd.name is not None:
            project.rename(cmd.name)
        if cmd.update_description:
            project.describe(cmd.description)
        if cmd.status == ProjectStatus.ARCHIVED:
            project.archive()
        elif cmd.status == ProjectStatus.ACTIVE:
            project.restore()

        await self._project_repo.save(project)
        return Success(value=ProjectResult.from_entity(project))
