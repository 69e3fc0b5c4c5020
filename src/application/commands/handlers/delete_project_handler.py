"""DeleteProject command handler.

Soft delete: the row stays with status DELETED and drops out of every
read and of the plan cap count.
"""

from src.application.commands.project_commands import DeleteProject
from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.errors import ProjectError
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.repositories import ProjectRepository


class DeleteProjectHandler:
    """Handler for DeleteProject command.

    Dependencies (injected via constructor):
        - ProjectRepository: Project lookup and update
        - LoggerProtocol: Structured logging
    """

    def __init__(self, *, project_repo: ProjectRepository, logger: LoggerProtocol) -> None:
        self._project_repo = project_repo
        self._logger = logger

    async def handle(self, cmd: DeleteProject) -> Result[None, ProjectError]:
        """Handle DeleteProject command.

        Returns:
            Success(None): Project marked DELETED.
            Failure(ProjectError): PROJECT_NOT_FOUND.
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

        project.mark_deleted()
        await self._project_repo.save(project)

        self._logger.info("Project deleted", owner_id=cmd.owner_id, project_id=str(project.id))
        return Success(value=None)
