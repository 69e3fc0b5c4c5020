"""CreateProject command handler.

Live projects (ACTIVE or ARCHIVED) count against the owner's plan cap.
Owners without a subscription row are on FREE.

| Plan     | Max projects |
|----------|--------------|
| FREE     | 3            |
| STANDARD | 20           |
| PRO      | 100          |
"""

from src.application.commands.project_commands import CreateProject
from src.application.dtos.project_dtos import ProjectResult
from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.entities.project import Project
from src.domain.enums.plan_tier import PlanTier
from src.domain.errors import ProjectError
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.repositories import (
    ProjectRepository,
    SubscriptionRepository,
)
from src.domain.value_objects.plan import project_limit_for


class CreateProjectHandler:
    """Handler for CreateProject command.

    Dependencies (injected via constructor):
        - ProjectRepository: Live project count and persistence
        - SubscriptionRepository: Owner's plan
        - LoggerProtocol: Structured logging
    """

    def __init__(
        self,
        *,
        project_repo: ProjectRepository,
        subscription_repo: SubscriptionRepository,
        logger: LoggerProtocol,
    ) -> None:
        self._project_repo = project_repo
        self._subscription_repo = subscription_repo
        self._logger = logger

    async def handle(self, cmd: CreateProject) -> Result[ProjectResult, ProjectError]:
        """Handle CreateProject command.

        Returns:
            Success(ProjectResult): Project created (ACTIVE).
            Failure(ProjectError): PROJECT_LIMIT_REACHED.
        """
        subscription = await self._subscription_repo.find_by_owner(cmd.owner_id)
        tier = subscription.plan_tier if subscription is not None else PlanTier.FREE
        limit = project_limit_for(tier)

        live = await self._project_repo.count_by_owner(cmd.owner_id)
        if live >= limit:
            self._logger.info(
                "Project limit reached",
                owner_id=cmd.owner_id,
                plan_tier=tier.value,
                limit=limit,
            )
            return Failure(
                error=ProjectError(
                    code=ErrorCode.PROJECT_LIMIT_REACHED,
                    message=f"Project limit reached ({limit} for plan {tier.value})",
                    details={"plan_tier": tier.value, "limit": str(limit)},
                )
            )

        project = Project(
            owner_id=cmd.owner_id,
            name=cmd.name,
            description=cmd.description,
        )
        await self._project_repo.save(project)

        self._logger.info("Project created", owner_id=cmd.owner_id, project_id=str(project.id))
        return Success(value=ProjectResult.from_entity(project))
