"""Project handler dependency factories.

Request-scoped handler instances built on a per-request database session:
- CreateProject / UpdateProject / DeleteProject commands
- ListProjects / GetProject queries
"""

from typing import TYPE_CHECKING

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.container.infrastructure import get_db_session, get_logger

if TYPE_CHECKING:
    from src.application.commands.handlers.create_project_handler import (
        CreateProjectHandler,
    )
    from src.application.commands.handlers.delete_project_handler import (
        DeleteProjectHandler,
    )
    from src.application.commands.handlers.update_project_handler import (
        UpdateProjectHandler,
    )
    from src.application.queries.handlers.get_project_handler import (
        GetProjectHandler,
    )
    from src.application.queries.handlers.list_projects_handler import (
        ListProjectsHandler,
    )


# ============================================================================
# Command Handler Factories (Request-Scoped)
# ============================================================================


async def get_create_project_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "CreateProjectHandler":
    """Get CreateProject handler (request-scoped).

    Creates handler with:
    - Project repository (live count and persistence)
    - Subscription repository (plan tier for the cap)

    Returns:
        CreateProjectHandler instance.
    """
    from src.application.commands.handlers.create_project_handler import (
        CreateProjectHandler,
    )
    from src.infrastructure.persistence.repositories import (
        ProjectRepository,
        SubscriptionRepository,
    )

    return CreateProjectHandler(
        project_repo=ProjectRepository(session=session),
        subscription_repo=SubscriptionRepository(session=session),
        logger=get_logger(),
    )


async def get_update_project_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "UpdateProjectHandler":
    """Get UpdateProject handler (request-scoped)."""
    from src.application.commands.handlers.update_project_handler import (
        UpdateProjectHandler,
    )
    from src.infrastructure.persistence.repositories import ProjectRepository

    return UpdateProjectHandler(project_repo=ProjectRepository(session=session))


async def get_delete_project_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "DeleteProjectHandler":
    """Get DeleteProject handler (request-scoped)."""
    from src.application.commands.handlers.delete_project_handler import (
        DeleteProjectHandler,
    )
    from src.infrastructure.persistence.repositories import ProjectRepository

    return DeleteProjectHandler(
        project_repo=ProjectRepository(session=session),
        logger=get_logger(),
    )


# ============================================================================
# Query Handler Factories (Request-Scoped)
# ============================================================================


async def get_list_projects_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "ListProjectsHandler":
    """Get ListProjects handler (request-scoped)."""
    from src.application.queries.handlers.list_projects_handler import (
        ListProjectsHandler,
    )
    from src.infrastructure.persistence.repositories import ProjectRepository

    return ListProjectsHandler(project_repo=ProjectRepository(session=session))


async def get_get_project_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "GetProjectHandler":
    """Get GetProject handler (request-scoped)."""
    from src.application.queries.handlers.get_project_handler import (
        GetProjectHandler,
    )
    from src.infrastructure.persistence.repositories import ProjectRepository

    return GetProjectHandler(project_repo=ProjectRepository(session=session))
