"""Projects resource handlers.

Handlers:
    list_projects   - List the owner's live projects (paginated)
    create_project  - Create a project (capped per plan)
    get_project     - Get one project
    update_project  - Partially update a project
    delete_project  - Soft-delete a project

Projects of other owners and deleted projects are reported as 404.
Errors are returned as RFC 7807 Problem Details.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query, Request, Response, status
from fastapi.responses import JSONResponse

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
from src.application.errors import ApplicationError, ApplicationErrorCode
from src.application.queries.handlers.get_project_handler import GetProjectHandler
from src.application.queries.handlers.list_projects_handler import (
    ListProjectsHandler,
)
from src.application.queries.project_queries import GetProject, ListProjects
from src.core.container import (
    get_create_project_handler,
    get_delete_project_handler,
    get_get_project_handler,
    get_list_projects_handler,
    get_update_project_handler,
)
from src.core.enums import ErrorCode
from src.core.errors import ValidationError
from src.core.result import Failure, Success
from src.domain.enums.project_status import ProjectStatus
from src.presentation.routers.api.middleware.auth_dependencies import CurrentOwnerDep
from src.presentation.routers.api.middleware.trace_middleware import get_trace_id
from src.presentation.routers.api.v1.errors import (
    ErrorResponseBuilder,
    ProblemDetails,
)
from src.schemas.project_schemas import (
    ProjectCreateRequest,
    ProjectListResponse,
    ProjectResponse,
    ProjectUpdateRequest,
)

projects_router = APIRouter(prefix="/projects", tags=["Projects"])

_ERROR_RESPONSES: dict[int | str, dict[str, object]] = {
    400: {"model": ProblemDetails},
    401: {"model": ProblemDetails},
    404: {"model": ProblemDetails},
}

_LISTABLE_STATUSES = (ProjectStatus.ACTIVE, ProjectStatus.ARCHIVED)


@projects_router.get(
    "",
    response_model=ProjectListResponse,
    responses=_ERROR_RESPONSES,
    summary="List projects",
)
async def list_projects(
    request: Request,
    current_owner: CurrentOwnerDep,
    handler: Annotated[ListProjectsHandler, Depends(get_list_projects_handler)],
    limit: Annotated[int, Query(description="Page size (clamped to 1..100)")] = 50,
    offset: Annotated[int, Query(description="Projects to skip")] = 0,
    project_status: Annotated[
        str | None, Query(alias="status", description="ACTIVE or ARCHIVED")
    ] = None,
) -> ProjectListResponse | JSONResponse:
    """List the owner's projects, most recently updated first.

    Returns:
        ProjectListResponse on success; 400 for an unknown status.
    """
    status_filter: ProjectStatus | None = None
    if project_status:
        try:
            status_filter = ProjectStatus(project_status.upper())
        except ValueError:
            status_filter = None
        if status_filter not in _LISTABLE_STATUSES:
            return ErrorResponseBuilder.from_application_error(
                error=ApplicationError(
                    code=ApplicationErrorCode.QUERY_VALIDATION_FAILED,
                    message=f"Unknown project status '{project_status}'",
                    domain_error=ValidationError(
                        code=ErrorCode.INVALID_INPUT,
                        message=f"Unknown project status '{project_status}'",
                        field="status",
                    ),
                ),
                request=request,
                trace_id=get_trace_id() or "",
            )

    query = ListProjects(
        owner_id=current_owner.owner_id,
        limit=limit,
        offset=offset,
        status=status_filter,
    )
    result = await handler.handle(query)

    match result:
        case Success(value=dto):
            return ProjectListResponse.from_dto(dto)
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(
                error=error, request=request, trace_id=get_trace_id() or ""
            )


@projects_router.post(
    "",
    response_model=ProjectResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_ERROR_RESPONSES,
    summary="Create project",
)
async def create_project(
    request: Request,
    data: ProjectCreateRequest,
    current_owner: CurrentOwnerDep,
    handler: Annotated[CreateProjectHandler, Depends(get_create_project_handler)],
) -> ProjectResponse | JSONResponse:
    """Create a project.

    Returns:
        ProjectResponse (201), or 400 when the plan's project limit is
        reached.
    """
    command = CreateProject(
        owner_id=current_owner.owner_id,
        name=data.name,
        description=data.description,
    )
    result = await handler.handle(command)

    match result:
        case Success(value=dto):
            return ProjectResponse.from_dto(dto)
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(
                error=error, request=request, trace_id=get_trace_id() or ""
            )


@projects_router.get(
    "/{project_id}",
    response_model=ProjectResponse,
    responses=_ERROR_RESPONSES,
    summary="Get project",
)
async def get_project(
    request: Request,
    current_owner: CurrentOwnerDep,
    handler: Annotated[GetProjectHandler, Depends(get_get_project_handler)],
    project_id: Annotated[UUID, Path(description="Project UUID")],
) -> ProjectResponse | JSONResponse:
    """Get one project of the authenticated owner."""
    query = GetProject(owner_id=current_owner.owner_id, project_id=project_id)
    result = await handler.handle(query)

    match result:
        case Success(value=dto):
            return ProjectResponse.from_dto(dto)
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(
                error=error, request=request, trace_id=get_trace_id() or ""
            )


@projects_router.patch(
    "/{project_id}",
    response_model=ProjectResponse,
    responses=_ERROR_RESPONSES,
    summary="Update project",
)
async def update_project(
    request: Request,
    data: ProjectUpdateRequest,
    current_owner: CurrentOwnerDep,
    handler: Annotated[UpdateProjectHandler, Depends(get_update_project_handler)],
    project_id: Annotated[UUID, Path(description="Project UUID")],
) -> ProjectResponse | JSONResponse:
    """Apply the provided fields to a project.

    Returns:
        Updated ProjectResponse, or 404.
    """
    command = UpdateProject(
        owner_id=current_owner.owner_id,
        project_id=project_id,
        name=data.name,
        description=data.description,
        update_description=data.description_provided,
        status=ProjectStatus(data.status) if data.status else None,
    )
    result = await handler.handle(command)

    match result:
        case Success(value=dto):
            return ProjectResponse.from_dto(dto)
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(
                error=error, request=request, trace_id=get_trace_id() or ""
            )


@projects_router.delete(
    "/{project_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_model=None,
    responses=_ERROR_RESPONSES,
    summary="Delete project",
)
async def delete_project(
    request: Request,
    current_owner: CurrentOwnerDep,
    handler: Annotated[DeleteProjectHandler, Depends(get_delete_project_handler)],
    project_id: Annotated[UUID, Path(description="Project UUID")],
) -> Response:
    """Soft-delete a project.

    Returns:
        204 No Content, or 404.
    """
    command = DeleteProject(owner_id=current_owner.owner_id, project_id=project_id)
    result = await handler.handle(command)

    match result:
        case Success():
            return Response(status_code=status.HTTP_204_NO_CONTENT)
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(
                error=error, request=request, trace_id=get_trace_id() or ""
            )
