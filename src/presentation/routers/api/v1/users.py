"""Users resource router.

Endpoints:
    POST /api/v1/users - Create user (registration)
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from src.application.commands.auth_commands import RegisterUser
from src.application.commands.handlers.register_user_handler import (
    RegisterUserHandler,
)
from src.core.container import get_register_user_handler
from src.core.result import Failure, Success
from src.presentation.routers.api.middleware.trace_middleware import get_trace_id
from src.presentation.routers.api.v1.errors import (
    ErrorResponseBuilder,
    ProblemDetails,
)
from src.schemas.auth_schemas import UserCreateRequest, UserCreateResponse

users_router = APIRouter(prefix="/users", tags=["Users"])


@users_router.post(
    "",
    response_model=UserCreateResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ProblemDetails}},
    summary="Create user",
)
async def create_user(
    request: Request,
    data: UserCreateRequest,
    handler: Annotated[RegisterUserHandler, Depends(get_register_user_handler)],
) -> UserCreateResponse | JSONResponse:
    """Register a new user.

    Returns:
        UserCreateResponse (201), or 409 when the email is taken.
    """
    command = RegisterUser(
        email=data.email,
        password=data.password,
        firstname=data.firstname,
        lastname=data.lastname,
    )
    result = await handler.handle(command)

    match result:
        case Success(value=dto):
            return UserCreateResponse.from_dto(dto)
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(
                error=error, request=request, trace_id=get_trace_id() or ""
            )
