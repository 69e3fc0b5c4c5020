"""Sessions resource router.

Endpoints:
    POST /api/v1/sessions - Create session (login)

Sessions are stateless: creating one returns a JWT access/refresh pair
and nothing is stored server side.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from src.application.commands.auth_commands import LoginUser
from src.application.commands.handlers.login_user_handler import LoginUserHandler
from src.core.container import get_login_user_handler
from src.core.result import Failure, Success
from src.presentation.routers.api.middleware.trace_middleware import get_trace_id
from src.presentation.routers.api.v1.errors import (
    ErrorResponseBuilder,
    ProblemDetails,
)
from src.schemas.auth_schemas import SessionCreateRequest, TokenPairResponse

sessions_router = APIRouter(prefix="/sessions", tags=["Sessions"])


@sessions_router.post(
    "",
    response_model=TokenPairResponse,
    status_code=status.HTTP_201_CREATED,
    responses={401: {"model": ProblemDetails}, 429: {"model": ProblemDetails}},
    summary="Create session (login)",
)
async def create_session(
    request: Request,
    data: SessionCreateRequest,
    handler: Annotated[LoginUserHandler, Depends(get_login_user_handler)],
) -> TokenPairResponse | JSONResponse:
    """Log in with email and password.

    Returns:
        TokenPairResponse (201), or 401 for invalid credentials.
    """
    result = await handler.handle(LoginUser(email=data.email, password=data.password))

    match result:
        case Success(value=dto):
            return TokenPairResponse.from_dto(dto)
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(
                error=error, request=request, trace_id=get_trace_id() or ""
            )
