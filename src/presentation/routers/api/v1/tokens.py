"""Tokens resource router.

Endpoints:
    POST /api/v1/tokens - Create tokens (refresh)
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from src.application.commands.auth_commands import RefreshAccessToken
from src.application.commands.handlers.refresh_access_token_handler import (
    RefreshAccessTokenHandler,
)
from src.core.container import get_refresh_access_token_handler
from src.core.result import Failure, Success
from src.presentation.routers.api.middleware.trace_middleware import get_trace_id
from src.presentation.routers.api.v1.errors import (
    ErrorResponseBuilder,
    ProblemDetails,
)
from src.schemas.auth_schemas import TokenCreateRequest, TokenPairResponse

tokens_router = APIRouter(prefix="/tokens", tags=["Tokens"])


@tokens_router.post(
    "",
    response_model=TokenPairResponse,
    status_code=status.HTTP_201_CREATED,
    responses={401: {"model": ProblemDetails}},
    summary="Create tokens (refresh)",
)
async def create_tokens(
    request: Request,
    data: TokenCreateRequest,
    handler: Annotated[
        RefreshAccessTokenHandler, Depends(get_refresh_access_token_handler)
    ],
) -> TokenPairResponse | JSONResponse:
    """Exchange a refresh token for a new token pair.

    Returns:
        TokenPairResponse (201), or 401 for an invalid or expired token.
    """
    result = await handler.handle(RefreshAccessToken(refresh_token=data.refresh_token))

    match result:
        case Success(value=dto):
            return TokenPairResponse.from_dto(dto)
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(
                error=error, request=request, trace_id=get_trace_id() or ""
            )
