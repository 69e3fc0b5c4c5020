"""JWT authentication dependencies.

FastAPI dependencies for extracting and validating bearer access tokens.
The owner identity comes from the token's 'sub' claim; the API never
trusts an owner id supplied in a path, query or body.

Usage:
    @router.get("/invoices")
    async def list_invoices(current_owner: CurrentOwnerDep):
        ...
"""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.core.container import get_token_service
from src.core.result import Failure, Success
from src.domain.errors import AuthenticationError
from src.domain.protocols.token_validation_protocol import TokenValidationProtocol

# auto_error=False so a missing header becomes our own RFC 7807 401
bearer_scheme = HTTPBearer(auto_error=False)

_TOKEN_ERROR_DETAIL: dict[str, str] = {
    AuthenticationError.EXPIRED_TOKEN: "Access token has expired",
    AuthenticationError.INVALID_TOKEN: "Invalid access token",
    AuthenticationError.MISSING_SUBJECT: "Access token has no subject",
    AuthenticationError.WRONG_TOKEN_TYPE: "Refresh tokens cannot be used as access tokens",
}


@dataclass(frozen=True, slots=True, kw_only=True)
class CurrentOwner:
    """Authenticated owner extracted from a valid access token.

    Attributes:
        owner_id: Opaque owner identifier (JWT 'sub' claim).
    """

    owner_id: str


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_owner(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ],
    token_service: Annotated[TokenValidationProtocol, Depends(get_token_service)],
) -> CurrentOwner:
    """Get current authenticated owner from the bearer token.

    Args:
        credentials: Bearer token from Authorization header (None if absent).
        token_service: JWT token service (injected).

    Returns:
        CurrentOwner for a valid token.

    Raises:
        HTTPException 401: If token is missing, invalid, or expired.
    """
    if credentials is None:
        raise _unauthorized("Missing bearer token")

    result = token_service.validate_access_token(credentials.credentials)

    match result:
        case Success(value=owner_id):
            return CurrentOwner(owner_id=owner_id)
        case Failure(error=error):
            raise _unauthorized(_TOKEN_ERROR_DETAIL.get(error, "Invalid access token"))

    raise _unauthorized("Invalid token")  # Explicit return for exhaustiveness


CurrentOwnerDep = Annotated[CurrentOwner, Depends(get_current_owner)]
