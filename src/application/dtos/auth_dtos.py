"""Authentication DTOs."""

from dataclasses import dataclass
from uuid import UUID


@dataclass
class RegisteredUser:
    """Result of a registration.

    Attributes:
        user_id: Created user id (also the owner id in tokens).
        email: Normalized email.
    """

    user_id: UUID
    email: str


@dataclass
class AuthTokens:
    """Token pair returned by login and refresh.

    Attributes:
        access_token: JWT accepted by authenticated routes.
        refresh_token: JWT accepted only by the token refresh endpoint.
        token_type: Authorization scheme.
        expires_in: Access token lifetime in seconds.
    """

    access_token: str
    refresh_token: str
    expires_in: int
    token_type: str = "bearer"
