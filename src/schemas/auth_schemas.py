"""Authentication request/response schemas.

RESTful Endpoints (resource-based):
    POST   /api/v1/users       - Create user (registration)
    POST   /api/v1/sessions    - Create session (login)
    POST   /api/v1/tokens      - Create tokens (refresh)

Bcrypt only hashes the first 72 bytes of a password, so longer passwords
are rejected at the schema instead of being silently truncated.
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from src.application.dtos.auth_dtos import AuthTokens, RegisteredUser

MAX_PASSWORD_BYTES = 72


def _check_password_bytes(password: str) -> str:
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return password


# =============================================================================
# Registration
# =============================================================================


class UserCreateRequest(BaseModel):
    """Request schema for user creation (registration).

    POST /api/v1/users
    Returns: 201 Created
    """

    email: EmailStr = Field(
        ...,
        description="User's email address",
        examples=["user@example.com"],
    )
    password: str = Field(
        ...,
        min_length=8,
        max_length=72,
        description="Password (8-72 characters, at most 72 bytes)",
        examples=["SecurePass123!"],
    )
    firstname: str | None = Field(None, max_length=100, description="First name")
    lastname: str | None = Field(None, max_length=100, description="Last name")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "user@example.com",
                "password": "SecurePass123!",
                "firstname": "Ada",
            }
        }
    )

    @field_validator("password")
    @classmethod
    def validate_password_bytes(cls, v: str) -> str:
        """Reject passwords bcrypt would truncate."""
        return _check_password_bytes(v)


class UserCreateResponse(BaseModel):
    """Response schema for user creation (201 Created)."""

    id: UUID = Field(..., description="Created user's ID")
    email: str = Field(..., description="User's email address")

    @classmethod
    def from_dto(cls, dto: RegisteredUser) -> "UserCreateResponse":
        return cls(id=dto.user_id, email=dto.email)


# =============================================================================
# Login
# =============================================================================


class SessionCreateRequest(BaseModel):
    """Request schema for session creation (login).

    POST /api/v1/sessions
    Returns: 201 Created
    """

    email: EmailStr = Field(
        ...,
        description="User's email address",
        examples=["user@example.com"],
    )
    password: str = Field(
        ...,
        min_length=1,
        max_length=72,
        description="User's password",
        examples=["SecurePass123!"],
    )

    @field_validator("password")
    @classmethod
    def validate_password_bytes(cls, v: str) -> str:
        return _check_password_bytes(v)


class TokenPairResponse(BaseModel):
    """Token pair returned by login (201) and refresh (201)."""

    access_token: str = Field(..., description="JWT access token")
    refresh_token: str = Field(..., description="JWT refresh token")
    token_type: str = Field(
        default="bearer", description="Token type for Authorization header"
    )
    expires_in: int = Field(..., description="Access token expiration in seconds")

    @classmethod
    def from_dto(cls, dto: AuthTokens) -> "TokenPairResponse":
        return cls(
            access_token=dto.access_token,
            refresh_token=dto.refresh_token,
            token_type=dto.token_type,
            expires_in=dto.expires_in,
        )


# =============================================================================
# Token Refresh
# =============================================================================


class TokenCreateRequest(BaseModel):
    """Request schema for token creation (refresh).

    POST /api/v1/tokens
    Returns: 201 Created
    """

    refresh_token: str = Field(
        ...,
        min_length=1,
        description="Current refresh token",
    )
