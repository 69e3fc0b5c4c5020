"""JWT token service (adapter).

Implements TokenValidationProtocol and TokenGenerationProtocol using PyJWT
with HMAC-SHA256.

Security:
    - HMAC-SHA256 (HS256) algorithm
    - 256-bit secret key minimum
    - Owner id carried in the `sub` claim
    - `type` claim separates access tokens from refresh tokens; tokens
      without a `type` claim are treated as access tokens

Performance:
    - Stateless validation (no database lookup)
"""

from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import uuid4

import jwt
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError

from src.core.result import Failure, Result, Success
from src.domain.errors import AuthenticationError

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


class JWTService:
    """JWT access and refresh token service.

    Usage:
        from src.core.container import get_token_service

        result = get_token_service().validate_access_token(token)
    """

    def __init__(
        self,
        secret_key: str,
        expiration_minutes: int = 15,
        refresh_expiration_days: int = 7,
    ) -> None:
        """Initialize JWT service.

        Args:
            secret_key: Secret key for HMAC-SHA256 signing.
                MUST be at least 256 bits (32 bytes).
            expiration_minutes: Lifetime of access tokens.
            refresh_expiration_days: Lifetime of refresh tokens.

        Raises:
            ValueError: If secret_key is too short (< 32 bytes).
        """
        if len(secret_key) < 32:
            msg = "JWT secret key must be at least 32 bytes (256 bits)"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._expiration_minutes = expiration_minutes
        self._refresh_expiration_days = refresh_expiration_days
        self._algorithm = "HS256"

    @property
    def access_token_ttl_seconds(self) -> int:
        return self._expiration_minutes * 60

    def generate_access_token(self, owner_id: str) -> str:
        """Generate an access token for `owner_id`.

        Example:
            >>> service = JWTService(secret_key="x" * 32)
            >>> len(service.generate_access_token("user-1").split("."))
            3
        """
        return self._encode(
            owner_id,
            token_type=ACCESS_TOKEN_TYPE,
            lifetime=timedelta(minutes=self._expiration_minutes),
        )

    def generate_refresh_token(self, owner_id: str) -> str:
        """Generate a refresh token for `owner_id`."""
        return self._encode(
            owner_id,
            token_type=REFRESH_TOKEN_TYPE,
            lifetime=timedelta(days=self._refresh_expiration_days),
        )

    def validate_access_token(self, token: str) -> Result[str, str]:
        """Validate JWT access token and extract the owner id.

        Args:
            token: JWT access token string to validate.

        Returns:
            Success(owner_id) if valid, Failure(AuthenticationError constant)
            otherwise. Refresh tokens fail with WRONG_TOKEN_TYPE.
        """
        decoded = self._decode(token)
        if isinstance(decoded, Failure):
            return decoded

        payload = decoded.value
        if payload.get("type", ACCESS_TOKEN_TYPE) != ACCESS_TOKEN_TYPE:
            return Failure(error=AuthenticationError.WRONG_TOKEN_TYPE)
        return self._subject(payload)

    def validate_refresh_token(self, token: str) -> Result[str, str]:
        """Validate JWT refresh token and extract the owner id.

        Args:
            token: JWT refresh token string to validate.

        Returns:
            Success(owner_id) if valid, Failure(AuthenticationError constant)
            otherwise. Access tokens fail with WRONG_TOKEN_TYPE.
        """
        decoded = self._decode(token)
        if isinstance(decoded, Failure):
            return decoded

        payload = decoded.value
        if payload.get("type") != REFRESH_TOKEN_TYPE:
            return Failure(error=AuthenticationError.WRONG_TOKEN_TYPE)
        return self._subject(payload)

    def _encode(self, owner_id: str, *, token_type: str, lifetime: timedelta) -> str:
        now = datetime.now(UTC)
        payload = {
            "sub": owner_id,
            "type": token_type,
            "iat": int(now.timestamp()),
            "exp": int((now + lifetime).timestamp()),
            "jti": str(uuid4()),
        }
        token: str = jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
        return token

    def _decode(self, token: str) -> Result[dict[str, Any], str]:
        try:
            # PyJWT validates signature and exp
            payload = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except ExpiredSignatureError:
            return Failure(error=AuthenticationError.EXPIRED_TOKEN)
        except InvalidTokenError:
            return Failure(error=AuthenticationError.INVALID_TOKEN)
        return Success(value=payload)

    @staticmethod
    def _subject(payload: dict[str, Any]) -> Result[str, str]:
        owner_id = payload.get("sub")
        if not isinstance(owner_id, str) or not owner_id:
            return Failure(error=AuthenticationError.MISSING_SUBJECT)
        return Success(value=owner_id)
