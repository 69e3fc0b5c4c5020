"""Access token protocol for the domain layer.

Authenticated routes are called with a short-lived JWT access token issued
by the session and token endpoints (see TokenGenerationProtocol).

Architecture:
    - Domain defines protocol (port)
    - Infrastructure implements adapter (JWTService)
"""

from typing import Protocol

from src.core.result import Result


class TokenValidationProtocol(Protocol):
    """JWT access token validation interface.

    Usage:
        result = token_service.validate_access_token(token)
        match result:
            case Success(value=owner_id):
                ...
            case Failure(error=error):
                # Invalid or expired token
                ...
    """

    def validate_access_token(self, token: str) -> Result[str, str]:
        """Validate a bearer token and return the owner id from `sub`.

        Args:
            token: Encoded JWT.

        Returns:
            Success(owner_id) or Failure(error constant).
        """
        ...
