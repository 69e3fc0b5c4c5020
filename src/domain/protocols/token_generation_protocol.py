"""Token issuance protocol for the domain layer.

Login and refresh issue a pair of HS256 JWTs: a short-lived access token
accepted by every authenticated route, and a longer-lived refresh token
accepted only by the token refresh endpoint. Both carry the owner id in
`sub` and are told apart by their `type` claim.
"""

from typing import Protocol

from src.core.result import Result


class TokenGenerationProtocol(Protocol):
    """JWT issuance and refresh token validation interface."""

    @property
    def access_token_ttl_seconds(self) -> int:
        """Lifetime of issued access tokens, reported as `expires_in`."""
        ...

    def generate_access_token(self, owner_id: str) -> str:
        """Issue an access token for `owner_id`."""
        ...

    def generate_refresh_token(self, owner_id: str) -> str:
        """Issue a refresh token for `owner_id`."""
        ...

    def validate_refresh_token(self, token: str) -> Result[str, str]:
        """Validate a refresh token and return the owner id from `sub`.

        Returns:
            Success(owner_id) or Failure(AuthenticationError constant).
            Access tokens are rejected.
        """
        ...
