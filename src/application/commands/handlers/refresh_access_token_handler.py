"""RefreshAccessToken command handler.

Validates a refresh token, re-checks that its user still exists and is
active, and issues a new token pair.
"""

from uuid import UUID

from src.application.commands.auth_commands import RefreshAccessToken
from src.application.dtos.auth_dtos import AuthTokens
from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.errors import AuthenticationError, UserError
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.repositories import UserRepository
from src.domain.protocols.token_generation_protocol import TokenGenerationProtocol


class RefreshAccessTokenHandler:
    """Handler for RefreshAccessToken command.

    Dependencies (injected via constructor):
        - TokenGenerationProtocol: Refresh token validation and issuance
        - UserRepository: Active user check
        - LoggerProtocol: Structured logging
    """

    def __init__(
        self,
        *,
        user_repo: UserRepository,
        token_service: TokenGenerationProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._user_repo = user_repo
        self._token_service = token_service
        self._logger = logger

    async def handle(self, cmd: RefreshAccessToken) -> Result[AuthTokens, UserError]:
        """Handle RefreshAccessToken command.

        Returns:
            Success(AuthTokens): New token pair.
            Failure(UserError): TOKEN_EXPIRED or TOKEN_INVALID.
        """
        validated = self._token_service.validate_refresh_token(cmd.refresh_token)
        if isinstance(validated, Failure):
            self._logger.warning("Refresh token rejected", reason=validated.error)
            if validated.error == AuthenticationError.EXPIRED_TOKEN:
                return Failure(
                    error=UserError(
                        code=ErrorCode.TOKEN_EXPIRED,
                        message="Refresh token has expired",
                    )
                )
            return self._invalid()

        owner_id = validated.value

        try:
            user_id = UUID(owner_id)
        except ValueError:
            return self._invalid()

        user = await self._user_repo.find_by_id(user_id)
        if user is None or not user.is_active:
            self._logger.warning("Refresh token for unknown or inactive user", user_id=owner_id)
            return self._invalid()

        return Success(
            value=AuthTokens(
                access_token=self._token_service.generate_access_token(user.owner_id),
                refresh_token=self._token_service.generate_refresh_token(user.owner_id),
                expires_in=self._token_service.access_token_ttl_seconds,
            )
        )

    @staticmethod
    def _invalid() -> Result[AuthTokens, UserError]:
        return Failure(
            error=UserError(
                code=ErrorCode.TOKEN_INVALID,
                message="Refresh token is invalid",
            )
        )
