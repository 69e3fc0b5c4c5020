"""LoginUser command handler.

Verifies email and password and issues an access/refresh token pair.
Unknown email, wrong password and deactivated account all fail with the
same INVALID_CREDENTIALS error so the response never reveals which
emails are registered.
"""

from src.application.commands.auth_commands import LoginUser
from src.application.dtos.auth_dtos import AuthTokens
from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.errors import UserError
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.password_hashing_protocol import PasswordHashingProtocol
from src.domain.protocols.repositories import UserRepository
from src.domain.protocols.token_generation_protocol import TokenGenerationProtocol


class LoginUserHandler:
    """Handler for LoginUser command.

    Dependencies (injected via constructor):
        - UserRepository: User lookup by email
        - PasswordHashingProtocol: Password verification
        - TokenGenerationProtocol: Access and refresh token issuance
        - LoggerProtocol: Structured logging
    """

    def __init__(
        self,
        *,
        user_repo: UserRepository,
        password_service: PasswordHashingProtocol,
        token_service: TokenGenerationProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._user_repo = user_repo
        self._password_service = password_service
        self._token_service = token_service
        self._logger = logger

    async def handle(self, cmd: LoginUser) -> Result[AuthTokens, UserError]:
        """Handle LoginUser command.

        Returns:
            Success(AuthTokens): Credentials valid.
            Failure(UserError): INVALID_CREDENTIALS.
        """
        user = await self._user_repo.find_by_email(cmd.email.strip().lower())

        if user is None:
            return self._reject("unknown_email")
        if not user.is_active:
            return self._reject("inactive", user_id=user.owner_id)
        if not self._password_service.verify_password(cmd.password, user.password_hash):
            return self._reject("wrong_password", user_id=user.owner_id)

        self._logger.info("User logged in", user_id=user.owner_id)
        return Success(
            value=AuthTokens(
                access_token=self._token_service.generate_access_token(user.owner_id),
                refresh_token=self._token_service.generate_refresh_token(user.owner_id),
                expires_in=self._token_service.access_token_ttl_seconds,
            )
        )

    def _reject(
        self, reason: str, *, user_id: str | None = None
    ) -> Result[AuthTokens, UserError]:
        self._logger.warning("Login rejected", reason=reason, user_id=user_id)
        return Failure(
            error=UserError(
                code=ErrorCode.INVALID_CREDENTIALS,
                message="Invalid email or password",
            )
        )
