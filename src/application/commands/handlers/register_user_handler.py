"""RegisterUser command handler.

Creates a user with a bcrypt password hash. Emails are unique
case-insensitively; a duplicate returns EMAIL_ALREADY_REGISTERED.
"""

from src.application.commands.auth_commands import RegisterUser
from src.application.dtos.auth_dtos import RegisteredUser
from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.entities.user import User
from src.domain.errors import UserError
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.password_hashing_protocol import PasswordHashingProtocol
from src.domain.protocols.repositories import UserRepository


class RegisterUserHandler:
    """Handler for RegisterUser command.

    Dependencies (injected via constructor):
        - UserRepository: Duplicate check and persistence
        - PasswordHashingProtocol: Password hashing
        - LoggerProtocol: Structured logging
    """

    def __init__(
        self,
        *,
        user_repo: UserRepository,
        password_service: PasswordHashingProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._user_repo = user_repo
        self._password_service = password_service
        self._logger = logger

    async def handle(self, cmd: RegisterUser) -> Result[RegisteredUser, UserError]:
        """Handle RegisterUser command.

        Returns:
            Success(RegisteredUser): User created.
            Failure(UserError): EMAIL_ALREADY_REGISTERED.
        """
        email = cmd.email.strip().lower()
        if await self._user_repo.find_by_email(email) is not None:
            return Failure(
                error=UserError(
                    code=ErrorCode.EMAIL_ALREADY_REGISTERED,
                    message="Email is already registered",
                )
            )

        user = User(
            email=email,
            password_hash=self._password_service.hash_password(cmd.password),
            firstname=cmd.firstname,
            lastname=cmd.lastname,
        )
        await self._user_repo.save(user)

        self._logger.info("User registered", user_id=user.owner_id)
        return Success(value=RegisteredUser(user_id=user.id, email=user.email))
