"""Unit tests for registration, login and token refresh handlers.

Uses in-memory user repository, real bcrypt (cost 4) and real JWTService.

Reference:
    - src/application/commands/handlers/register_user_handler.py
    - src/application/commands/handlers/login_user_handler.py
    - src/application/commands/handlers/refresh_access_token_handler.py
"""

import jwt
import pytest

from src.application.commands.auth_commands import (
    LoginUser,
    RefreshAccessToken,
    RegisterUser,
)
from src.application.commands.handlers.login_user_handler import LoginUserHandler
from src.application.commands.handlers.refresh_access_token_handler import (
    RefreshAccessTokenHandler,
)
from src.application.commands.handlers.register_user_handler import (
    RegisterUserHandler,
)
from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.domain.entities.user import User
from src.infrastructure.security import BcryptPasswordService, JWTService
from tests.utils.accounts import InMemoryUserRepository

SECRET = "x" * 32
PASSWORD = "SecurePass123!"


@pytest.fixture
def password_service() -> BcryptPasswordService:
    return BcryptPasswordService(cost_factor=4)


@pytest.fixture
def token_service() -> JWTService:
    return JWTService(secret_key=SECRET, expiration_minutes=15, refresh_expiration_days=7)


@pytest.fixture
def user(password_service) -> User:
    return User(
        email="ada@example.com",
        password_hash=password_service.hash_password(PASSWORD),
    )


# =============================================================================
# RegisterUser
# =============================================================================


@pytest.mark.unit
class TestRegisterUserHandler:
    """Account creation."""

    async def test_registers_with_hashed_password(self, password_service, mock_logger):
        repo = InMemoryUserRepository()
        handler = RegisterUserHandler(
            user_repo=repo, password_service=password_service, logger=mock_logger
        )

        result = await handler.handle(
            RegisterUser(email="Ada@Example.com", password=PASSWORD, firstname="Ada")
        )

        assert isinstance(result, Success)
        assert result.value.email == "ada@example.com"
        stored = repo.rows[result.value.user_id]
        assert stored.password_hash != PASSWORD
        assert password_service.verify_password(PASSWORD, stored.password_hash)
        assert stored.firstname == "Ada"

    async def test_duplicate_email_differing_in_case(
        self, user, password_service, mock_logger
    ):
        handler = RegisterUserHandler(
            user_repo=InMemoryUserRepository(user),
            password_service=password_service,
            logger=mock_logger,
        )

        result = await handler.handle(
            RegisterUser(email="ADA@example.com", password="Another123!")
        )

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.EMAIL_ALREADY_REGISTERED


# =============================================================================
# LoginUser
# =============================================================================


@pytest.mark.unit
class TestLoginUserHandler:
    """Credential check and token issuance."""

    @pytest.fixture
    def make_handler(self, password_service, token_service, mock_logger):
        def _make(*users):
            return LoginUserHandler(
                user_repo=InMemoryUserRepository(*users),
                password_service=password_service,
                token_service=token_service,
                logger=mock_logger,
            )

        return _make

    async def test_valid_credentials_issue_token_pair(self, make_handler, user, token_service):
        handler = make_handler(user)

        result = await handler.handle(LoginUser(email="ada@example.com", password=PASSWORD))

        assert isinstance(result, Success)
        tokens = result.value
        assert tokens.token_type == "bearer"
        assert tokens.expires_in == 900
        assert token_service.validate_access_token(tokens.access_token) == Success(
            value=user.owner_id
        )
        assert token_service.validate_refresh_token(tokens.refresh_token) == Success(
            value=user.owner_id
        )

    async def test_email_is_case_insensitive(self, make_handler, user):
        result = await make_handler(user).handle(
            LoginUser(email="  ADA@example.com ", password=PASSWORD)
        )

        assert isinstance(result, Success)

    @pytest.mark.parametrize(
        ("email", "password"),
        [
            ("ada@example.com", "WrongPass123!"),
            ("nobody@example.com", PASSWORD),
        ],
    )
    async def test_rejections_are_indistinguishable(self, make_handler, user, email, password):
        result = await make_handler(user).handle(LoginUser(email=email, password=password))

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.INVALID_CREDENTIALS
        assert result.error.message == "Invalid email or password"

    async def test_inactive_user_cannot_log_in(self, make_handler, user, mock_logger):
        user.is_active = False

        result = await make_handler(user).handle(
            LoginUser(email="ada@example.com", password=PASSWORD)
        )

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.INVALID_CREDENTIALS
        mock_logger.warning.assert_called_once_with(
            "Login rejected", reason="inactive", user_id=user.owner_id
        )


# =============================================================================
# RefreshAccessToken
# =============================================================================


@pytest.mark.unit
class TestRefreshAccessTokenHandler:
    """Refresh token exchange."""

    @pytest.fixture
    def make_handler(self, token_service, mock_logger):
        def _make(*users):
            return RefreshAccessTokenHandler(
                user_repo=InMemoryUserRepository(*users),
                token_service=token_service,
                logger=mock_logger,
            )

        return _make

    async def test_issues_new_pair(self, make_handler, user, token_service):
        refresh = token_service.generate_refresh_token(user.owner_id)

        result = await make_handler(user).handle(RefreshAccessToken(refresh_token=refresh))

        assert isinstance(result, Success)
        assert token_service.validate_access_token(result.value.access_token) == Success(
            value=user.owner_id
        )

    async def test_access_token_is_rejected(self, make_handler, user, token_service):
        access = token_service.generate_access_token(user.owner_id)

        result = await make_handler(user).handle(RefreshAccessToken(refresh_token=access))

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.TOKEN_INVALID

    async def test_expired_refresh_token(self, make_handler, user):
        refresh = jwt.encode(
            {"sub": user.owner_id, "type": "refresh", "exp": 1_700_000_000},
            SECRET,
            algorithm="HS256",
        )

        result = await make_handler(user).handle(RefreshAccessToken(refresh_token=refresh))

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.TOKEN_EXPIRED

    async def test_deleted_user(self, make_handler, user, token_service):
        refresh = token_service.generate_refresh_token(user.owner_id)

        result = await make_handler().handle(RefreshAccessToken(refresh_token=refresh))

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.TOKEN_INVALID

    async def test_non_uuid_subject(self, make_handler, user):
        refresh = jwt.encode({"sub": "owner-1", "type": "refresh"}, SECRET, algorithm="HS256")

        result = await make_handler(user).handle(RefreshAccessToken(refresh_token=refresh))

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.TOKEN_INVALID
