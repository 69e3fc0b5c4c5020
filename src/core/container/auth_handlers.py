"""Authentication handler dependency factories.

Request-scoped handlers for registration, login and token refresh. The
password and token services are app-scoped singletons.
"""

from typing import TYPE_CHECKING

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.container.infrastructure import (
    get_db_session,
    get_logger,
    get_password_service,
    get_token_service,
)

if TYPE_CHECKING:
    from src.application.commands.handlers.login_user_handler import (
        LoginUserHandler,
    )
    from src.application.commands.handlers.refresh_access_token_handler import (
        RefreshAccessTokenHandler,
    )
    from src.application.commands.handlers.register_user_handler import (
        RegisterUserHandler,
    )


async def get_register_user_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "RegisterUserHandler":
    """Get RegisterUser handler (request-scoped)."""
    from src.application.commands.handlers.register_user_handler import (
        RegisterUserHandler,
    )
    from src.infrastructure.persistence.repositories import UserRepository

    return RegisterUserHandler(
        user_repo=UserRepository(session=session),
        password_service=get_password_service(),
        logger=get_logger(),
    )


async def get_login_user_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "LoginUserHandler":
    """Get LoginUser handler (request-scoped).

    Creates handler with:
    - User repository (request-scoped)
    - Bcrypt password service and JWT service (app-scoped)

    Returns:
        LoginUserHandler instance.
    """
    from src.application.commands.handlers.login_user_handler import (
        LoginUserHandler,
    )
    from src.infrastructure.persistence.repositories import UserRepository

    return LoginUserHandler(
        user_repo=UserRepository(session=session),
        password_service=get_password_service(),
        token_service=get_token_service(),
        logger=get_logger(),
    )


async def get_refresh_access_token_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "RefreshAccessTokenHandler":
    """Get RefreshAccessToken handler (request-scoped)."""
    from src.application.commands.handlers.refresh_access_token_handler import (
        RefreshAccessTokenHandler,
    )
    from src.infrastructure.persistence.repositories import UserRepository

    return RefreshAccessTokenHandler(
        user_repo=UserRepository(session=session),
        token_service=get_token_service(),
        logger=get_logger(),
    )
