"""UserRepository - SQLAlchemy implementation.

Adapter for hexagonal architecture.
Maps between domain User entities and the users table.
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities.user import User
from src.infrastructure.persistence.base import as_utc
from src.infrastructure.persistence.models.user import User as UserModel


class UserRepository:
    """SQLAlchemy implementation of the UserRepository protocol.

    Attributes:
        session: SQLAlchemy async session for database operations.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, user_id: UUID) -> User | None:
        model = await self.session.get(UserModel, user_id)
        return self._to_domain(model) if model is not None else None

    async def find_by_email(self, email: str) -> User | None:
        """Find user by email (case-insensitive; emails are stored lower-case)."""
        stmt = select(UserModel).where(UserModel.email == email.lower())
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model is not None else None

    async def save(self, user: User) -> None:
        """Create or update a user by id.

        Args:
            user: User entity to persist.
        """
        existing = await self.session.get(UserModel, user.id)

        if existing is None:
            self.session.add(self._to_model(user))
        else:
            existing.email = user.email.lower()
            existing.password_hash = user.password_hash
            existing.firstname = user.firstname
            existing.lastname = user.lastname
            existing.is_active = user.is_active
            existing.updated_at = user.updated_at

        await self.session.commit()

    def _to_domain(self, model: UserModel) -> User:
        """Convert database model to domain entity."""
        return User(
            id=model.id,
            email=model.email,
            password_hash=model.password_hash,
            firstname=model.firstname,
            lastname=model.lastname,
            is_active=model.is_active,
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )

    def _to_model(self, entity: User) -> UserModel:
        """Convert domain entity to database model."""
        return UserModel(
            id=entity.id,
            email=entity.email.lower(),
            password_hash=entity.password_hash,
            firstname=entity.firstname,
            lastname=entity.lastname,
            is_active=entity.is_active,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
