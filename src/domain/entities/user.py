"""User domain entity.

Holds login credentials for the session and token endpoints. The user id
(as a string) is the owner id carried in access tokens, so every
subscription, invoice and project row of a user is keyed by it.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID, uuid4


def _utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass
class User:
    """A CloudVault account.

    Attributes:
        email: Login email, stored lower-case.
        password_hash: Bcrypt hash (never plaintext).
        firstname: Optional first name.
        lastname: Optional last name.
        is_active: Deactivated users cannot log in or refresh tokens.
        id: User identifier.
        created_at: Record creation timestamp.
        updated_at: Last modification timestamp.
    """

    email: str
    password_hash: str
    firstname: str | None = None
    lastname: str | None = None
    is_active: bool = True
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=_utc_now)
    updated_at: datetime = field(default_factory=_utc_now)

    @property
    def owner_id(self) -> str:
        """Owner id used by billing and project rows (JWT `sub`)."""
        return str(self.id)
