"""Authentication commands.

Registration, login (session creation) and token refresh. Login and
refresh both return a fresh access/refresh token pair.
"""

from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True)
class RegisterUser:
    """Create a user account.

    Attributes:
        email: Login email (normalized to lower-case by the handler).
        password: Plaintext password, hashed before storage.
        firstname: Optional first name.
        lastname: Optional last name.
    """

    email: str
    password: str
    firstname: str | None = None
    lastname: str | None = None


@dataclass(frozen=True, kw_only=True)
class LoginUser:
    """Verify credentials and issue tokens."""

    email: str
    password: str


@dataclass(frozen=True, kw_only=True)
class RefreshAccessToken:
    """Exchange a refresh token for a new token pair."""

    refresh_token: str
