"""User error types.

Returned by the registration, login and token refresh handlers. Login
failures never reveal whether the email exists.
"""

from dataclasses import dataclass

from src.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class UserError(DomainError):
    """Registration or credential failure.

    Attributes:
        code: EMAIL_ALREADY_REGISTERED, INVALID_CREDENTIALS, TOKEN_INVALID
            or TOKEN_EXPIRED.
        message: Human-readable message.
        details: Additional context.
    """

    pass
