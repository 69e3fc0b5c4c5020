"""Authentication error constants.

Used as the error value of token validation Results.

Usage:
    from src.domain.errors import AuthenticationError

    match token_service.validate_access_token(token):
        case Failure(error=AuthenticationError.EXPIRED_TOKEN):
            ...
"""


class AuthenticationError:
    """Authentication error constants.

    These are NOT exceptions; they are error values returned in Failure.
    """

    INVALID_TOKEN = "invalid_token"
    EXPIRED_TOKEN = "expired_token"
    MISSING_SUBJECT = "missing_subject"
    WRONG_TOKEN_TYPE = "wrong_token_type"
