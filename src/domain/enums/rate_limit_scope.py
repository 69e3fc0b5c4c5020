"""Rate Limit enumeration types.

Defines scoping strategies for rate limit rules. Each scope determines how
rate limit keys are constructed and how limits are applied.

Usage:
    from src.domain.enums import RateLimitScope

    rule = RateLimitConfig(
        max_requests=5,
        window_seconds=900,
        scope=RateLimitScope.IP,
    )
"""

from enum import Enum


class RateLimitScope(str, Enum):
    """Scope types for rate limit rules.

    Determines how rate limit keys are constructed.

    Key Formats:
        IP: ip:{address}:{endpoint}
        USER: user:{owner_id}:{endpoint}
        GLOBAL: global:{endpoint}
    """

    IP = "ip"
    """Rate limit by client IP address.

    Use for unauthenticated endpoints where user identity is unknown
    (login, registration, OTP sends).
    """

    USER = "user"
    """Rate limit by authenticated owner id.

    Falls back to the client IP when the request carries no bearer token.
    """

    GLOBAL = "global"
    """Rate limit globally across all callers.

    Warning:
        One caller can exhaust the limit for everyone. Use sparingly.
    """
