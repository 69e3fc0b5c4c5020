"""Named failure policies.

Both policies are selected through settings.

Usage:
    from src.domain.enums import RateLimitFailurePolicy

    policy = RateLimitFailurePolicy(settings.rate_limit_failure_policy)
"""

from enum import Enum


class RateLimitFailurePolicy(str, Enum):
    """Decision taken when the rate limit store raises."""

    FAIL_OPEN = "fail_open"
    """Admit the request and report the full quota (default)."""

    FAIL_CLOSED = "fail_closed"
    """Deny the request until the store recovers."""


class UnresolvedOwnerPolicy(str, Enum):
    """Decision taken when an invoice event names an unknown Stripe customer."""

    ACKNOWLEDGE = "acknowledge"
    """Log the event and acknowledge it (Stripe stops redelivering)."""

    RETRY = "retry"
    """Fail the webhook with 500 so Stripe redelivers later."""
