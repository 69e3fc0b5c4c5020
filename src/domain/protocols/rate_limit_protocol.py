"""Rate Limit protocol (port) for fixed-window rate limiting.

Following hexagonal architecture:
- Domain defines the PORT (this protocol)
- Infrastructure provides the ADAPTER (FixedWindowRateLimiter)
- Presentation middleware uses the protocol via the container

Usage:
    from src.domain.protocols import RateLimitProtocol

    rate_limit: RateLimitProtocol = get_rate_limit()
    result = await rate_limit.check("ip:1.2.3.4:POST /api/v1/sessions", LOGIN)
    match result:
        case Success(value=decision) if not decision.allowed:
            # Return HTTP 429 with Retry-After
            ...
"""

from typing import Protocol

from src.core.result import Result
from src.domain.errors import RateLimitError
from src.domain.value_objects.rate_limit_rule import RateLimitConfig, RateLimitResult


class RateLimitProtocol(Protocol):
    """Protocol for rate limiting systems.

    Failure Policy:
        check() and get_remaining() never surface store errors. The adapter
        applies its configured RateLimitFailurePolicy (FAIL_OPEN admits with
        full quota, FAIL_CLOSED denies) and still returns Success.
        reset() is an admin operation and reports real failures.
    """

    async def check(
        self,
        key: str,
        config: RateLimitConfig,
    ) -> Result[RateLimitResult, RateLimitError]:
        """Count a request against `key` and decide whether to admit it.

        Args:
            key: Store key (scope, identity and endpoint).
            config: Rule to apply.

        Returns:
            Success(RateLimitResult) with the decision. Denials carry
            retry_after_seconds >= 1.
        """
        ...

    async def get_remaining(
        self,
        key: str,
        config: RateLimitConfig,
    ) -> Result[int, RateLimitError]:
        """Requests left in the current window, without counting one.

        Args:
            key: Store key.
            config: Rule to apply.

        Returns:
            Success(remaining). max_requests when no window is open.
        """
        ...

    async def reset(self, key: str) -> Result[None, RateLimitError]:
        """Forget the counter for `key`.

        Unlike check(), this method does NOT apply the failure policy.
        Admin operations should know if they succeeded or failed.

        Args:
            key: Store key.

        Returns:
            Success(None), or Failure(RateLimitError) on store errors.
        """
        ...
