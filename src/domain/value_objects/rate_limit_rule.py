"""Rate limit value objects.

Immutable configuration and result types for fixed-window rate limiting.

Fixed Window Algorithm:
    - First request for a key opens a window of `window_seconds`
    - Each admitted request in the window increments the counter
    - Once the counter reaches `max_requests`, requests are denied until
      the window's reset_at passes
    - The next request after reset_at opens a fresh window

Usage:
    from src.domain.value_objects import RateLimitConfig
    from src.domain.enums import RateLimitScope

    login = RateLimitConfig(
        max_requests=5,
        window_seconds=15 * 60,
        scope=RateLimitScope.IP,
    )
"""

from dataclasses import dataclass

from src.domain.enums.rate_limit_scope import RateLimitScope


@dataclass(frozen=True, slots=True, kw_only=True)
class RateLimitConfig:
    """Rate limit rule configuration (value object).

    Attributes:
        max_requests: Requests admitted per window.
        window_seconds: Window length in seconds.
        scope: How to scope rate limit keys (IP, USER, GLOBAL).
        enabled: Disabled rules always admit requests.

    Raises:
        ValueError: If max_requests <= 0 or window_seconds <= 0.
    """

    max_requests: int
    window_seconds: float
    scope: RateLimitScope = RateLimitScope.IP
    enabled: bool = True

    def __post_init__(self) -> None:
        """Validate rule configuration after initialization.

        Raises:
            ValueError: If any numeric field is invalid.
        """
        if self.max_requests <= 0:
            raise ValueError(
                f"max_requests must be positive, got {self.max_requests}"
            )
        if self.window_seconds <= 0:
            raise ValueError(
                f"window_seconds must be positive, got {self.window_seconds}"
            )

    def build_key(self, *, identifier: str, endpoint: str) -> str:
        """Build the store key for a caller and endpoint.

        Key format: {scope}:{identifier}:{endpoint} (global omits identifier).

        Args:
            identifier: Client IP or owner id.
            endpoint: Endpoint pattern (e.g., "GET /api/v1/invoices").

        Returns:
            str: Store key.

        Example:
            >>> rule = RateLimitConfig(max_requests=5, window_seconds=900)
            >>> rule.build_key(identifier="1.2.3.4", endpoint="POST /api/v1/sessions")
            'ip:1.2.3.4:POST /api/v1/sessions'
        """
        if self.scope == RateLimitScope.GLOBAL:
            return f"global:{endpoint}"
        return f"{self.scope.value}:{identifier}:{endpoint}"


@dataclass(frozen=True, slots=True, kw_only=True)
class RateLimitEntry:
    """Counter for one key in its current window.

    Attributes:
        key: Store key (scope, identity and endpoint).
        count: Requests admitted in the current window.
        reset_at: Epoch seconds at which the window ends.
    """

    key: str
    count: int
    reset_at: float

    def is_expired(self, now: float) -> bool:
        """Whether the window has ended at `now`."""
        return now >= self.reset_at


@dataclass(frozen=True, slots=True, kw_only=True)
class RateLimitResult:
    """Result of a rate limit check.

    Attributes:
        allowed: Whether the request is admitted.
        remaining: Requests left in the current window.
        reset_at: Epoch seconds at which the window ends.
        limit: Requests admitted per window.
        retry_after_seconds: Whole seconds until retry (denials only, >= 1).
    """

    allowed: bool
    remaining: int
    reset_at: float
    limit: int
    retry_after_seconds: int | None = None
