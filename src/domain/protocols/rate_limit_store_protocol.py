"""Rate limit store protocol (port).

Backing store for fixed-window counters. Implementations:
    - InMemoryRateLimitStore: per-process dict with a periodic sweep
    - RedisRateLimitStore: shared counters via an atomic Lua script

Stores raise on backend errors; the rate limiter decides what a failure
means through its failure policy.
"""

from typing import Protocol

from src.domain.value_objects.rate_limit_rule import RateLimitEntry


class RateLimitStoreProtocol(Protocol):
    """Protocol for fixed-window counter stores."""

    async def hit(
        self,
        key: str,
        *,
        max_requests: int,
        window_seconds: float,
        now: float,
    ) -> tuple[RateLimitEntry, bool]:
        """Apply one request to the window of `key`.

        Opens a new window (count=1) when none exists or the current one has
        expired. Otherwise increments the count unless it already reached
        max_requests.

        Args:
            key: Store key.
            max_requests: Requests admitted per window.
            window_seconds: Window length.
            now: Current epoch seconds.

        Returns:
            Tuple of (entry after the request, admitted).
        """
        ...

    async def get(self, key: str, *, now: float) -> RateLimitEntry | None:
        """Return the live entry for `key`, or None if absent or expired."""
        ...

    async def delete(self, key: str) -> None:
        """Remove the entry for `key` (no-op when absent)."""
        ...
