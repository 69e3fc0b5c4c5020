"""Fixed window adapter implementing RateLimitProtocol.

This adapter sits between the presentation middleware and a counter store:
- Fixed-window decision and result shaping
- Named failure policy for store errors (FAIL_OPEN / FAIL_CLOSED)
- Structured logging

Architecture:
    Domain Protocol <- FixedWindowRateLimiter -> RateLimitStoreProtocol
                                                 (InMemory | Redis)

Usage:
    from src.core.container import get_rate_limit

    rate_limit = get_rate_limit()
    result = await rate_limit.check("ip:1.2.3.4:POST /api/v1/sessions", LOGIN)
"""

from __future__ import annotations

import math
from collections.abc import Callable
from time import time
from typing import TYPE_CHECKING

from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.enums import RateLimitFailurePolicy
from src.domain.errors import RateLimitError
from src.domain.value_objects.rate_limit_rule import RateLimitConfig, RateLimitResult

if TYPE_CHECKING:
    from src.domain.protocols.logger_protocol import LoggerProtocol
    from src.domain.protocols.rate_limit_store_protocol import RateLimitStoreProtocol


class FixedWindowRateLimiter:
    """Fixed window rate limiter implementing RateLimitProtocol.

    Failure Policy:
        Store exceptions never propagate from check() or get_remaining().
        FAIL_OPEN admits the request and reports the full quota with a
        window starting now; FAIL_CLOSED denies it for one window.

    Args:
        store: Counter store (in-memory or Redis).
        logger: Structured logger for observability.
        failure_policy: What to do when the store raises.
        clock: Returns current epoch seconds (injectable for tests).
    """

    def __init__(
        self,
        *,
        store: RateLimitStoreProtocol,
        logger: LoggerProtocol,
        failure_policy: RateLimitFailurePolicy = RateLimitFailurePolicy.FAIL_OPEN,
        clock: Callable[[], float] = time,
    ) -> None:
        self._store = store
        self._logger = logger
        self._failure_policy = failure_policy
        self._clock = clock

    @property
    def failure_policy(self) -> RateLimitFailurePolicy:
        """Configured failure policy."""
        return self._failure_policy

    # -------------------------------------------------------------------------
    # RateLimitProtocol implementation
    # -------------------------------------------------------------------------
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
            Success(RateLimitResult). Store errors resolve through the
            failure policy instead of returning Failure.
        """
        now = self._clock()

        if not config.enabled:
            return Success(
                value=RateLimitResult(
                    allowed=True,
                    remaining=config.max_requests,
                    reset_at=now + config.window_seconds,
                    limit=config.max_requests,
                )
            )

        try:
            entry, admitted = await self._store.hit(
                key,
                max_requests=config.max_requests,
                window_seconds=config.window_seconds,
                now=now,
            )
        except Exception as exc:
            return Success(value=self._apply_failure_policy(key, config, now, exc))

        if admitted:
            return Success(
                value=RateLimitResult(
                    allowed=True,
                    remaining=max(0, config.max_requests - entry.count),
                    reset_at=entry.reset_at,
                    limit=config.max_requests,
                )
            )

        retry_after = max(1, math.ceil(entry.reset_at - now))
        self._logger.info(
            "Rate limit exceeded",
            key=key,
            limit=config.max_requests,
            retry_after_seconds=retry_after,
        )
        return Success(
            value=RateLimitResult(
                allowed=False,
                remaining=0,
                reset_at=entry.reset_at,
                limit=config.max_requests,
                retry_after_seconds=retry_after,
            )
        )

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
            Success(remaining). On store errors: max_requests under FAIL_OPEN,
            0 under FAIL_CLOSED.
        """
        now = self._clock()
        try:
            entry = await self._store.get(key, now=now)
        except Exception as exc:
            self._logger.warning(
                "Rate limit store unavailable",
                key=key,
                operation="get_remaining",
                policy=self._failure_policy.value,
                error_type=type(exc).__name__,
                error_message=str(exc),
            )
            if self._failure_policy == RateLimitFailurePolicy.FAIL_OPEN:
                return Success(value=config.max_requests)
            return Success(value=0)

        if entry is None:
            return Success(value=config.max_requests)
        return Success(value=max(0, config.max_requests - entry.count))

    async def reset(self, key: str) -> Result[None, RateLimitError]:
        """Forget the counter for `key`.

        Unlike check(), this method does NOT apply the failure policy.
        Admin operations should know if they succeeded or failed.

        Args:
            key: Store key.

        Returns:
            Result[None, RateLimitError]: Success or failure.
        """
        try:
            await self._store.delete(key)
        except Exception as exc:
            self._logger.error("Rate limit reset failed", error=exc, key=key)
            return Failure(
                error=RateLimitError(
                    code=ErrorCode.RATE_LIMIT_RESET_FAILED,
                    message=f"Failed to reset rate limit for '{key}': {exc}",
                    details={"key": key},
                )
            )

        self._logger.info("Rate limit reset", key=key)
        return Success(value=None)

    # -------------------------------------------------------------------------
    # Internal helpers
    # -------------------------------------------------------------------------
    def _apply_failure_policy(
        self,
        key: str,
        config: RateLimitConfig,
        now: float,
        exc: Exception,
    ) -> RateLimitResult:
        """Build the decision for a store failure."""
        self._logger.warning(
            "Rate limit store unavailable",
            key=key,
            operation="check",
            policy=self._failure_policy.value,
            error_type=type(exc).__name__,
            error_message=str(exc),
        )

        reset_at = now + config.window_seconds
        if self._failure_policy == RateLimitFailurePolicy.FAIL_OPEN:
            return RateLimitResult(
                allowed=True,
                remaining=config.max_requests,
                reset_at=reset_at,
                limit=config.max_requests,
            )
        return RateLimitResult(
            allowed=False,
            remaining=0,
            reset_at=reset_at,
            limit=config.max_requests,
            retry_after_seconds=max(1, math.ceil(config.window_seconds)),
        )
