"""In-memory fixed-window store.

Default rate limit store: a per-process dict of RateLimitEntry keyed by the
rate limit key. A background task sweeps expired entries so idle keys do not
accumulate.

Scale limitation:
    Counters are per process. Multiple workers or instances each keep their
    own windows; use RedisRateLimitStore for shared limits.

Concurrency:
    Read-modify-write happens without awaits in between, so it is atomic
    with respect to other coroutines on the same event loop. Good enough for
    throttling, not for hard quotas across threads.
"""

from __future__ import annotations

import asyncio
import contextlib
from dataclasses import replace
from time import time
from typing import TYPE_CHECKING

from src.domain.value_objects.rate_limit_rule import RateLimitEntry

if TYPE_CHECKING:
    from src.domain.protocols.logger_protocol import LoggerProtocol


class InMemoryRateLimitStore:
    """Dict-backed store implementing RateLimitStoreProtocol.

    Args:
        sweep_interval_seconds: Seconds between expired-entry sweeps.
        logger: Optional structured logger for sweep reporting.

    Attributes:
        sweep_interval_seconds: Interval used by the background sweeper.
    """

    def __init__(
        self,
        *,
        sweep_interval_seconds: float = 60.0,
        logger: LoggerProtocol | None = None,
    ) -> None:
        self.sweep_interval_seconds = sweep_interval_seconds
        self._entries: dict[str, RateLimitEntry] = {}
        self._logger = logger
        self._sweeper: asyncio.Task[None] | None = None

    # ---------------------------------------------------------------------
    # RateLimitStoreProtocol
    # ---------------------------------------------------------------------
    async def hit(
        self,
        key: str,
        *,
        max_requests: int,
        window_seconds: float,
        now: float,
    ) -> tuple[RateLimitEntry, bool]:
        """Apply one request to the window of `key`.

        Returns:
            Tuple of (entry after the request, admitted).
        """
        entry = self._entries.get(key)

        if entry is None or entry.is_expired(now):
            entry = RateLimitEntry(key=key, count=1, reset_at=now + window_seconds)
            self._entries[key] = entry
            return entry, True

        if entry.count >= max_requests:
            return entry, False

        entry = replace(entry, count=entry.count + 1)
        self._entries[key] = entry
        return entry, True

    async def get(self, key: str, *, now: float) -> RateLimitEntry | None:
        """Return the live entry for `key`, or None if absent or expired."""
        entry = self._entries.get(key)
        if entry is None or entry.is_expired(now):
            return None
        return entry

    async def delete(self, key: str) -> None:
        """Remove the entry for `key` (no-op when absent)."""
        self._entries.pop(key, None)

    # ---------------------------------------------------------------------
    # Sweeping
    # ---------------------------------------------------------------------
    def sweep(self, now: float | None = None) -> int:
        """Remove entries whose window ended strictly before `now`.

        Args:
            now: Epoch seconds (defaults to time()).

        Returns:
            int: Number of entries removed.
        """
        cutoff = time() if now is None else now
        expired = [key for key, entry in self._entries.items() if entry.reset_at < cutoff]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def start(self) -> None:
        """Start the background sweeper (idempotent).

        Must be called from a running event loop (application lifespan).
        """
        if self._sweeper is not None and not self._sweeper.done():
            return
        self._sweeper = asyncio.create_task(
            self._sweep_forever(), name="rate-limit-sweeper"
        )

    async def stop(self) -> None:
        """Cancel the background sweeper and wait for it to exit."""
        if self._sweeper is None:
            return
        self._sweeper.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._sweeper
        self._sweeper = None

    @property
    def is_sweeping(self) -> bool:
        """Whether the background sweeper is running."""
        return self._sweeper is not None and not self._sweeper.done()

    def __len__(self) -> int:
        return len(self._entries)

    async def _sweep_forever(self) -> None:
        while True:
            await asyncio.sleep(self.sweep_interval_seconds)
            removed = self.sweep()
            if removed and self._logger is not None:
                self._logger.debug(
                    "Rate limit entries swept",
                    removed=removed,
                    remaining=len(self._entries),
                )
