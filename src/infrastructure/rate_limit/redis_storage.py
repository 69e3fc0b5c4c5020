"""Redis-backed fixed-window store using an atomic Lua script.

Shared substitute for InMemoryRateLimitStore when several processes must
enforce the same limits. The check-and-increment runs as one Lua script
(EVALSHA), so concurrent requests across instances cannot overshoot a window.

Errors:
    Methods raise on Redis failures. The rate limiter applies its failure
    policy; this class only deals with storage.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from functools import partial
from pathlib import Path
from typing import Any

from redis.exceptions import NoScriptError

from src.domain.value_objects.rate_limit_rule import RateLimitEntry

KEY_PREFIX = "rate_limit:"


@dataclass(slots=True)
class _LuaRefs:
    """Holds loaded Lua script SHA references."""

    fixed_window_sha: str | None = None


class RedisRateLimitStore:
    """Redis store implementing RateLimitStoreProtocol.

    Each key is a hash {count, reset_at} with a PEXPIRE equal to the window,
    so Redis expires idle windows itself (no sweeper needed).

    Args:
        redis_client: An async Redis client (redis.asyncio.Redis compatible).

    Attributes:
        redis: The Redis client instance.
    """

    def __init__(self, *, redis_client: Any) -> None:
        self.redis = redis_client
        self._lua = _LuaRefs()
        self._script_lock = asyncio.Lock()

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
        """Atomically apply one request to the window of `key`.

        Returns:
            Tuple of (entry after the request, admitted).
        """
        args = (int(max_requests), float(window_seconds), float(now))
        try:
            sha = await self._ensure_fixed_window_script()
            resp = await self.redis.evalsha(sha, 1, KEY_PREFIX + key, *args)
        except NoScriptError:
            # Script cache flushed (Redis restart); load it again once.
            self._lua.fixed_window_sha = None
            sha = await self._ensure_fixed_window_script()
            resp = await self.redis.evalsha(sha, 1, KEY_PREFIX + key, *args)

        # resp: [admitted(0/1), count(int), reset_at(str)]
        admitted = bool(int(resp[0]))
        entry = RateLimitEntry(
            key=key,
            count=int(resp[1]),
            reset_at=float(_decode(resp[2])),
        )
        return entry, admitted

    async def get(self, key: str, *, now: float) -> RateLimitEntry | None:
        """Return the live entry for `key`, or None if absent or expired."""
        count, reset_at = await self.redis.hmget(KEY_PREFIX + key, "count", "reset_at")
        if count is None or reset_at is None:
            return None
        entry = RateLimitEntry(
            key=key,
            count=int(_decode(count)),
            reset_at=float(_decode(reset_at)),
        )
        if entry.is_expired(now):
            return None
        return entry

    async def delete(self, key: str) -> None:
        """Remove the entry for `key` (no-op when absent)."""
        await self.redis.delete(KEY_PREFIX + key)

    # ---------------------------------------------------------------------
    # Internal helpers
    # ---------------------------------------------------------------------
    async def _ensure_fixed_window_script(self) -> str:
        """Load the fixed window Lua script into Redis and cache the SHA.

        Returns:
            str: Script SHA.
        """
        if self._lua.fixed_window_sha:
            return self._lua.fixed_window_sha
        async with self._script_lock:
            if self._lua.fixed_window_sha:
                return self._lua.fixed_window_sha
            script = await _read_lua_script("lua_scripts/fixed_window.lua")
            sha = _decode(await self.redis.script_load(script))
            self._lua.fixed_window_sha = sha
            return sha


def _decode(value: bytes | str) -> str:
    """Return str for bytes/str replies (client may or may not decode)."""
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return value


def _read_lua_script_sync(path: Path) -> str:
    """Synchronous helper to read Lua script (called via run_in_executor)."""
    return path.read_text(encoding="utf-8")


async def _read_lua_script(rel_path: str) -> str:
    """Read Lua script file relative to this module.

    Uses run_in_executor to avoid blocking the event loop on file IO.

    Args:
        rel_path: Relative path from this module's directory.

    Returns:
        Script contents as string.
    """
    full_path = Path(__file__).parent / rel_path
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, partial(_read_lua_script_sync, full_path))
