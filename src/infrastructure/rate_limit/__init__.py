"""Rate limit infrastructure adapters.

This package provides infrastructure implementations for rate limiting,
following the hexagonal architecture pattern where infrastructure implements
domain ports.

Exports:
    FixedWindowRateLimiter: Adapter implementing RateLimitProtocol.
    InMemoryRateLimitStore: Per-process counter store with periodic sweep.
    RedisRateLimitStore: Shared counter store with an atomic Lua script.
    RATE_LIMIT_PRESETS: Named limits (LOGIN, API_GENERAL, ...).
    RATE_LIMIT_RULES: Endpoint to rule mapping.
    match_rule: Rule lookup with path parameter support.
"""

from src.infrastructure.rate_limit.config import (
    RATE_LIMIT_PRESETS,
    RATE_LIMIT_RULES,
    match_rule,
)
from src.infrastructure.rate_limit.fixed_window_adapter import FixedWindowRateLimiter
from src.infrastructure.rate_limit.memory_storage import InMemoryRateLimitStore
from src.infrastructure.rate_limit.redis_storage import RedisRateLimitStore

__all__ = [
    "FixedWindowRateLimiter",
    "InMemoryRateLimitStore",
    "RATE_LIMIT_PRESETS",
    "RATE_LIMIT_RULES",
    "RedisRateLimitStore",
    "match_rule",
]
