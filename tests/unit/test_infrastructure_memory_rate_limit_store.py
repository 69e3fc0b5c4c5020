"""Unit tests for InMemoryRateLimitStore.

Covers window counting, expiry, sweeping, and the background sweeper
lifecycle.

Reference:
    - src/infrastructure/rate_limit/memory_storage.py
"""

import asyncio

import pytest

from src.infrastructure.rate_limit.memory_storage import InMemoryRateLimitStore

NOW = 1_000_000.0


@pytest.fixture
def store() -> InMemoryRateLimitStore:
    return InMemoryRateLimitStore(sweep_interval_seconds=0.01)


# =============================================================================
# hit / get / delete
# =============================================================================


@pytest.mark.unit
class TestCounting:
    """Window creation and counting."""

    async def test_first_hit_opens_window(self, store):
        entry, admitted = await store.hit(
            "k", max_requests=3, window_seconds=60, now=NOW
        )

        assert admitted is True
        assert entry.count == 1
        assert entry.reset_at == NOW + 60

    async def test_hit_at_limit_is_not_admitted(self, store):
        for _ in range(3):
            await store.hit("k", max_requests=3, window_seconds=60, now=NOW)

        entry, admitted = await store.hit(
            "k", max_requests=3, window_seconds=60, now=NOW + 1
        )

        assert admitted is False
        assert entry.count == 3

    async def test_expired_window_restarts(self, store):
        for _ in range(3):
            await store.hit("k", max_requests=3, window_seconds=60, now=NOW)

        entry, admitted = await store.hit(
            "k", max_requests=3, window_seconds=60, now=NOW + 60
        )

        assert admitted is True
        assert entry.count == 1
        assert entry.reset_at == NOW + 120

    async def test_get_hides_expired_entries(self, store):
        await store.hit("k", max_requests=3, window_seconds=60, now=NOW)

        assert (await store.get("k", now=NOW + 59)).count == 1
        assert await store.get("k", now=NOW + 60) is None
        assert await store.get("missing", now=NOW) is None

    async def test_delete_is_idempotent(self, store):
        await store.hit("k", max_requests=3, window_seconds=60, now=NOW)

        await store.delete("k")
        await store.delete("k")

        assert len(store) == 0


# =============================================================================
# Sweeping
# =============================================================================


@pytest.mark.unit
class TestSweep:
    """Expired-entry removal."""

    async def test_sweep_removes_only_expired_entries(self, store):
        await store.hit("old", max_requests=1, window_seconds=10, now=NOW)
        await store.hit("live", max_requests=1, window_seconds=100, now=NOW)

        removed = store.sweep(now=NOW + 50)

        assert removed == 1
        assert len(store) == 1
        assert await store.get("live", now=NOW + 50) is not None

    async def test_sweep_keeps_entry_ending_exactly_now(self, store):
        await store.hit("edge", max_requests=1, window_seconds=10, now=NOW)

        assert store.sweep(now=NOW + 10) == 0
        assert len(store) == 1

    async def test_sweep_empty_store(self, store):
        assert store.sweep(now=NOW) == 0

    async def test_start_is_idempotent_and_stop_cancels(self, store):
        store.start()
        first_task = store._sweeper
        store.start()

        assert store.is_sweeping is True
        assert store._sweeper is first_task

        await store.stop()

        assert store.is_sweeping is False
        assert first_task.cancelled()

    async def test_stop_without_start(self, store):
        await store.stop()

        assert store.is_sweeping is False

    async def test_background_sweeper_removes_expired_entries(
        self, store, mock_logger
    ):
        store = InMemoryRateLimitStore(sweep_interval_seconds=0.01, logger=mock_logger)
        await store.hit("old", max_requests=1, window_seconds=1, now=0.0)

        store.start()
        await asyncio.sleep(0.05)
        await store.stop()

        assert len(store) == 0
        mock_logger.debug.assert_called()
