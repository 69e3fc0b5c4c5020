"""Unit tests for InMemoryProcessedEventStore."""

import pytest

from src.infrastructure.billing.processed_event_store import (
    InMemoryProcessedEventStore,
)


@pytest.mark.unit
class TestProcessedEventStore:
    """Bounded, oldest-first event id set."""

    async def test_add_then_contains(self):
        store = InMemoryProcessedEventStore()

        await store.add("evt_1")

        assert await store.contains("evt_1") is True
        assert await store.contains("evt_2") is False

    async def test_evicts_oldest_beyond_capacity(self):
        store = InMemoryProcessedEventStore(capacity=3)

        for i in range(5):
            await store.add(f"evt_{i}")

        assert len(store) == 3
        assert await store.contains("evt_0") is False
        assert await store.contains("evt_1") is False
        assert await store.contains("evt_4") is True

    async def test_re_adding_refreshes_position(self):
        store = InMemoryProcessedEventStore(capacity=2)
        await store.add("evt_a")
        await store.add("evt_b")

        await store.add("evt_a")
        await store.add("evt_c")

        assert await store.contains("evt_a") is True
        assert await store.contains("evt_b") is False

    async def test_re_adding_does_not_grow(self):
        store = InMemoryProcessedEventStore(capacity=10)

        await store.add("evt_1")
        await store.add("evt_1")

        assert len(store) == 1

    @pytest.mark.parametrize("capacity", [0, -1])
    def test_rejects_non_positive_capacity(self, capacity):
        with pytest.raises(ValueError, match="capacity"):
            InMemoryProcessedEventStore(capacity=capacity)
