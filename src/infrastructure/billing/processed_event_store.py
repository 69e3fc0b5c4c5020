"""In-memory processed webhook event store.

Bounded, insertion-ordered set of Stripe event ids. Once the set holds more
than `capacity` ids the oldest are evicted first.

Scale limitation:
    Per process and lost on restart. Redelivery after eviction or restart is
    still safe because every reconciler mutation is an upsert by natural key.
"""

from collections import OrderedDict


class InMemoryProcessedEventStore:
    """OrderedDict-backed store implementing ProcessedEventStoreProtocol.

    Args:
        capacity: Maximum number of ids remembered.
    """

    def __init__(self, *, capacity: int = 1000) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self._event_ids: OrderedDict[str, None] = OrderedDict()

    async def contains(self, event_id: str) -> bool:
        return event_id in self._event_ids

    async def add(self, event_id: str) -> None:
        self._event_ids[event_id] = None
        self._event_ids.move_to_end(event_id)
        while len(self._event_ids) > self.capacity:
            self._event_ids.popitem(last=False)

    def __len__(self) -> int:
        return len(self._event_ids)
