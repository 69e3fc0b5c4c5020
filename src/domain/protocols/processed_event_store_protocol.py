"""Processed webhook event store protocol (port).

Remembers recently processed Stripe event ids so redelivered events are
acknowledged without applying their mutations twice.
"""

from typing import Protocol


class ProcessedEventStoreProtocol(Protocol):
    """Bounded set of processed event ids."""

    async def contains(self, event_id: str) -> bool:
        """Whether `event_id` was already processed."""
        ...

    async def add(self, event_id: str) -> None:
        """Record `event_id` as processed, evicting the oldest ids over capacity."""
        ...
