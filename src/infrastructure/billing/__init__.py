"""Billing infrastructure (Stripe adapter, event mapper, processed-event store)."""

from src.infrastructure.billing.processed_event_store import (
    InMemoryProcessedEventStore,
)
from src.infrastructure.billing.stripe_event_mapper import StripeEventMapper
from src.infrastructure.billing.stripe_gateway import StripeGateway

__all__ = [
    "InMemoryProcessedEventStore",
    "StripeEventMapper",
    "StripeGateway",
]
