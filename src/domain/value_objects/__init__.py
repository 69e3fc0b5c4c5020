"""Domain value objects with validation.

Immutable value objects that enforce business constraints.
"""

from src.domain.value_objects.plan import PLAN_STORAGE_LIMITS, storage_limit_for
from src.domain.value_objects.provider_billing import (
    ProviderCreditNote,
    ProviderInvoice,
    ProviderSubscription,
)
from src.domain.value_objects.rate_limit_rule import (
    RateLimitConfig,
    RateLimitEntry,
    RateLimitResult,
)

__all__ = [
    "PLAN_STORAGE_LIMITS",
    "ProviderCreditNote",
    "ProviderInvoice",
    "ProviderSubscription",
    "RateLimitConfig",
    "RateLimitEntry",
    "RateLimitResult",
    "storage_limit_for",
]
