"""Domain enums for business logic.

This package contains enumerations used throughout the domain layer.
Enums are centralized here for discoverability and maintainability.

Available Enums:
    - PlanTier: Subscription plans (FREE, STANDARD, PRO)
    - SubscriptionStatus: Local subscription lifecycle state
    - InvoiceStatus: Local invoice lifecycle state
    - ProjectStatus: Project lifecycle state (soft delete)
    - RateLimitScope: How rate limit keys are scoped
    - RateLimitFailurePolicy: Store-error behavior of the rate limiter
    - UnresolvedOwnerPolicy: Handling of invoice events for unknown customers
"""

from src.domain.enums.failure_policy import (
    RateLimitFailurePolicy,
    UnresolvedOwnerPolicy,
)
from src.domain.enums.invoice_status import InvoiceStatus
from src.domain.enums.plan_tier import PlanTier
from src.domain.enums.project_status import ProjectStatus
from src.domain.enums.rate_limit_scope import RateLimitScope
from src.domain.enums.subscription_status import SubscriptionStatus

__all__ = [
    "InvoiceStatus",
    "PlanTier",
    "ProjectStatus",
    "RateLimitFailurePolicy",
    "RateLimitScope",
    "SubscriptionStatus",
    "UnresolvedOwnerPolicy",
]
