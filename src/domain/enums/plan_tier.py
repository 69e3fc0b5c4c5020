"""Subscription plan tiers.

A plan tier decides the storage quota granted to an owner. The quota table
lives in src/domain/value_objects/plan.py.

Usage:
    from src.domain.enums import PlanTier

    tier = PlanTier("PRO")
"""

from enum import Enum


class PlanTier(str, Enum):
    """Subscription plan tiers.

    Values are upper-case to match the `planType` metadata Stripe sessions and
    subscriptions carry.
    """

    FREE = "FREE"
    STANDARD = "STANDARD"
    PRO = "PRO"

    @classmethod
    def parse(cls, raw: object) -> "PlanTier | None":
        """Return the tier for a metadata value, or None when unknown.

        Args:
            raw: Metadata value (any type, usually str or None).

        Returns:
            Matching PlanTier, or None for missing/unknown values.
        """
        if not isinstance(raw, str):
            return None
        try:
            return cls(raw.strip().upper())
        except ValueError:
            return None
