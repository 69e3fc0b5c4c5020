"""Subscription status enumeration.

Local view of a Stripe subscription's lifecycle state.
"""

from enum import Enum


class SubscriptionStatus(str, Enum):
    """Local subscription status.

    Stripe statuses outside the four explicit ones (incomplete, unpaid,
    paused, ...) collapse to INACTIVE.
    """

    ACTIVE = "ACTIVE"
    PAST_DUE = "PAST_DUE"
    CANCELED = "CANCELED"
    TRIALING = "TRIALING"
    INACTIVE = "INACTIVE"

    @classmethod
    def from_provider(cls, raw: str | None) -> "SubscriptionStatus":
        """Map a Stripe subscription status string.

        Args:
            raw: Stripe status (e.g., "active", "past_due").

        Returns:
            Local status; INACTIVE for anything unrecognised.

        Example:
            >>> SubscriptionStatus.from_provider("past_due")
            <SubscriptionStatus.PAST_DUE: 'PAST_DUE'>
            >>> SubscriptionStatus.from_provider("incomplete_expired")
            <SubscriptionStatus.INACTIVE: 'INACTIVE'>
        """
        return _PROVIDER_STATUS_MAP.get(raw or "", cls.INACTIVE)


_PROVIDER_STATUS_MAP: dict[str, SubscriptionStatus] = {
    "active": SubscriptionStatus.ACTIVE,
    "past_due": SubscriptionStatus.PAST_DUE,
    "canceled": SubscriptionStatus.CANCELED,
    "trialing": SubscriptionStatus.TRIALING,
}
