"""Invoice status enumeration."""

from enum import Enum


class InvoiceStatus(str, Enum):
    """Local invoice status.

    Mirrors Stripe's invoice statuses. Unknown provider values map to DRAFT.
    """

    DRAFT = "DRAFT"
    OPEN = "OPEN"
    PAID = "PAID"
    VOID = "VOID"
    UNCOLLECTIBLE = "UNCOLLECTIBLE"

    @classmethod
    def from_provider(cls, raw: str | None) -> "InvoiceStatus":
        """Map a Stripe invoice status string.

        Args:
            raw: Stripe status (e.g., "open", "paid").

        Returns:
            Local status; DRAFT for anything unrecognised.
        """
        try:
            return cls((raw or "").upper())
        except ValueError:
            return cls.DRAFT

    @property
    def is_voidable(self) -> bool:
        """Whether a void request can act on this status.

        PAID invoices are voided through a credit note, OPEN and DRAFT
        invoices directly.
        """
        return self in (InvoiceStatus.PAID, InvoiceStatus.OPEN, InvoiceStatus.DRAFT)
