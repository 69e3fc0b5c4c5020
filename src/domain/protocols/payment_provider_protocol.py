"""Payment provider protocol (port).

Abstracts the Stripe API surface the billing use cases need. The Stripe
adapter lives in src/infrastructure/billing/stripe_gateway.py.

Error Handling:
    Every method returns a Result. Provider/network failures become
    Failure(BillingError(code=BILLING_PROVIDER_ERROR)); signature problems on
    verify_event become WEBHOOK_SIGNATURE_INVALID or WEBHOOK_PAYLOAD_INVALID.
"""

from typing import Protocol

from src.core.result import Result
from src.domain.errors import BillingError
from src.domain.events.billing_events import ParsedBillingEvent
from src.domain.value_objects.provider_billing import (
    ProviderCreditNote,
    ProviderInvoice,
    ProviderSubscription,
)


class PaymentProviderProtocol(Protocol):
    """Protocol for the payment provider (Stripe)."""

    def verify_event(
        self,
        payload: bytes,
        signature_header: str,
    ) -> Result[ParsedBillingEvent, BillingError]:
        """Verify a webhook signature and parse the event.

        Args:
            payload: Raw request body, byte-for-byte as received.
            signature_header: Value of the Stripe-Signature header.

        Returns:
            Success(parsed event) or Failure(BillingError).
        """
        ...

    async def retrieve_subscription(
        self,
        subscription_id: str,
    ) -> Result[ProviderSubscription, BillingError]:
        """Fetch the current state of a subscription."""
        ...

    async def list_invoices(
        self,
        customer_id: str,
        *,
        limit: int = 100,
    ) -> Result[list[ProviderInvoice], BillingError]:
        """List a customer's invoices, newest first."""
        ...

    async def void_invoice(self, invoice_id: str) -> Result[None, BillingError]:
        """Void an open or draft invoice."""
        ...

    async def create_credit_note(
        self,
        invoice_id: str,
        *,
        amount: int,
        reason: str = "order_change",
    ) -> Result[ProviderCreditNote, BillingError]:
        """Credit `amount` (minor units) against a paid invoice."""
        ...
