"""Stripe payment provider adapter.

Implements PaymentProviderProtocol with the official `stripe` SDK.

Architecture:
    - Infrastructure layer (adapter for the Stripe API)
    - Webhook verification is local (HMAC) and synchronous
    - API calls are blocking SDK calls run in a worker thread so the event
      loop keeps serving requests; the SDK's own timeouts apply
    - Returns Result types; SDK exceptions never leak past this module

Reference:
    - https://docs.stripe.com/webhooks#verify-official-libraries
"""

import asyncio
import json
from typing import Any

import stripe
import structlog

from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.errors import BillingError
from src.domain.events.billing_events import ParsedBillingEvent
from src.domain.value_objects.provider_billing import (
    ProviderCreditNote,
    ProviderInvoice,
    ProviderSubscription,
)
from src.infrastructure.billing.stripe_event_mapper import StripeEventMapper


class StripeGateway:
    """Stripe adapter implementing PaymentProviderProtocol.

    Args:
        secret_key: Stripe secret API key (sk_...).
        webhook_secret: Webhook endpoint signing secret (whsec_...).
        tolerance_seconds: Maximum signature timestamp age.
        mapper: Event mapper (defaults to StripeEventMapper).

    Example:
        >>> gateway = StripeGateway(secret_key="sk_test_x", webhook_secret="whsec_x")
        >>> result = gateway.verify_event(body, request.headers["stripe-signature"])
    """

    def __init__(
        self,
        *,
        secret_key: str,
        webhook_secret: str,
        tolerance_seconds: int = 300,
        mapper: StripeEventMapper | None = None,
    ) -> None:
        stripe.api_key = secret_key
        self._webhook_secret = webhook_secret
        self._tolerance_seconds = tolerance_seconds
        self._mapper = mapper or StripeEventMapper()
        self._logger = structlog.get_logger("stripe_api")

    def verify_event(
        self,
        payload: bytes,
        signature_header: str,
    ) -> Result[ParsedBillingEvent, BillingError]:
        """Verify the Stripe-Signature header and parse the event.

        Args:
            payload: Raw request body, byte-for-byte as received.
            signature_header: Stripe-Signature header value.

        Returns:
            Success(ParsedBillingEvent) for an authentic, well-formed event.
            Failure(BillingError) with WEBHOOK_SIGNATURE_INVALID when the
            signature does not verify, WEBHOOK_PAYLOAD_INVALID when it does
            but the body is not a Stripe event.
        """
        try:
            body = payload.decode("utf-8")
            stripe.WebhookSignature.verify_header(
                body,
                signature_header,
                self._webhook_secret,
                self._tolerance_seconds,
            )
        except (stripe.SignatureVerificationError, UnicodeDecodeError) as e:
            self._logger.warning(
                "stripe_webhook_signature_invalid",
                error=str(e),
                error_type=type(e).__name__,
            )
            return Failure(
                error=BillingError(
                    code=ErrorCode.WEBHOOK_SIGNATURE_INVALID,
                    message="Webhook signature verification failed",
                )
            )

        try:
            data = json.loads(body)
        except json.JSONDecodeError as e:
            return Failure(
                error=BillingError(
                    code=ErrorCode.WEBHOOK_PAYLOAD_INVALID,
                    message="Webhook payload is not valid JSON",
                    details={"error": str(e)},
                )
            )

        event = self._mapper.map_event(data) if isinstance(data, dict) else None
        if event is None:
            return Failure(
                error=BillingError(
                    code=ErrorCode.WEBHOOK_PAYLOAD_INVALID,
                    message="Webhook payload is not a valid Stripe event",
                )
            )
        return Success(value=event)

    async def retrieve_subscription(
        self,
        subscription_id: str,
    ) -> Result[ProviderSubscription, BillingError]:
        result = await self._call(
            "retrieve_subscription",
            stripe.Subscription.retrieve,
            subscription_id,
        )
        if isinstance(result, Failure):
            return result
        return Success(value=self._mapper.map_subscription(_to_plain(result.value)))

    async def list_invoices(
        self,
        customer_id: str,
        *,
        limit: int = 100,
    ) -> Result[list[ProviderInvoice], BillingError]:
        result = await self._call(
            "list_invoices",
            stripe.Invoice.list,
            customer=customer_id,
            limit=limit,
        )
        if isinstance(result, Failure):
            return result
        return Success(
            value=[
                self._mapper.map_invoice(_to_plain(invoice))
                for invoice in result.value.data
            ]
        )

    async def void_invoice(self, invoice_id: str) -> Result[None, BillingError]:
        result = await self._call(
            "void_invoice",
            stripe.Invoice.void_invoice,
            invoice_id,
        )
        if isinstance(result, Failure):
            return result
        return Success(value=None)

    async def create_credit_note(
        self,
        invoice_id: str,
        *,
        amount: int,
        reason: str = "order_change",
    ) -> Result[ProviderCreditNote, BillingError]:
        result = await self._call(
            "create_credit_note",
            stripe.CreditNote.create,
            invoice=invoice_id,
            amount=amount,
            reason=reason,
        )
        if isinstance(result, Failure):
            return result
        plain = _to_plain(result.value)
        return Success(
            value=ProviderCreditNote(
                credit_note_id=plain["id"],
                invoice_id=invoice_id,
                pdf_url=plain.get("pdf"),
            )
        )

    async def _call(
        self,
        operation: str,
        func: Any,
        *args: Any,
        **kwargs: Any,
    ) -> Result[Any, BillingError]:
        """Run a blocking SDK call in a worker thread.

        Args:
            operation: Operation name for logging.
            func: Stripe SDK callable.

        Returns:
            Success(SDK response) or Failure(BILLING_PROVIDER_ERROR).
        """
        try:
            response = await asyncio.to_thread(func, *args, **kwargs)
        except stripe.StripeError as e:
            self._logger.warning(
                "stripe_api_error",
                operation=operation,
                error=str(e),
                error_type=type(e).__name__,
                http_status=getattr(e, "http_status", None),
            )
            return Failure(
                error=BillingError(
                    code=ErrorCode.BILLING_PROVIDER_ERROR,
                    message=f"Stripe request failed: {operation}",
                    details={"error_type": type(e).__name__},
                )
            )
        return Success(value=response)


def _to_plain(obj: Any) -> dict[str, Any]:
    """StripeObject (or plain dict) to a plain dict."""
    if isinstance(obj, dict) and not hasattr(obj, "to_dict"):
        return obj
    return obj.to_dict()
