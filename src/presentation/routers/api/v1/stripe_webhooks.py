"""Stripe webhook endpoint.

Stripe posts signed billing events here. The raw body is passed to the
reconciler untouched because the signature covers the exact bytes.

Responses:
    200 {"received": true}                     - event applied (or ignored)
    200 {"received": true, "duplicate": true}  - event already processed
    400 {"error": ...}                         - missing/invalid signature or payload
    500 {"error": ...}                         - processing failed, Stripe retries
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Header, Request, status
from fastapi.responses import JSONResponse

from src.application.commands.billing_commands import ReconcileBillingEvent
from src.application.commands.handlers.reconcile_billing_event_handler import (
    ReconcileBillingEventHandler,
)
from src.core.container import get_reconcile_billing_event_handler
from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.schemas.billing_schemas import WebhookErrorResponse, WebhookReceivedResponse

stripe_webhooks_router = APIRouter(prefix="/stripe", tags=["Stripe Webhooks"])

# Rejections the sender can fix; everything else asks Stripe to redeliver.
_CLIENT_ERROR_CODES = frozenset(
    {
        ErrorCode.WEBHOOK_SIGNATURE_MISSING,
        ErrorCode.WEBHOOK_SIGNATURE_INVALID,
        ErrorCode.WEBHOOK_PAYLOAD_INVALID,
    }
)


@stripe_webhooks_router.post(
    "/webhooks",
    response_model=WebhookReceivedResponse,
    response_model_exclude_none=True,
    responses={
        400: {"model": WebhookErrorResponse},
        500: {"model": WebhookErrorResponse},
    },
    summary="Receive Stripe webhook event",
)
async def receive_stripe_webhook(
    request: Request,
    handler: Annotated[
        ReconcileBillingEventHandler, Depends(get_reconcile_billing_event_handler)
    ],
    stripe_signature: Annotated[str | None, Header(alias="stripe-signature")] = None,
) -> WebhookReceivedResponse | JSONResponse:
    """Verify, deduplicate and apply one Stripe event.

    Args:
        request: FastAPI request (raw body is read as bytes).
        handler: Reconciler handler (injected).
        stripe_signature: Stripe-Signature header.

    Returns:
        WebhookReceivedResponse on success, JSONResponse with an error body
        otherwise.
    """
    payload = await request.body()
    command = ReconcileBillingEvent(payload=payload, signature_header=stripe_signature)

    result = await handler.handle(command)

    match result:
        case Success(value=receipt):
            return WebhookReceivedResponse.from_dto(receipt)
        case Failure(error=error):
            status_code = (
                status.HTTP_400_BAD_REQUEST
                if error.code in _CLIENT_ERROR_CODES
                else status.HTTP_500_INTERNAL_SERVER_ERROR
            )
            return JSONResponse(
                status_code=status_code,
                content=WebhookErrorResponse(error=error.message).model_dump(),
            )

    return JSONResponse(  # Explicit return for exhaustiveness
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Webhook processing failed"},
    )
