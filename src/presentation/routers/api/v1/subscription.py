"""Subscription resource handler.

The subscription is a singleton resource per owner, maintained by the
Stripe webhook reconciler.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from src.application.queries.billing_queries import GetSubscription
from src.application.queries.handlers.get_subscription_handler import (
    GetSubscriptionHandler,
)
from src.core.container import get_get_subscription_handler
from src.core.result import Failure, Success
from src.presentation.routers.api.middleware.auth_dependencies import CurrentOwnerDep
from src.presentation.routers.api.middleware.trace_middleware import get_trace_id
from src.presentation.routers.api.v1.errors import (
    ErrorResponseBuilder,
    ProblemDetails,
)
from src.schemas.billing_schemas import SubscriptionResponse

subscription_router = APIRouter(prefix="/subscription", tags=["Subscription"])


@subscription_router.get(
    "",
    response_model=SubscriptionResponse,
    responses={401: {"model": ProblemDetails}},
    summary="Get subscription",
)
async def get_subscription(
    request: Request,
    current_owner: CurrentOwnerDep,
    handler: Annotated[GetSubscriptionHandler, Depends(get_get_subscription_handler)],
) -> SubscriptionResponse | JSONResponse:
    """Get the owner's subscription (FREE default when none exists).

    Args:
        request: FastAPI request object.
        current_owner: Authenticated owner (from JWT).
        handler: Get subscription handler (injected).

    Returns:
        SubscriptionResponse on success, RFC 7807 error otherwise.
    """
    result = await handler.handle(GetSubscription(owner_id=current_owner.owner_id))

    match result:
        case Success(value=dto):
            return SubscriptionResponse.from_dto(dto)
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(
                error=error, request=request, trace_id=get_trace_id() or ""
            )
