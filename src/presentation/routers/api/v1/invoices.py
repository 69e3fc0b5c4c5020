"""Invoices resource handlers.

Handlers:
    list_invoices  - List the owner's invoices (local mirror)
    get_invoice    - Get one invoice
    create_sync    - Pull invoices from Stripe and upsert them
    create_void    - Void an invoice (credit note when already paid)

Errors are returned as RFC 7807 Problem Details.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query, Request, status
from fastapi.responses import JSONResponse

from src.application.commands.billing_commands import SyncInvoices, VoidInvoice
from src.application.commands.handlers.sync_invoices_handler import (
    SyncInvoicesHandler,
)
from src.application.commands.handlers.void_invoice_handler import (
    VoidInvoiceHandler,
)
from src.application.errors import ApplicationError, ApplicationErrorCode
from src.application.queries.billing_queries import GetInvoice, ListInvoices
from src.application.queries.handlers.get_invoice_handler import GetInvoiceHandler
from src.application.queries.handlers.list_invoices_handler import (
    ListInvoicesHandler,
)
from src.core.container import (
    get_get_invoice_handler,
    get_list_invoices_handler,
    get_sync_invoices_handler,
    get_void_invoice_handler,
)
from src.core.enums import ErrorCode
from src.core.errors import ValidationError
from src.core.result import Failure, Success
from src.domain.enums.invoice_status import InvoiceStatus
from src.presentation.routers.api.middleware.auth_dependencies import CurrentOwnerDep
from src.presentation.routers.api.middleware.trace_middleware import get_trace_id
from src.presentation.routers.api.v1.errors import (
    ErrorResponseBuilder,
    ProblemDetails,
)
from src.schemas.billing_schemas import (
    InvoiceListResponse,
    InvoiceResponse,
    SyncInvoicesResponse,
    VoidInvoiceResponse,
)

invoices_router = APIRouter(prefix="/invoices", tags=["Invoices"])

_ERROR_RESPONSES: dict[int | str, dict[str, object]] = {
    400: {"model": ProblemDetails},
    401: {"model": ProblemDetails},
    404: {"model": ProblemDetails},
}


@invoices_router.get(
    "",
    response_model=InvoiceListResponse,
    responses=_ERROR_RESPONSES,
    summary="List invoices",
)
async def list_invoices(
    request: Request,
    current_owner: CurrentOwnerDep,
    handler: Annotated[ListInvoicesHandler, Depends(get_list_invoices_handler)],
    limit: Annotated[int, Query(description="Max invoices (clamped to 1..50)")] = 10,
    invoice_status: Annotated[
        str | None, Query(alias="status", description="Status filter (e.g. paid)")
    ] = None,
) -> InvoiceListResponse | JSONResponse:
    """List the owner's invoices, newest first.

    Args:
        request: FastAPI request object.
        current_owner: Authenticated owner (from JWT).
        handler: List invoices handler (injected).
        limit: Maximum number of invoices.
        invoice_status: Optional status filter (case-insensitive).

    Returns:
        InvoiceListResponse on success; 400 for an unknown status.
    """
    status_filter: InvoiceStatus | None = None
    if invoice_status:
        try:
            status_filter = InvoiceStatus(invoice_status.upper())
        except ValueError:
            return ErrorResponseBuilder.from_application_error(
                error=ApplicationError(
                    code=ApplicationErrorCode.QUERY_VALIDATION_FAILED,
                    message=f"Unknown invoice status '{invoice_status}'",
                    domain_error=ValidationError(
                        code=ErrorCode.INVALID_INPUT,
                        message=f"Unknown invoice status '{invoice_status}'",
                        field="status",
                    ),
                ),
                request=request,
                trace_id=get_trace_id() or "",
            )

    query = ListInvoices(
        owner_id=current_owner.owner_id,
        limit=limit,
        status=status_filter,
    )
    result = await handler.handle(query)

    match result:
        case Success(value=dto):
            return InvoiceListResponse.from_dto(dto)
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(
                error=error, request=request, trace_id=get_trace_id() or ""
            )


@invoices_router.get(
    "/{invoice_id}",
    response_model=InvoiceResponse,
    responses=_ERROR_RESPONSES,
    summary="Get invoice",
)
async def get_invoice(
    request: Request,
    current_owner: CurrentOwnerDep,
    handler: Annotated[GetInvoiceHandler, Depends(get_get_invoice_handler)],
    invoice_id: Annotated[UUID, Path(description="Invoice UUID")],
) -> InvoiceResponse | JSONResponse:
    """Get one invoice of the authenticated owner.

    Returns:
        InvoiceResponse, or 404 when the invoice is missing or not owned.
    """
    query = GetInvoice(owner_id=current_owner.owner_id, invoice_id=invoice_id)
    result = await handler.handle(query)

    match result:
        case Success(value=dto):
            return InvoiceResponse.from_dto(dto)
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(
                error=error, request=request, trace_id=get_trace_id() or ""
            )


@invoices_router.post(
    "/syncs",
    response_model=SyncInvoicesResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**_ERROR_RESPONSES, 502: {"model": ProblemDetails}},
    summary="Sync invoices from Stripe",
)
async def create_sync(
    request: Request,
    current_owner: CurrentOwnerDep,
    handler: Annotated[SyncInvoicesHandler, Depends(get_sync_invoices_handler)],
) -> SyncInvoicesResponse | JSONResponse:
    """Pull the owner's invoices from Stripe and upsert them locally.

    Returns:
        SyncInvoicesResponse (201), or 502 when Stripe fails.
    """
    result = await handler.handle(SyncInvoices(owner_id=current_owner.owner_id))

    match result:
        case Success(value=dto):
            return SyncInvoicesResponse.from_dto(dto)
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(
                error=error, request=request, trace_id=get_trace_id() or ""
            )


@invoices_router.post(
    "/{invoice_id}/voids",
    response_model=VoidInvoiceResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        **_ERROR_RESPONSES,
        400: {"model": ProblemDetails},
        502: {"model": ProblemDetails},
    },
    summary="Void invoice",
)
async def create_void(
    request: Request,
    current_owner: CurrentOwnerDep,
    handler: Annotated[VoidInvoiceHandler, Depends(get_void_invoice_handler)],
    invoice_id: Annotated[UUID, Path(description="Invoice UUID")],
) -> VoidInvoiceResponse | JSONResponse:
    """Void an invoice.

    Open and draft invoices are voided in Stripe; paid invoices get a
    credit note for the paid amount. Both end VOID locally.

    Returns:
        VoidInvoiceResponse (201); 400 if already void or not voidable;
        404 if missing; 502 when Stripe fails.
    """
    command = VoidInvoice(owner_id=current_owner.owner_id, invoice_id=invoice_id)
    result = await handler.handle(command)

    match result:
        case Success(value=dto):
            return VoidInvoiceResponse.from_dto(dto)
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(
                error=error, request=request, trace_id=get_trace_id() or ""
            )
