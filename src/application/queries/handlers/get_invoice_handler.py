"""GetInvoice query handler.

Invoices of other owners are reported as not found.
"""

from src.application.dtos.billing_dtos import InvoiceResult
from src.application.queries.billing_queries import GetInvoice
from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.errors import BillingError
from src.domain.protocols.repositories import InvoiceRepository


class GetInvoiceHandler:
    """Handler for GetInvoice query."""

    def __init__(self, *, invoice_repo: InvoiceRepository) -> None:
        self._invoice_repo = invoice_repo

    async def handle(self, query: GetInvoice) -> Result[InvoiceResult, BillingError]:
        invoice = await self._invoice_repo.find_by_id(query.invoice_id)
        if invoice is None or invoice.owner_id != query.owner_id:
            return Failure(
                error=BillingError(
                    code=ErrorCode.INVOICE_NOT_FOUND,
                    message="Invoice not found",
                    details={"invoice_id": str(query.invoice_id)},
                )
            )
        return Success(value=InvoiceResult.from_entity(invoice))
