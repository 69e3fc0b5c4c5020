"""ListInvoices query handler.

Returns the owner's invoices newest first, limit clamped to 1..50.
"""

from src.application.dtos.billing_dtos import InvoiceListResult, InvoiceResult
from src.application.queries.billing_queries import ListInvoices
from src.core.result import Result, Success
from src.domain.errors import BillingError
from src.domain.protocols.repositories import InvoiceRepository

MAX_INVOICE_PAGE_SIZE = 50


class ListInvoicesHandler:
    """Handler for ListInvoices query.

    Dependencies (injected via constructor):
        - InvoiceRepository: For invoice retrieval
    """

    def __init__(self, *, invoice_repo: InvoiceRepository) -> None:
        self._invoice_repo = invoice_repo

    async def handle(self, query: ListInvoices) -> Result[InvoiceListResult, BillingError]:
        """Handle ListInvoices query.

        Args:
            query: ListInvoices query.

        Returns:
            Success(InvoiceListResult): Always (empty list when none).
        """
        limit = max(1, min(query.limit, MAX_INVOICE_PAGE_SIZE))
        invoices = await self._invoice_repo.list_by_owner(
            query.owner_id, limit=limit, status=query.status
        )
        return Success(
            value=InvoiceListResult(
                invoices=[InvoiceResult.from_entity(invoice) for invoice in invoices],
                total=len(invoices),
            )
        )
