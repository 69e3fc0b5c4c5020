"""SyncInvoices command handler.

Pulls up to `limit` invoices of the owner's Stripe customer and upserts each
one locally with Stripe's status. Owners without a Stripe customer sync zero
invoices.

Architecture:
- Application layer handler
- Returns Result[SyncInvoicesResult, BillingError]
"""

from src.application.commands.billing_commands import SyncInvoices
from src.application.dtos.billing_dtos import SyncInvoicesResult
from src.core.result import Failure, Result, Success
from src.domain.entities.invoice import Invoice
from src.domain.enums.invoice_status import InvoiceStatus
from src.domain.errors import BillingError
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.payment_provider_protocol import PaymentProviderProtocol
from src.domain.protocols.repositories import (
    BillingCustomerRepository,
    InvoiceRepository,
)


class SyncInvoicesHandler:
    """Handler for SyncInvoices command.

    Dependencies (injected via constructor):
        - PaymentProviderProtocol: Invoice listing
        - InvoiceRepository: Local upserts
        - BillingCustomerRepository: Owner's Stripe customer
        - LoggerProtocol: Structured logging
    """

    def __init__(
        self,
        *,
        payment_provider: PaymentProviderProtocol,
        invoice_repo: InvoiceRepository,
        customer_repo: BillingCustomerRepository,
        logger: LoggerProtocol,
    ) -> None:
        self._payment_provider = payment_provider
        self._invoice_repo = invoice_repo
        self._customer_repo = customer_repo
        self._logger = logger

    async def handle(self, cmd: SyncInvoices) -> Result[SyncInvoicesResult, BillingError]:
        """Handle SyncInvoices command.

        Args:
            cmd: SyncInvoices command.

        Returns:
            Success(SyncInvoicesResult): Number of invoices upserted.
            Failure(BillingError): BILLING_PROVIDER_ERROR when Stripe fails.
        """
        customer_id = await self._customer_repo.find_customer_id(cmd.owner_id)
        if customer_id is None:
            return Success(
                value=SyncInvoicesResult(synced=0, message="No Stripe customer linked")
            )

        listed = await self._payment_provider.list_invoices(customer_id, limit=cmd.limit)
        if isinstance(listed, Failure):
            return listed

        for snapshot in listed.value:
            invoice = await self._invoice_repo.find_by_provider_id(snapshot.invoice_id)
            if invoice is None:
                invoice = Invoice.from_provider(
                    snapshot,
                    owner_id=cmd.owner_id,
                    status=InvoiceStatus.from_provider(snapshot.status),
                )
            invoice.sync_from_provider(snapshot)
            await self._invoice_repo.save(invoice)

        synced = len(listed.value)
        self._logger.info(
            "Invoices synchronized",
            owner_id=cmd.owner_id,
            customer_id=customer_id,
            synced=synced,
        )
        return Success(
            value=SyncInvoicesResult(
                synced=synced, message="Invoices synchronized successfully"
            )
        )
