"""VoidInvoice command handler.

Stripe cannot void a paid invoice, so paid invoices are credited in full
with a credit note (reason "order_change") instead. Open and draft invoices
are voided in Stripe directly. Either way the local invoice ends as VOID.

| Local status       | Stripe call         | Result               |
|--------------------|---------------------|----------------------|
| VOID               | none                | INVOICE_ALREADY_VOID |
| PAID               | CreditNote.create   | VOID + credit note   |
| OPEN / DRAFT       | Invoice.void_invoice| VOID                 |
| UNCOLLECTIBLE      | none                | INVOICE_NOT_VOIDABLE |
"""

from collections.abc import Callable
from datetime import UTC, datetime

from src.application.commands.billing_commands import VoidInvoice
from src.application.dtos.billing_dtos import InvoiceResult, VoidInvoiceResult
from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.enums.invoice_status import InvoiceStatus
from src.domain.errors import BillingError
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.payment_provider_protocol import PaymentProviderProtocol
from src.domain.protocols.repositories import InvoiceRepository


def _utc_now() -> datetime:
    return datetime.now(UTC)


class VoidInvoiceHandler:
    """Handler for VoidInvoice command.

    Dependencies (injected via constructor):
        - PaymentProviderProtocol: Void / credit note calls
        - InvoiceRepository: Invoice lookup and update
        - LoggerProtocol: Structured logging

    Returns:
        Result[VoidInvoiceResult, BillingError]
    """

    def __init__(
        self,
        *,
        payment_provider: PaymentProviderProtocol,
        invoice_repo: InvoiceRepository,
        logger: LoggerProtocol,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._payment_provider = payment_provider
        self._invoice_repo = invoice_repo
        self._logger = logger
        self._clock = clock

    async def handle(self, cmd: VoidInvoice) -> Result[VoidInvoiceResult, BillingError]:
        """Handle VoidInvoice command.

        Args:
            cmd: VoidInvoice command.

        Returns:
            Success(VoidInvoiceResult): Invoice voided (or credited).
            Failure(BillingError): INVOICE_NOT_FOUND (missing or not owned),
                INVOICE_ALREADY_VOID, INVOICE_NOT_VOIDABLE or
                BILLING_PROVIDER_ERROR.
        """
        invoice = await self._invoice_repo.find_by_id(cmd.invoice_id)
        if invoice is None or invoice.owner_id != cmd.owner_id:
            return Failure(
                error=BillingError(
                    code=ErrorCode.INVOICE_NOT_FOUND,
                    message="Invoice not found",
                    details={"invoice_id": str(cmd.invoice_id)},
                )
            )

        if invoice.status == InvoiceStatus.VOID:
            return Failure(
                error=BillingError(
                    code=ErrorCode.INVOICE_ALREADY_VOID,
                    message="Invoice is already voided",
                )
            )

        if not invoice.status.is_voidable:
            return Failure(
                error=BillingError(
                    code=ErrorCode.INVOICE_NOT_VOIDABLE,
                    message=f"Invoices with status {invoice.status.value} cannot be voided",
                    details={"status": invoice.status.value},
                )
            )

        credit_note_id: str | None = None
        credit_note_url: str | None = None

        if invoice.status == InvoiceStatus.PAID:
            credited = await self._payment_provider.create_credit_note(
                invoice.provider_invoice_id,
                amount=invoice.amount_paid,
                reason="order_change",
            )
            if isinstance(credited, Failure):
                return credited
            credit_note_id = credited.value.credit_note_id
            credit_note_url = credited.value.pdf_url
        else:
            voided = await self._payment_provider.void_invoice(
                invoice.provider_invoice_id
            )
            if isinstance(voided, Failure):
                return voided

        invoice.mark_void(self._clock())
        await self._invoice_repo.save(invoice)

        self._logger.info(
            "Invoice voided",
            owner_id=cmd.owner_id,
            provider_invoice_id=invoice.provider_invoice_id,
            credit_note_id=credit_note_id,
        )
        return Success(
            value=VoidInvoiceResult(
                invoice=InvoiceResult.from_entity(invoice),
                credit_note_id=credit_note_id,
                credit_note_url=credit_note_url,
            )
        )
