"""InvoiceRepository - SQLAlchemy implementation.

Adapter for hexagonal architecture.
Maps between domain Invoice entities and the invoices table.
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities.invoice import Invoice
from src.domain.enums.invoice_status import InvoiceStatus
from src.infrastructure.persistence.base import as_utc
from src.infrastructure.persistence.models.invoice import Invoice as InvoiceModel


class InvoiceRepository:
    """SQLAlchemy implementation of the InvoiceRepository protocol.

    Attributes:
        session: SQLAlchemy async session for database operations.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, invoice_id: UUID) -> Invoice | None:
        stmt = select(InvoiceModel).where(InvoiceModel.id == invoice_id)
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model is not None else None

    async def find_by_provider_id(self, provider_invoice_id: str) -> Invoice | None:
        model = await self._get_by_provider_id(provider_invoice_id)
        return self._to_domain(model) if model is not None else None

    async def list_by_owner(
        self,
        owner_id: str,
        *,
        limit: int,
        status: InvoiceStatus | None = None,
    ) -> list[Invoice]:
        """List an owner's invoices, newest first.

        Args:
            owner_id: Local owner identifier.
            limit: Maximum rows returned.
            status: Optional status filter.

        Returns:
            List of invoices (empty if none found).
        """
        stmt = select(InvoiceModel).where(InvoiceModel.owner_id == owner_id)
        if status is not None:
            stmt = stmt.where(InvoiceModel.status == status.value)
        stmt = stmt.order_by(InvoiceModel.created_at.desc()).limit(limit)

        result = await self.session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def save(self, invoice: Invoice) -> None:
        """Create or update an invoice, keyed by provider_invoice_id.

        Args:
            invoice: Invoice entity to persist.
        """
        existing = await self._get_by_provider_id(invoice.provider_invoice_id)

        if existing is None:
            self.session.add(self._to_model(invoice))
        else:
            existing.owner_id = invoice.owner_id
            existing.provider_customer_id = invoice.provider_customer_id
            existing.provider_subscription_id = invoice.provider_subscription_id
            existing.amount_due = invoice.amount_due
            existing.amount_paid = invoice.amount_paid
            existing.currency = invoice.currency
            existing.status = invoice.status.value
            existing.description = invoice.description
            existing.invoice_pdf_url = invoice.invoice_pdf_url
            existing.hosted_invoice_url = invoice.hosted_invoice_url
            existing.period_start = invoice.period_start
            existing.period_end = invoice.period_end
            existing.due_date = invoice.due_date
            existing.paid_at = invoice.paid_at
            existing.voided_at = invoice.voided_at
            existing.updated_at = invoice.updated_at

        await self.session.commit()

    async def _get_by_provider_id(self, provider_invoice_id: str) -> InvoiceModel | None:
        stmt = select(InvoiceModel).where(
            InvoiceModel.provider_invoice_id == provider_invoice_id
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    def _to_domain(self, model: InvoiceModel) -> Invoice:
        """Convert database model to domain entity."""
        return Invoice(
            id=model.id,
            owner_id=model.owner_id,
            provider_invoice_id=model.provider_invoice_id,
            provider_customer_id=model.provider_customer_id,
            provider_subscription_id=model.provider_subscription_id,
            status=InvoiceStatus(model.status),
            amount_due=model.amount_due,
            amount_paid=model.amount_paid,
            currency=model.currency,
            description=model.description,
            invoice_pdf_url=model.invoice_pdf_url,
            hosted_invoice_url=model.hosted_invoice_url,
            period_start=as_utc(model.period_start),
            period_end=as_utc(model.period_end),
            due_date=as_utc(model.due_date),
            paid_at=as_utc(model.paid_at),
            voided_at=as_utc(model.voided_at),
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )

    def _to_model(self, entity: Invoice) -> InvoiceModel:
        """Convert domain entity to database model."""
        return InvoiceModel(
            id=entity.id,
            owner_id=entity.owner_id,
            provider_invoice_id=entity.provider_invoice_id,
            provider_customer_id=entity.provider_customer_id,
            provider_subscription_id=entity.provider_subscription_id,
            status=entity.status.value,
            amount_due=entity.amount_due,
            amount_paid=entity.amount_paid,
            currency=entity.currency,
            description=entity.description,
            invoice_pdf_url=entity.invoice_pdf_url,
            hosted_invoice_url=entity.hosted_invoice_url,
            period_start=entity.period_start,
            period_end=entity.period_end,
            due_date=entity.due_date,
            paid_at=entity.paid_at,
            voided_at=entity.voided_at,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
