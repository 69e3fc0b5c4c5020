"""ReconcileBillingEvent command handler.

Applies one Stripe webhook delivery to local Subscription and Invoice rows.

Flow:
    1. Reject deliveries without a Stripe-Signature header
    2. Verify the signature and parse the event (fails closed)
    3. Acknowledge already-processed event ids without side effects
    4. Dispatch on the parsed event variant; every mutation is an upsert by
       natural key, so replays after eviction or restart stay harmless
    5. Mark the event processed only after dispatch succeeded

Any exception raised while dispatching becomes WEBHOOK_PROCESSING_FAILED
(HTTP 500), which makes Stripe redeliver the event later.

Architecture:
- Application layer handler (orchestrates domain entities and ports)
- Imports only from domain layer (entities, protocols, events)
- Uses Result types for error handling
"""

from collections.abc import Callable
from datetime import UTC, datetime

from src.application.commands.billing_commands import ReconcileBillingEvent
from src.application.dtos.billing_dtos import WebhookReceipt
from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.entities.invoice import Invoice
from src.domain.entities.subscription import Subscription
from src.domain.enums.failure_policy import UnresolvedOwnerPolicy
from src.domain.enums.invoice_status import InvoiceStatus
from src.domain.errors import BillingError
from src.domain.events.billing_events import (
    BillingEvent,
    CheckoutCompleted,
    CreditNoteCreated,
    InvoiceFinalized,
    InvoicePaymentFailed,
    InvoicePaymentSucceeded,
    InvoiceVoided,
    ParsedBillingEvent,
    SubscriptionChanged,
    SubscriptionDeleted,
    UnknownBillingEvent,
)
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.payment_provider_protocol import PaymentProviderProtocol
from src.domain.protocols.processed_event_store_protocol import (
    ProcessedEventStoreProtocol,
)
from src.domain.protocols.repositories import (
    BillingCustomerRepository,
    InvoiceRepository,
    SubscriptionRepository,
)
from src.domain.value_objects.provider_billing import ProviderSubscription


def _utc_now() -> datetime:
    return datetime.now(UTC)


class ReconcileBillingEventHandler:
    """Handler for ReconcileBillingEvent command.

    Dependencies (injected via constructor):
        - PaymentProviderProtocol: Signature verification, subscription lookup
        - ProcessedEventStoreProtocol: Deduplication by event id
        - SubscriptionRepository / InvoiceRepository: Local billing state
        - BillingCustomerRepository: Owner lookup by Stripe customer id
        - LoggerProtocol: Structured logging

    Returns:
        Result[WebhookReceipt, BillingError]
    """

    def __init__(
        self,
        *,
        payment_provider: PaymentProviderProtocol,
        processed_events: ProcessedEventStoreProtocol,
        subscription_repo: SubscriptionRepository,
        invoice_repo: InvoiceRepository,
        customer_repo: BillingCustomerRepository,
        logger: LoggerProtocol,
        unresolved_owner_policy: UnresolvedOwnerPolicy = UnresolvedOwnerPolicy.ACKNOWLEDGE,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        """Initialize handler with dependencies.

        Args:
            payment_provider: Stripe adapter.
            processed_events: Bounded set of processed event ids.
            subscription_repo: Subscription repository.
            invoice_repo: Invoice repository.
            customer_repo: Owner/customer link repository.
            logger: Structured logger.
            unresolved_owner_policy: What to do when an invoice event names a
                customer without a local owner.
            clock: Current time source (UTC).
        """
        self._payment_provider = payment_provider
        self._processed_events = processed_events
        self._subscription_repo = subscription_repo
        self._invoice_repo = invoice_repo
        self._customer_repo = customer_repo
        self._logger = logger
        self._unresolved_owner_policy = unresolved_owner_policy
        self._clock = clock

    async def handle(
        self, cmd: ReconcileBillingEvent
    ) -> Result[WebhookReceipt, BillingError]:
        """Handle ReconcileBillingEvent command.

        Args:
            cmd: Raw webhook body and signature header.

        Returns:
            Success(WebhookReceipt): Event applied, ignored, or a duplicate.
            Failure(BillingError): WEBHOOK_SIGNATURE_MISSING,
                WEBHOOK_SIGNATURE_INVALID or WEBHOOK_PAYLOAD_INVALID (reject,
                nothing persisted); WEBHOOK_PROCESSING_FAILED or
                OWNER_NOT_FOUND (provider should retry).
        """
        if not cmd.signature_header:
            self._logger.warning("Stripe webhook without signature header")
            return Failure(
                error=BillingError(
                    code=ErrorCode.WEBHOOK_SIGNATURE_MISSING,
                    message="Missing Stripe-Signature header",
                )
            )

        verified = self._payment_provider.verify_event(
            cmd.payload, cmd.signature_header
        )
        if isinstance(verified, Failure):
            self._logger.warning(
                "Stripe webhook rejected",
                error_code=verified.error.code.value,
            )
            return verified

        event = verified.value
        log = self._logger.bind(event_id=event.event_id, event_type=event.event_type)

        if await self._processed_events.contains(event.event_id):
            log.info("Duplicate billing event acknowledged")
            return Success(
                value=WebhookReceipt(
                    event_id=event.event_id,
                    event_type=event.event_type,
                    duplicate=True,
                )
            )

        try:
            outcome = await self._dispatch(event, log)
        except Exception as e:
            log.error("Billing event processing failed", error=e)
            return Failure(
                error=BillingError(
                    code=ErrorCode.WEBHOOK_PROCESSING_FAILED,
                    message="Webhook processing failed",
                    details={"event_id": event.event_id, "event_type": event.event_type},
                )
            )

        if isinstance(outcome, Failure):
            return outcome

        await self._processed_events.add(event.event_id)
        log.info("Billing event processed")
        return Success(
            value=WebhookReceipt(event_id=event.event_id, event_type=event.event_type)
        )

    async def _dispatch(
        self, event: ParsedBillingEvent, log: LoggerProtocol
    ) -> Result[None, BillingError]:
        match event:
            case CheckoutCompleted():
                await self._on_checkout_completed(event, log)
            case SubscriptionChanged(subscription=snapshot):
                await self._upsert_subscription(snapshot, log)
            case SubscriptionDeleted(subscription=snapshot):
                await self._on_subscription_deleted(snapshot, log)
            case InvoiceFinalized():
                return await self._on_invoice_finalized(event, log)
            case InvoicePaymentSucceeded():
                return await self._on_payment_succeeded(event, log)
            case InvoicePaymentFailed():
                return await self._on_payment_failed(event, log)
            case InvoiceVoided(invoice=snapshot):
                invoice = await self._invoice_repo.find_by_provider_id(
                    snapshot.invoice_id
                )
                if invoice is None:
                    log.info("Voided invoice not mirrored locally")
                else:
                    invoice.mark_void(snapshot.voided_at or self._clock())
                    await self._invoice_repo.save(invoice)
            case CreditNoteCreated(invoice_id=invoice_id):
                # Credit notes collapse to voidance; partial amounts are not tracked
                invoice = (
                    await self._invoice_repo.find_by_provider_id(invoice_id)
                    if invoice_id
                    else None
                )
                if invoice is None:
                    log.info("Credit note for unknown invoice", invoice_id=invoice_id)
                else:
                    invoice.mark_void(self._clock())
                    await self._invoice_repo.save(invoice)
            case UnknownBillingEvent():
                log.info("Unhandled billing event type ignored")
        return Success(value=None)

    # -------------------------------------------------------------------------
    # Subscription events
    # -------------------------------------------------------------------------

    async def _on_checkout_completed(
        self, event: CheckoutCompleted, log: LoggerProtocol
    ) -> None:
        if event.owner_id is None or event.plan_tier is None:
            log.warning(
                "Checkout session without owner or plan metadata",
                has_owner=event.owner_id is not None,
                has_plan=event.plan_tier is not None,
            )
            return

        customer_id = event.customer_id or ""
        subscription = await self._subscription_repo.find_by_owner(event.owner_id)
        if subscription is None:
            subscription = Subscription.new_free(
                owner_id=event.owner_id, provider_customer_id=customer_id
            )

        subscription.activate_plan(
            plan_tier=event.plan_tier,
            provider_customer_id=customer_id,
            provider_subscription_id=event.subscription_id,
        )
        await self._subscription_repo.save(subscription)

        if event.customer_id:
            await self._customer_repo.link(
                owner_id=event.owner_id, provider_customer_id=event.customer_id
            )

    async def _upsert_subscription(
        self, snapshot: ProviderSubscription, log: LoggerProtocol
    ) -> None:
        """Create or update the owner's row from Stripe's subscription state."""
        owner_id = snapshot.owner_id or await self._customer_repo.find_owner_id(
            snapshot.customer_id
        )
        if owner_id is None:
            log.warning(
                "Subscription without resolvable owner",
                subscription_id=snapshot.subscription_id,
            )
            return

        subscription = await self._subscription_repo.find_by_owner(owner_id)
        if subscription is None:
            subscription = Subscription.new_free(
                owner_id=owner_id, provider_customer_id=snapshot.customer_id
            )

        subscription.apply_provider_state(snapshot)
        await self._subscription_repo.save(subscription)

        if snapshot.customer_id:
            await self._customer_repo.link(
                owner_id=owner_id, provider_customer_id=snapshot.customer_id
            )

    async def _on_subscription_deleted(
        self, snapshot: ProviderSubscription, log: LoggerProtocol
    ) -> None:
        owner_id = snapshot.owner_id or await self._customer_repo.find_owner_id(
            snapshot.customer_id
        )
        if owner_id is None:
            log.warning(
                "Deleted subscription without resolvable owner",
                subscription_id=snapshot.subscription_id,
            )
            return

        subscription = await self._subscription_repo.find_by_owner(owner_id)
        if subscription is None:
            subscription = Subscription.new_free(
                owner_id=owner_id, provider_customer_id=snapshot.customer_id
            )

        subscription.downgrade_to_free()
        await self._subscription_repo.save(subscription)

    # -------------------------------------------------------------------------
    # Invoice events
    # -------------------------------------------------------------------------

    async def _on_invoice_finalized(
        self, event: InvoiceFinalized, log: LoggerProtocol
    ) -> Result[None, BillingError]:
        snapshot = event.invoice
        owner_id = await self._customer_repo.find_owner_id(snapshot.customer_id)
        if owner_id is None:
            return self._unresolved_owner(event, snapshot.customer_id, log)

        invoice = await self._invoice_repo.find_by_provider_id(snapshot.invoice_id)
        if invoice is None:
            invoice = Invoice.from_provider(
                snapshot, owner_id=owner_id, status=InvoiceStatus.OPEN
            )
        else:
            invoice.refresh_amounts(snapshot)
            if invoice.status == InvoiceStatus.DRAFT:
                invoice.mark_open()

        await self._invoice_repo.save(invoice)
        return Success(value=None)

    async def _on_payment_succeeded(
        self, event: InvoicePaymentSucceeded, log: LoggerProtocol
    ) -> Result[None, BillingError]:
        snapshot = event.invoice

        invoice = await self._invoice_repo.find_by_provider_id(snapshot.invoice_id)
        if invoice is not None:
            invoice.refresh_amounts(snapshot)
            invoice.mark_paid(snapshot.paid_at or self._clock())
            await self._invoice_repo.save(invoice)

        if snapshot.subscription_id is None:
            log.info("Paid invoice without subscription")
            return Success(value=None)

        retrieved = await self._payment_provider.retrieve_subscription(
            snapshot.subscription_id
        )
        if isinstance(retrieved, Failure):
            log.warning(
                "Subscription refresh failed",
                subscription_id=snapshot.subscription_id,
                error_code=retrieved.error.code.value,
            )
            return Failure(
                error=BillingError(
                    code=ErrorCode.WEBHOOK_PROCESSING_FAILED,
                    message="Could not refresh subscription from Stripe",
                    details={"subscription_id": snapshot.subscription_id},
                )
            )

        await self._upsert_subscription(retrieved.value, log)
        return Success(value=None)

    async def _on_payment_failed(
        self, event: InvoicePaymentFailed, log: LoggerProtocol
    ) -> Result[None, BillingError]:
        snapshot = event.invoice

        invoice = await self._invoice_repo.find_by_provider_id(snapshot.invoice_id)
        if invoice is not None:
            invoice.mark_open()
            await self._invoice_repo.save(invoice)

        owner_id = await self._customer_repo.find_owner_id(snapshot.customer_id)
        if owner_id is None:
            return self._unresolved_owner(event, snapshot.customer_id, log)

        subscription = await self._subscription_repo.find_by_owner(owner_id)
        if subscription is None:
            log.warning(
                "Failed payment without subscription row, past due not recorded",
                owner_id=owner_id,
                invoice_id=snapshot.invoice_id,
            )
            return Success(value=None)

        subscription.mark_past_due()
        await self._subscription_repo.save(subscription)
        return Success(value=None)

    def _unresolved_owner(
        self, event: BillingEvent, customer_id: str, log: LoggerProtocol
    ) -> Result[None, BillingError]:
        """Apply the configured policy for a customer without local owner."""
        if self._unresolved_owner_policy == UnresolvedOwnerPolicy.RETRY:
            log.warning("Owner not found, requesting redelivery", customer_id=customer_id)
            return Failure(
                error=BillingError(
                    code=ErrorCode.OWNER_NOT_FOUND,
                    message="No owner linked to Stripe customer",
                    details={"customer_id": customer_id, "event_id": event.event_id},
                )
            )

        log.warning("Owner not found, event dropped", customer_id=customer_id)
        return Success(value=None)
