"""GetSubscription query handler.

Owners who never checked out have no row; they get the FREE/INACTIVE
default view rather than a 404.
"""

from src.application.dtos.billing_dtos import SubscriptionResult
from src.application.queries.billing_queries import GetSubscription
from src.core.result import Result, Success
from src.domain.entities.subscription import Subscription
from src.domain.errors import BillingError
from src.domain.protocols.repositories import (
    BillingCustomerRepository,
    SubscriptionRepository,
)


class GetSubscriptionHandler:
    """Handler for GetSubscription query."""

    def __init__(
        self,
        *,
        subscription_repo: SubscriptionRepository,
        customer_repo: BillingCustomerRepository,
    ) -> None:
        self._subscription_repo = subscription_repo
        self._customer_repo = customer_repo

    async def handle(
        self, query: GetSubscription
    ) -> Result[SubscriptionResult, BillingError]:
        subscription = await self._subscription_repo.find_by_owner(query.owner_id)
        if subscription is None:
            customer_id = await self._customer_repo.find_customer_id(query.owner_id)
            subscription = Subscription.new_free(
                owner_id=query.owner_id, provider_customer_id=customer_id or ""
            )
        return Success(value=SubscriptionResult.from_entity(subscription))
