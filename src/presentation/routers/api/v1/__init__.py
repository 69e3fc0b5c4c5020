"""API v1 routers.

RESTful resource-based endpoints. All endpoints use resource nouns, not
action verbs (a login is a created session, a sync or a void is a created
sub-resource).

Resources:
    /api/v1/users                         - Registration
    /api/v1/sessions                      - Login (token pair)
    /api/v1/tokens                        - Token refresh
    /api/v1/projects                      - Owner's projects
    /api/v1/stripe/webhooks               - Stripe event delivery
    /api/v1/subscription                  - Owner's subscription
    /api/v1/invoices                      - Owner's invoices
    /api/v1/invoices/syncs                - Invoice syncs from Stripe
    /api/v1/invoices/{invoice_id}/voids   - Invoice voids
"""

from fastapi import APIRouter

from src.core.config import settings
from src.presentation.routers.api.v1.invoices import invoices_router
from src.presentation.routers.api.v1.projects import projects_router
from src.presentation.routers.api.v1.sessions import sessions_router
from src.presentation.routers.api.v1.stripe_webhooks import stripe_webhooks_router
from src.presentation.routers.api.v1.subscription import subscription_router
from src.presentation.routers.api.v1.tokens import tokens_router
from src.presentation.routers.api.v1.users import users_router

v1_router = APIRouter(prefix=settings.api_v1_prefix)
v1_router.include_router(users_router)
v1_router.include_router(sessions_router)
v1_router.include_router(tokens_router)
v1_router.include_router(projects_router)
v1_router.include_router(stripe_webhooks_router)
v1_router.include_router(subscription_router)
v1_router.include_router(invoices_router)

__all__ = [
    "v1_router",
]
