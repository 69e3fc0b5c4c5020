"""
Main FastAPI application entry point.

Builds the CloudVault billing API: Stripe webhook reconciliation, invoice
and subscription endpoints, and fixed-window rate limiting.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.core.config import settings
from src.presentation.routers import system_router
from src.presentation.routers.api.middleware.rate_limit_middleware import (
    RateLimitMiddleware,
)
from src.presentation.routers.api.middleware.trace_middleware import TraceMiddleware
from src.presentation.routers.api.v1 import v1_router
from src.presentation.routers.api.v1.errors import register_exception_handlers


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan context manager.

    Handles startup and shutdown events:
    - Startup: Start the in-memory rate limit sweeper (memory backend only)
    - Shutdown: Stop the sweeper, close database connections

    Args:
        app: FastAPI application instance.

    Yields:
        None during application lifetime.
    """
    from src.core.container import get_database, get_logger, get_rate_limit_store
    from src.infrastructure.rate_limit import InMemoryRateLimitStore

    logger = get_logger()
    store = get_rate_limit_store()
    if isinstance(store, InMemoryRateLimitStore):
        store.start()

    logger.info(
        "Application started",
        environment=settings.environment.value,
        rate_limit_backend=settings.rate_limit_backend,
    )

    yield

    if isinstance(store, InMemoryRateLimitStore):
        await store.stop()
    await get_database().close()
    logger.info("Application stopped")


# Initialize FastAPI application with settings and lifespan
app = FastAPI(
    title=settings.app_name,
    description="CloudVault: accounts, projects, Stripe billing reconciliation, invoices, rate limiting",
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    debug=settings.debug,
    lifespan=lifespan,
)

# Middleware runs in reverse registration order: trace first, then rate limit
app.add_middleware(RateLimitMiddleware)
app.add_middleware(TraceMiddleware)

# Register global exception handlers (RFC 7807 error responses)
register_exception_handlers(app)

app.include_router(system_router)
app.include_router(v1_router)
