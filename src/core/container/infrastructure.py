"""Infrastructure dependency factories.

Application-scoped singletons for core infrastructure services:
- Logging (console, JSON outside development)
- Database (PostgreSQL in production, SQLite in tests)
- Token issuance and validation (JWT)
- Password hashing (bcrypt)
- Rate limiting (fixed window, in-memory or Redis store)
- Processed webhook event store
- Payment provider (Stripe)

Singletons are lru_cached; tests call `<factory>.cache_clear()` or use
FastAPI dependency overrides.
"""

from functools import lru_cache
from typing import TYPE_CHECKING, AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config import settings
from src.infrastructure.persistence.database import Database

if TYPE_CHECKING:
    from src.domain.protocols.logger_protocol import LoggerProtocol
    from src.domain.protocols.payment_provider_protocol import (
        PaymentProviderProtocol,
    )
    from src.domain.protocols.processed_event_store_protocol import (
        ProcessedEventStoreProtocol,
    )
    from src.domain.protocols.rate_limit_protocol import RateLimitProtocol
    from src.domain.protocols.rate_limit_store_protocol import (
        RateLimitStoreProtocol,
    )
    from src.domain.protocols.password_hashing_protocol import (
        PasswordHashingProtocol,
    )
    from src.infrastructure.security import JWTService


# ============================================================================
# Application-Scoped Dependencies (Singletons)
# ============================================================================


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    Adapter selection is centralized here (composition root):
    - development: ConsoleAdapter (human-readable)
    - testing/ci/production: ConsoleAdapter (JSON)

    Returns:
        LoggerProtocol: Logger instance implementing the protocol.
    """
    from src.infrastructure.logging.console_adapter import ConsoleAdapter

    return ConsoleAdapter(
        use_json=not settings.is_development,
        level=settings.log_level,
    )


@lru_cache()
def get_database() -> Database:
    """Get database manager singleton (app-scoped).

    Use get_db_session() for per-request sessions.

    Returns:
        Database manager instance.
    """
    return Database(
        database_url=settings.database_url,
        echo=settings.db_echo,
    )


@lru_cache()
def get_password_service() -> "PasswordHashingProtocol":
    """Get password hashing service singleton (app-scoped).

    Returns:
        BcryptPasswordService with settings.bcrypt_cost_factor.
    """
    from src.infrastructure.security import BcryptPasswordService

    return BcryptPasswordService(cost_factor=settings.bcrypt_cost_factor)


@lru_cache()
def get_token_service() -> "JWTService":
    """Get JWT token service singleton (app-scoped).

    The one instance both issues tokens (TokenGenerationProtocol) and
    validates them (TokenValidationProtocol).

    Returns:
        JWTService signing HS256 tokens with settings.secret_key.
    """
    from src.infrastructure.security import JWTService

    return JWTService(
        secret_key=settings.secret_key,
        expiration_minutes=settings.access_token_expire_minutes,
        refresh_expiration_days=settings.refresh_token_expire_days,
    )


@lru_cache()
def get_rate_limit_store() -> "RateLimitStoreProtocol":
    """Get rate limit store singleton (app-scoped).

    Container owns the backend choice (RATE_LIMIT_BACKEND):
        - 'memory': InMemoryRateLimitStore (per process, swept periodically)
        - 'redis': RedisRateLimitStore (shared across instances)

    The in-memory sweeper is started by the application lifespan.

    Returns:
        Store implementing RateLimitStoreProtocol.
    """
    if settings.rate_limit_backend == "redis":
        from redis.asyncio import ConnectionPool, Redis

        from src.infrastructure.rate_limit import RedisRateLimitStore

        pool = ConnectionPool.from_url(
            settings.redis_url,
            max_connections=20,
            decode_responses=False,
            socket_connect_timeout=5,
            socket_timeout=5,
            retry_on_timeout=True,
        )
        return RedisRateLimitStore(redis_client=Redis(connection_pool=pool))

    from src.infrastructure.rate_limit import InMemoryRateLimitStore

    return InMemoryRateLimitStore(
        sweep_interval_seconds=settings.rate_limit_sweep_interval_seconds,
        logger=get_logger(),
    )


@lru_cache()
def get_rate_limit() -> "RateLimitProtocol":
    """Get rate limiter singleton (app-scoped).

    Creates FixedWindowRateLimiter with:
    - The configured store (get_rate_limit_store)
    - The configured failure policy (fail_open by default)
    - Logger for structured logging

    Returns:
        Rate limiter implementing RateLimitProtocol.
    """
    from src.domain.enums import RateLimitFailurePolicy
    from src.infrastructure.rate_limit import FixedWindowRateLimiter

    return FixedWindowRateLimiter(
        store=get_rate_limit_store(),
        logger=get_logger(),
        failure_policy=RateLimitFailurePolicy(settings.rate_limit_failure_policy),
    )


@lru_cache()
def get_processed_event_store() -> "ProcessedEventStoreProtocol":
    """Get processed webhook event store singleton (app-scoped).

    Returns:
        InMemoryProcessedEventStore bounded by settings.webhook_dedup_capacity.
    """
    from src.infrastructure.billing import InMemoryProcessedEventStore

    return InMemoryProcessedEventStore(capacity=settings.webhook_dedup_capacity)


@lru_cache()
def get_payment_provider() -> "PaymentProviderProtocol":
    """Get payment provider singleton (app-scoped).

    Returns:
        StripeGateway configured from the Stripe settings.
    """
    from src.infrastructure.billing import StripeGateway

    return StripeGateway(
        secret_key=settings.stripe_secret_key,
        webhook_secret=settings.stripe_webhook_secret,
        tolerance_seconds=settings.stripe_webhook_tolerance_seconds,
    )


# ============================================================================
# Request-Scoped Dependencies (Per-Request)
# ============================================================================


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session (request-scoped).

    Commits on success, rolls back on exception, always closes.

    Yields:
        Database session for request duration.
    """
    db = get_database()
    async with db.get_session() as session:
        yield session
