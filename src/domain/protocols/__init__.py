"""Domain protocols (ports) package.

This package contains protocol definitions that the domain layer needs.
Infrastructure adapters implement these protocols without inheritance.

Usage:
    from src.domain.protocols import RateLimitProtocol, SubscriptionRepository
"""

from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.password_hashing_protocol import PasswordHashingProtocol
from src.domain.protocols.payment_provider_protocol import PaymentProviderProtocol
from src.domain.protocols.processed_event_store_protocol import (
    ProcessedEventStoreProtocol,
)
from src.domain.protocols.rate_limit_protocol import RateLimitProtocol
from src.domain.protocols.rate_limit_store_protocol import RateLimitStoreProtocol
from src.domain.protocols.repositories import (
    BillingCustomerRepository,
    InvoiceRepository,
    ProjectRepository,
    SubscriptionRepository,
    UserRepository,
)
from src.domain.protocols.token_generation_protocol import TokenGenerationProtocol
from src.domain.protocols.token_validation_protocol import TokenValidationProtocol

__all__ = [
    "BillingCustomerRepository",
    "InvoiceRepository",
    "LoggerProtocol",
    "PasswordHashingProtocol",
    "PaymentProviderProtocol",
    "ProcessedEventStoreProtocol",
    "ProjectRepository",
    "RateLimitProtocol",
    "RateLimitStoreProtocol",
    "SubscriptionRepository",
    "TokenGenerationProtocol",
    "TokenValidationProtocol",
    "UserRepository",
]
