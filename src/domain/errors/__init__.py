"""Domain errors package.

Exports all domain-level error classes for convenient importing.

Usage:
    from src.domain.errors import BillingError, RateLimitError
"""

from src.domain.errors.authentication_error import AuthenticationError
from src.domain.errors.billing_error import BillingError
from src.domain.errors.project_error import ProjectError
from src.domain.errors.rate_limit_error import RateLimitError
from src.domain.errors.user_error import UserError

__all__ = [
    "AuthenticationError",
    "BillingError",
    "ProjectError",
    "RateLimitError",
    "UserError",
]
