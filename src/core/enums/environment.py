"""Application environment types.

Defines the runtime environments for the CloudVault billing service.
Used by Settings to pick environment-specific behavior (log renderer,
Stripe key validation strictness).

Environments:
- DEVELOPMENT: Local development with placeholder Stripe keys allowed
- TESTING: Automated test execution with isolated database
- CI: Continuous integration environment
- PRODUCTION: Production deployment with strict configuration
"""

from enum import Enum


class Environment(str, Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    CI = "ci"
    PRODUCTION = "production"
