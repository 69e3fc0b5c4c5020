"""Domain-level error codes (machine-readable).

Error codes follow ENTITY_ACTION_REASON naming convention.
Used with Result types for railway-oriented programming.

Categories:
- Validation errors (INVALID_*, VALIDATION_*)
- Resource errors (*_NOT_FOUND)
- Authentication errors (TOKEN_*)
- Rate limit errors (RATE_LIMIT_*)
- Webhook errors (WEBHOOK_*)
- Billing errors (BILLING_*, INVOICE_*, SUBSCRIPTION_*)
- Project errors (PROJECT_*)
- User errors (INVALID_CREDENTIALS, EMAIL_*)
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes (machine-readable).

    Error codes follow ENTITY_ACTION_REASON naming convention.
    """

    # Validation errors
    VALIDATION_FAILED = "validation_failed"
    INVALID_INPUT = "invalid_input"

    # Resource errors
    RESOURCE_NOT_FOUND = "resource_not_found"
    INVOICE_NOT_FOUND = "invoice_not_found"
    PROJECT_NOT_FOUND = "project_not_found"
    SUBSCRIPTION_NOT_FOUND = "subscription_not_found"
    OWNER_NOT_FOUND = "owner_not_found"

    # Authentication errors
    TOKEN_INVALID = "token_invalid"
    TOKEN_EXPIRED = "token_expired"
    INVALID_CREDENTIALS = "invalid_credentials"
    EMAIL_ALREADY_REGISTERED = "email_already_registered"
    AUTHENTICATION_FAILED = "authentication_failed"

    # Rate limit errors
    RATE_LIMIT_CHECK_FAILED = "rate_limit_check_failed"
    RATE_LIMIT_RESET_FAILED = "rate_limit_reset_failed"

    # Webhook errors
    WEBHOOK_SIGNATURE_MISSING = "webhook_signature_missing"
    WEBHOOK_SIGNATURE_INVALID = "webhook_signature_invalid"
    WEBHOOK_PAYLOAD_INVALID = "webhook_payload_invalid"
    WEBHOOK_PROCESSING_FAILED = "webhook_processing_failed"

    # Billing errors
    INVOICE_ALREADY_VOID = "invoice_already_void"
    INVOICE_NOT_VOIDABLE = "invoice_not_voidable"
    BILLING_PROVIDER_ERROR = "billing_provider_error"

    # Project errors
    PROJECT_LIMIT_REACHED = "project_limit_reached"
