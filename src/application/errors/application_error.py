"""Application error codes and the error wrapper the API layer renders.

Handlers return domain errors (BillingError, ProjectError, UserError,
ValidationError). ErrorResponseBuilder maps each domain ErrorCode to one
ApplicationErrorCode, which fixes the HTTP status and the Problem Details
`type`/`title`:

| Domain code                                 | Application code          | HTTP |
|---------------------------------------------|---------------------------|------|
| INVOICE_NOT_FOUND, PROJECT_NOT_FOUND        | NOT_FOUND                 | 404  |
| INVOICE_NOT_VOIDABLE, PROJECT_LIMIT_REACHED | COMMAND_VALIDATION_FAILED | 400  |
| EMAIL_ALREADY_REGISTERED                    | CONFLICT                  | 409  |
| INVALID_CREDENTIALS, TOKEN_EXPIRED          | UNAUTHORIZED              | 401  |
| BILLING_PROVIDER_ERROR                      | EXTERNAL_SERVICE_ERROR    | 502  |

Codes with no entry fall back to COMMAND_EXECUTION_FAILED (500).
"""

from dataclasses import dataclass
from enum import Enum

from src.core.errors.domain_error import DomainError


class ApplicationErrorCode(Enum):
    """HTTP-facing error categories.

    The value is the last path segment of the Problem Details `type`.
    """

    COMMAND_VALIDATION_FAILED = "command_validation_failed"
    COMMAND_EXECUTION_FAILED = "command_execution_failed"
    QUERY_VALIDATION_FAILED = "query_validation_failed"
    QUERY_FAILED = "query_failed"
    QUERY_EXECUTION_FAILED = "query_execution_failed"
    EXTERNAL_SERVICE_ERROR = "external_service_error"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"


@dataclass(frozen=True, slots=True, kw_only=True)
class ApplicationError:
    """Error as rendered by the API layer.

    Attributes:
        code: HTTP-facing category.
        message: Becomes the Problem Details `detail`.
        domain_error: Originating domain error. A ValidationError with a
            `field` adds an entry to the Problem Details `errors` list.
        details: Extra context copied from the domain error.

    Examples:
        Built by a router for an unknown `?status=` filter:

        >>> ApplicationError(
        ...     code=ApplicationErrorCode.QUERY_VALIDATION_FAILED,
        ...     message="Unknown invoice status 'settled'",
        ...     domain_error=ValidationError(
        ...         code=ErrorCode.INVALID_INPUT,
        ...         message="Unknown invoice status 'settled'",
        ...         field="status",
        ...     ),
        ... )

        Built by ErrorResponseBuilder.to_application_error from a
        ProjectError:

        >>> ApplicationError(
        ...     code=ApplicationErrorCode.COMMAND_VALIDATION_FAILED,
        ...     message="Project limit reached (20 for plan STANDARD)",
        ...     domain_error=project_error,
        ...     details={"plan_tier": "STANDARD", "limit": "20"},
        ... )
    """

    code: ApplicationErrorCode
    message: str
    domain_error: DomainError | None = None
    details: dict[str, str] | None = None
