"""RFC 7807 response body for every CloudVault API error.

Both ErrorResponseBuilder (handler Failures) and the app-level exception
handlers (request validation, auth, unhandled) serialize this model with
`exclude_none=True`. The rate limit middleware writes the same fields plus
`retry_after` for 429 responses.

For handler Failures `type` is `{API_BASE_URL}/errors/{application error
code}`; the app-level handlers use a status slug instead (`validation-failed`,
`unauthorized`). Field-level problems (bad query parameters, request
body validation) are listed in `errors`.

RFC 7807: https://tools.ietf.org/html/rfc7807
"""

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """One offending input field.

    Example:
        >>> ErrorDetail(
        ...     field="status",
        ...     code="invalid_input",
        ...     message="Unknown project status 'paused'",
        ... )
    """

    field: str = Field(..., description="Field name")
    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")


class ProblemDetails(BaseModel):
    """Problem Details body.

    Attributes:
        type: Error type URI (ends with the application error code).
        title: Summary of the error type, e.g. "Resource Conflict".
        status: HTTP status.
        detail: Message of the underlying domain error.
        instance: Request path.
        errors: Field errors, only for validation failures.
        trace_id: Request trace id (also in the X-Trace-Id header).

    Examples:
        Project cap reached on POST /api/v1/projects:

        >>> ProblemDetails(
        ...     type="https://api.cloudvault.example/errors/command_validation_failed",
        ...     title="Validation Failed",
        ...     status=400,
        ...     detail="Project limit reached (3 for plan FREE)",
        ...     instance="/api/v1/projects",
        ... )

        Voiding an invoice that Stripe already marked uncollectible:

        >>> ProblemDetails(
        ...     type="https://api.cloudvault.example/errors/command_validation_failed",
        ...     title="Validation Failed",
        ...     status=400,
        ...     detail="Invoices with status UNCOLLECTIBLE cannot be voided",
        ...     instance="/api/v1/invoices/5b1e.../voids",
        ...     trace_id="550e8400-e29b-41d4-a716-446655440000",
        ... )
    """

    type: str = Field(
        ...,
        description="URI reference identifying the problem type",
        examples=["https://api.cloudvault.example/errors/not_found"],
    )
    title: str = Field(
        ...,
        description="Short, human-readable summary",
        examples=["Resource Not Found"],
    )
    status: int = Field(
        ...,
        description="HTTP status code",
        examples=[404],
    )
    detail: str = Field(
        ...,
        description="Human-readable explanation",
        examples=["Project not found"],
    )
    instance: str = Field(
        ...,
        description="Request path of this occurrence",
        examples=["/api/v1/projects/0b7c9f4e-2d1a-4c7e-9a55-3f0e6d2b8c11"],
    )
    errors: list[ErrorDetail] | None = Field(
        None,
        description="Field-specific errors (validation failures only)",
    )
    trace_id: str | None = Field(
        None,
        description="Request trace ID for debugging",
    )
