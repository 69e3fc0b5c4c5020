"""Error response builder for RFC 7807 Problem Details.

This module provides utilities to build RFC 7807 compliant error responses
from application layer errors, and to lift domain errors returned by
handlers into application errors.

Exports:
    ErrorResponseBuilder: Utility class for building RFC 7807 responses
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse

from src.application.errors import ApplicationError, ApplicationErrorCode
from src.core.config import settings
from src.core.enums import ErrorCode
from src.core.errors import DomainError, ValidationError
from src.presentation.routers.api.v1.errors.problem_details import (
    ErrorDetail,
    ProblemDetails,
)

# Domain error code -> application error code. Unlisted codes are
# treated as execution failures (500).
_DOMAIN_TO_APPLICATION: dict[ErrorCode, ApplicationErrorCode] = {
    ErrorCode.INVOICE_NOT_FOUND: ApplicationErrorCode.NOT_FOUND,
    ErrorCode.SUBSCRIPTION_NOT_FOUND: ApplicationErrorCode.NOT_FOUND,
    ErrorCode.RESOURCE_NOT_FOUND: ApplicationErrorCode.NOT_FOUND,
    ErrorCode.INVOICE_ALREADY_VOID: ApplicationErrorCode.COMMAND_VALIDATION_FAILED,
    ErrorCode.INVOICE_NOT_VOIDABLE: ApplicationErrorCode.COMMAND_VALIDATION_FAILED,
    ErrorCode.VALIDATION_FAILED: ApplicationErrorCode.COMMAND_VALIDATION_FAILED,
    ErrorCode.INVALID_INPUT: ApplicationErrorCode.COMMAND_VALIDATION_FAILED,
    ErrorCode.BILLING_PROVIDER_ERROR: ApplicationErrorCode.EXTERNAL_SERVICE_ERROR,
    ErrorCode.PROJECT_NOT_FOUND: ApplicationErrorCode.NOT_FOUND,
    ErrorCode.PROJECT_LIMIT_REACHED: ApplicationErrorCode.COMMAND_VALIDATION_FAILED,
    ErrorCode.EMAIL_ALREADY_REGISTERED: ApplicationErrorCode.CONFLICT,
    ErrorCode.TOKEN_INVALID: ApplicationErrorCode.UNAUTHORIZED,
    ErrorCode.TOKEN_EXPIRED: ApplicationErrorCode.UNAUTHORIZED,
    ErrorCode.INVALID_CREDENTIALS: ApplicationErrorCode.UNAUTHORIZED,
    ErrorCode.AUTHENTICATION_FAILED: ApplicationErrorCode.UNAUTHORIZED,
}


class ErrorResponseBuilder:
    """Build RFC 7807 Problem Details error responses.

    Converts application layer errors into standardized RFC 7807 JSON responses
    with appropriate HTTP status codes and structured error information.

    Example:
        >>> error = ApplicationError(
        ...     code=ApplicationErrorCode.NOT_FOUND,
        ...     message="Invoice not found",
        ... )
        >>> response = ErrorResponseBuilder.from_application_error(
        ...     error=error,
        ...     request=request,
        ...     trace_id="550e8400-e29b-41d4-a716-446655440000",
        ... )
    """

    @staticmethod
    def from_application_error(
        error: ApplicationError,
        request: Request,
        trace_id: str,
    ) -> JSONResponse:
        """Convert ApplicationError to RFC 7807 JSON response.

        Args:
            error: Application layer error to convert
            request: FastAPI Request object (for instance URL)
            trace_id: Request trace ID for debugging

        Returns:
            JSONResponse with RFC 7807 ProblemDetails content
        """
        status_code = ErrorResponseBuilder._get_status_code(error.code)

        problem = ProblemDetails(
            type=f"{settings.api_base_url}/errors/{error.code.value}",
            title=ErrorResponseBuilder._get_title(error.code),
            status=status_code,
            detail=error.message,
            instance=str(request.url.path),
            errors=None,
            trace_id=trace_id or None,
        )

        if isinstance(error.domain_error, ValidationError) and error.domain_error.field:
            problem.errors = [
                ErrorDetail(
                    field=error.domain_error.field,
                    code=error.domain_error.code.value,
                    message=error.domain_error.message,
                )
            ]

        return JSONResponse(
            status_code=status_code,
            content=problem.model_dump(exclude_none=True),
        )

    @staticmethod
    def from_domain_error(
        error: DomainError,
        request: Request,
        trace_id: str,
    ) -> JSONResponse:
        """Convert a domain error returned by a handler to an RFC 7807 response.

        Args:
            error: Domain error (e.g., BillingError) from a handler Failure.
            request: FastAPI Request object.
            trace_id: Request trace ID for debugging.

        Returns:
            JSONResponse with RFC 7807 ProblemDetails content.

        Example:
            >>> # BillingError(code=ErrorCode.INVOICE_NOT_FOUND, ...) -> 404
        """
        return ErrorResponseBuilder.from_application_error(
            error=ErrorResponseBuilder.to_application_error(error),
            request=request,
            trace_id=trace_id,
        )

    @staticmethod
    def to_application_error(error: DomainError) -> ApplicationError:
        """Wrap a domain error in the matching ApplicationError.

        Args:
            error: Domain error from a handler.

        Returns:
            ApplicationError carrying the original domain error.
        """
        return ApplicationError(
            code=_DOMAIN_TO_APPLICATION.get(
                error.code, ApplicationErrorCode.COMMAND_EXECUTION_FAILED
            ),
            message=error.message,
            domain_error=error,
            details=error.details,
        )

    @staticmethod
    def _get_status_code(code: ApplicationErrorCode) -> int:
        """Map application error code to HTTP status code.

        Args:
            code: Application error code

        Returns:
            HTTP status code (400-599)

        Example:
            >>> ErrorResponseBuilder._get_status_code(
            ...     ApplicationErrorCode.NOT_FOUND
            ... )
            404
        """
        mapping = {
            ApplicationErrorCode.COMMAND_VALIDATION_FAILED: status.HTTP_400_BAD_REQUEST,
            ApplicationErrorCode.QUERY_VALIDATION_FAILED: status.HTTP_400_BAD_REQUEST,
            ApplicationErrorCode.COMMAND_EXECUTION_FAILED: status.HTTP_500_INTERNAL_SERVER_ERROR,
            ApplicationErrorCode.QUERY_FAILED: status.HTTP_500_INTERNAL_SERVER_ERROR,
            ApplicationErrorCode.QUERY_EXECUTION_FAILED: status.HTTP_500_INTERNAL_SERVER_ERROR,
            ApplicationErrorCode.EXTERNAL_SERVICE_ERROR: status.HTTP_502_BAD_GATEWAY,
            ApplicationErrorCode.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
            ApplicationErrorCode.FORBIDDEN: status.HTTP_403_FORBIDDEN,
            ApplicationErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
            ApplicationErrorCode.CONFLICT: status.HTTP_409_CONFLICT,
            ApplicationErrorCode.RATE_LIMIT_EXCEEDED: status.HTTP_429_TOO_MANY_REQUESTS,
        }
        return mapping.get(code, status.HTTP_500_INTERNAL_SERVER_ERROR)

    @staticmethod
    def _get_title(code: ApplicationErrorCode) -> str:
        """Get human-readable title for application error code."""
        mapping = {
            ApplicationErrorCode.COMMAND_VALIDATION_FAILED: "Validation Failed",
            ApplicationErrorCode.QUERY_VALIDATION_FAILED: "Validation Failed",
            ApplicationErrorCode.COMMAND_EXECUTION_FAILED: "Command Execution Failed",
            ApplicationErrorCode.QUERY_FAILED: "Query Failed",
            ApplicationErrorCode.QUERY_EXECUTION_FAILED: "Query Execution Failed",
            ApplicationErrorCode.EXTERNAL_SERVICE_ERROR: "External Service Error",
            ApplicationErrorCode.UNAUTHORIZED: "Authentication Required",
            ApplicationErrorCode.FORBIDDEN: "Access Denied",
            ApplicationErrorCode.NOT_FOUND: "Resource Not Found",
            ApplicationErrorCode.CONFLICT: "Resource Conflict",
            ApplicationErrorCode.RATE_LIMIT_EXCEEDED: "Rate Limit Exceeded",
        }
        return mapping.get(code, "Internal Server Error")
