"""Global exception handlers for FastAPI application.

This module provides exception handlers that catch unhandled exceptions
and convert them to RFC 7807 Problem Details responses.

Handlers:
    http_exception_handler: Converts HTTPException to RFC 7807 format
    validation_exception_handler: Converts RequestValidationError to RFC 7807 format
    generic_exception_handler: Catches all unhandled exceptions

Exports:
    register_exception_handlers: Register all exception handlers with FastAPI app
"""

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.core.config import settings
from src.presentation.routers.api.middleware.trace_middleware import get_trace_id
from src.presentation.routers.api.v1.errors.problem_details import (
    ErrorDetail,
    ProblemDetails,
)


# HTTP status code to (title, slug) mapping for RFC 7807
_HTTP_STATUS_INFO: dict[int, tuple[str, str]] = {
    400: ("Bad Request", "bad-request"),
    401: ("Authentication Required", "unauthorized"),
    403: ("Access Denied", "forbidden"),
    404: ("Resource Not Found", "not-found"),
    405: ("Method Not Allowed", "method-not-allowed"),
    409: ("Resource Conflict", "conflict"),
    415: ("Unsupported Media Type", "unsupported-media-type"),
    422: ("Validation Failed", "validation-failed"),
    429: ("Too Many Requests", "rate-limit-exceeded"),
    500: ("Internal Server Error", "internal-server-error"),
    502: ("Bad Gateway", "bad-gateway"),
    503: ("Service Unavailable", "service-unavailable"),
}


def _get_status_title(status_code: int) -> str:
    """Get human-readable title for HTTP status code."""
    return _HTTP_STATUS_INFO.get(status_code, ("Error", "error"))[0]


def _get_error_slug(status_code: int) -> str:
    """Get kebab-case error slug for RFC 7807 type URL."""
    return _HTTP_STATUS_INFO.get(status_code, ("Error", "error"))[1]


def _request_trace_id(request: Request) -> str | None:
    return getattr(request.state, "trace_id", None) or get_trace_id()


async def http_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Convert HTTPException to RFC 7807 Problem Details response.

    Auth dependencies raise HTTPException(401); this keeps those responses
    in the same shape as handler failures.

    Args:
        request: FastAPI Request object.
        exc: HTTPException raised by handler or dependency.

    Returns:
        JSONResponse with RFC 7807 ProblemDetails.

    Example:
        >>> raise HTTPException(status_code=401, detail="Invalid token")
        >>> # {
        >>> #   "type": "https://api.cloudvault.example/errors/unauthorized",
        >>> #   "title": "Authentication Required",
        >>> #   "status": 401,
        >>> #   "detail": "Invalid token",
        >>> #   "instance": "/api/v1/invoices",
        >>> #   "trace_id": "..."
        >>> # }
    """
    # Type narrowing: FastAPI registers this handler only for HTTPException
    assert isinstance(exc, HTTPException)

    problem = ProblemDetails(
        type=f"{settings.api_base_url}/errors/{_get_error_slug(exc.status_code)}",
        title=_get_status_title(exc.status_code),
        status=exc.status_code,
        detail=exc.detail if isinstance(exc.detail, str) else str(exc.detail),
        instance=str(request.url.path),
        errors=None,
        trace_id=_request_trace_id(request),
    )

    # Preserve any headers from HTTPException (e.g., WWW-Authenticate)
    headers = getattr(exc, "headers", None)

    return JSONResponse(
        status_code=exc.status_code,
        content=problem.model_dump(exclude_none=True),
        headers=headers,
    )


async def validation_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Convert RequestValidationError to RFC 7807 Problem Details response.

    Args:
        request: FastAPI Request object.
        exc: RequestValidationError from Pydantic validation.

    Returns:
        JSONResponse with RFC 7807 ProblemDetails including field errors.

    Example:
        >>> # GET /api/v1/invoices?limit=abc
        >>> # {
        >>> #   "title": "Validation Failed",
        >>> #   "status": 422,
        >>> #   "errors": [
        >>> #     {"field": "query.limit", "code": "int_parsing", "message": "..."}
        >>> #   ],
        >>> #   ...
        >>> # }
    """
    # Type narrowing: FastAPI registers this handler only for RequestValidationError
    assert isinstance(exc, RequestValidationError)

    field_errors: list[ErrorDetail] = []
    for error in exc.errors():
        # ["body", "limit"] -> "limit"
        loc = error.get("loc", [])
        field_parts = [str(p) for p in loc if p != "body"]
        field_name = ".".join(field_parts) if field_parts else "unknown"

        field_errors.append(
            ErrorDetail(
                field=field_name,
                code=error.get("type", "validation_error"),
                message=error.get("msg", "Validation failed"),
            )
        )

    problem = ProblemDetails(
        type=f"{settings.api_base_url}/errors/validation-failed",
        title="Validation Failed",
        status=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail="Request validation failed. Check 'errors' for details.",
        instance=str(request.url.path),
        errors=field_errors if field_errors else None,
        trace_id=_request_trace_id(request),
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=problem.model_dump(exclude_none=True),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected Python exceptions.

    Converts any unhandled exception into an RFC 7807 500 response without
    leaking stack traces or internal details to API consumers.

    Args:
        request: FastAPI Request object
        exc: Unhandled exception

    Returns:
        JSONResponse with RFC 7807 ProblemDetails (500 Internal Server Error)
    """
    from src.core.container import get_logger

    trace_id = _request_trace_id(request)

    get_logger().error(
        "Unhandled exception",
        error=exc,
        trace_id=trace_id,
        request_path=request.url.path,
        request_method=request.method,
    )

    problem = ProblemDetails(
        type=f"{settings.api_base_url}/errors/internal-server-error",
        title="Internal Server Error",
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="An unexpected error occurred. Please contact support with the trace ID.",
        instance=str(request.url.path),
        errors=None,
        trace_id=trace_id,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=problem.model_dump(exclude_none=True),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with FastAPI application.

    Args:
        app: FastAPI application instance

    Example:
        >>> from fastapi import FastAPI
        >>> app = FastAPI()
        >>> register_exception_handlers(app)
    """
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
