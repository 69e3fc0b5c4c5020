"""Rate limit middleware for FastAPI.

This middleware intercepts HTTP requests and applies fixed-window rate
limiting based on the endpoint rules. It handles:
- IP-scoped limits for unauthenticated endpoints
- User-scoped limits for authenticated endpoints (owner id from a valid JWT,
  client IP when the request carries none)
- HTTP 429 responses with Retry-After and RFC 7807 body

Store failures are resolved inside the limiter by its failure policy, so the
middleware always receives a decision.

Usage:
    from src.presentation.routers.api.middleware.rate_limit_middleware import (
        RateLimitMiddleware,
    )

    app.add_middleware(RateLimitMiddleware)
"""

import math
from typing import TYPE_CHECKING, Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

from src.core.config import settings
from src.core.result import Success
from src.domain.enums import RateLimitScope
from src.infrastructure.rate_limit.config import match_rule

if TYPE_CHECKING:
    from src.domain.protocols import RateLimitProtocol
    from src.domain.protocols.logger_protocol import LoggerProtocol
    from src.domain.protocols.token_validation_protocol import (
        TokenValidationProtocol,
    )

# Client address headers, most specific proxy first
_CLIENT_IP_HEADERS = (
    "X-Vercel-Forwarded-For",
    "X-Forwarded-For",
    "X-Real-IP",
    "CF-Connecting-IP",
)

_SKIP_PREFIXES = (
    "/health",
    "/docs",
    "/redoc",
    "/openapi.json",
    "/favicon.ico",
)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Starlette middleware for rate limiting HTTP requests.

    Response Headers:
        - X-RateLimit-Limit: Requests admitted per window
        - X-RateLimit-Remaining: Requests left in the window
        - X-RateLimit-Reset: Epoch seconds at which the window ends
        - Retry-After: Seconds until retry allowed (429 only)

    Attributes:
        _token_service: Token validator for user-scoped keys (lazy loaded).
        _logger: LoggerProtocol for structured logging (lazy loaded).
    """

    def __init__(self, app: ASGIApp) -> None:
        """Initialize rate limit middleware.

        Args:
            app: The ASGI application to wrap.
        """
        super().__init__(app)
        self._token_service: TokenValidationProtocol | None = None
        self._logger: LoggerProtocol | None = None

    def _get_rate_limit(self) -> "RateLimitProtocol":
        # Resolved per request; the container caches the instance.
        from src.core.container import get_rate_limit

        return get_rate_limit()

    def _get_token_service(self) -> "TokenValidationProtocol":
        if self._token_service is None:
            from src.core.container import get_token_service

            self._token_service = get_token_service()
        return self._token_service

    def _get_logger(self) -> "LoggerProtocol":
        if self._logger is None:
            from src.core.container import get_logger

            self._logger = get_logger()
        return self._logger

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Intercept request and apply rate limit.

        Args:
            request: Incoming HTTP request.
            call_next: Next handler in middleware chain.

        Returns:
            Response: Either rate limit error (429) or downstream response.
        """
        path = request.url.path
        if self._should_skip(path):
            return await call_next(request)

        matched = match_rule(f"{request.method} {path}")
        if matched is None:
            return await call_next(request)

        pattern, rule = matched
        if not rule.enabled:
            return await call_next(request)

        identifier = self._extract_identifier(request, rule.scope)
        key = rule.build_key(identifier=identifier, endpoint=pattern)

        result = await self._get_rate_limit().check(key, rule)
        match result:
            case Success(value=decision):
                pass
            case _:
                # The limiter resolves store errors itself; a Failure here
                # means a broken adapter.
                self._get_logger().warning(
                    "Rate limit check returned failure",
                    key=key,
                    endpoint=pattern,
                )
                return await call_next(request)

        reset_epoch = str(math.ceil(decision.reset_at))

        if not decision.allowed:
            return self._build_429_response(
                request=request,
                retry_after=decision.retry_after_seconds or 1,
                limit=decision.limit,
                reset_epoch=reset_epoch,
            )

        response = await call_next(request)
        response.headers["X-RateLimit-Limit"] = str(decision.limit)
        response.headers["X-RateLimit-Remaining"] = str(decision.remaining)
        response.headers["X-RateLimit-Reset"] = reset_epoch
        return response

    def _should_skip(self, path: str) -> bool:
        """Health checks, docs and the Stripe webhook bypass rate limiting."""
        if path == "/" or path.startswith(_SKIP_PREFIXES):
            return True
        return path == f"{settings.api_v1_prefix}/stripe/webhooks"

    def _extract_identifier(self, request: Request, scope: RateLimitScope) -> str:
        """Extract rate limit identifier based on scope.

        Args:
            request: HTTP request.
            scope: Rule scope.

        Returns:
            Identifier string for the rate limit key.
        """
        if scope == RateLimitScope.GLOBAL:
            return "global"

        client_ip = self._get_client_ip(request)
        if scope == RateLimitScope.IP:
            return client_ip

        owner_id = self._extract_owner_id(request)
        return owner_id if owner_id else client_ip

    def _get_client_ip(self, request: Request) -> str:
        """Extract client IP address from request.

        Forwarding headers may carry a proxy chain; the first hop is the
        client.

        Args:
            request: HTTP request.

        Returns:
            Client IP address, or "unknown".
        """
        for header in _CLIENT_IP_HEADERS:
            value = request.headers.get(header)
            if value:
                first_hop = value.split(",")[0].strip()
                if first_hop:
                    return first_hop

        if request.client:
            return request.client.host

        return "unknown"

    def _extract_owner_id(self, request: Request) -> str | None:
        """Owner id from a valid bearer token, None otherwise."""
        auth_header = request.headers.get("Authorization")
        if not auth_header or not auth_header.startswith("Bearer "):
            return None

        result = self._get_token_service().validate_access_token(auth_header[7:])
        match result:
            case Success(value=owner_id):
                return owner_id
            case _:
                return None

    def _build_429_response(
        self,
        request: Request,
        retry_after: int,
        limit: int,
        reset_epoch: str,
    ) -> JSONResponse:
        """Build HTTP 429 rate limit response (RFC 7807 body).

        Args:
            request: Original request.
            retry_after: Whole seconds until retry allowed (>= 1).
            limit: Requests admitted per window.
            reset_epoch: Epoch seconds at which the window ends.

        Returns:
            JSONResponse with 429 status and rate limit headers.
        """
        content = {
            "type": f"{settings.api_base_url}/errors/rate-limit-exceeded",
            "title": "Rate Limit Exceeded",
            "status": 429,
            "detail": f"Too many requests. Please try again in {retry_after} seconds.",
            "instance": request.url.path,
            "retry_after": retry_after,
        }
        trace_id = getattr(request.state, "trace_id", None)
        if trace_id:
            content["trace_id"] = trace_id

        return JSONResponse(
            status_code=429,
            content=content,
            headers={
                "Retry-After": str(retry_after),
                "X-RateLimit-Limit": str(limit),
                "X-RateLimit-Remaining": "0",
                "X-RateLimit-Reset": reset_epoch,
            },
        )
