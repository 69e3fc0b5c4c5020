"""Rate limit presets and endpoint rules.

Two-Tier Configuration:
    Tier 1 - Presets (RATE_LIMIT_PRESETS):
        Named limits shared by every endpoint that uses them.
        Example: LOGIN = 5 requests per 15 minutes per IP

    Tier 2 - Endpoint assignment (RATE_LIMIT_RULES):
        Maps "{METHOD} {PATH}" (with {param} placeholders) to a preset.

To Modify Rate Limits:
    ONE endpoint: Change its preset in RATE_LIMIT_RULES
    ALL endpoints using a preset: Change the preset itself

Usage:
    from src.infrastructure.rate_limit.config import match_rule

    matched = match_rule("GET /api/v1/invoices/3f2c...")
    if matched is not None:
        pattern, rule = matched
"""

from src.domain.enums import RateLimitScope
from src.domain.value_objects.rate_limit_rule import RateLimitConfig

MINUTE = 60
HOUR = 60 * MINUTE


# =============================================================================
# Tier 1: Presets
# =============================================================================

LOGIN = RateLimitConfig(max_requests=5, window_seconds=15 * MINUTE)
REFRESH = RateLimitConfig(max_requests=10, window_seconds=1 * MINUTE)
API_GENERAL = RateLimitConfig(
    max_requests=100,
    window_seconds=1 * MINUTE,
    scope=RateLimitScope.USER,
)
STRIPE_CHECKOUT = RateLimitConfig(
    max_requests=10,
    window_seconds=1 * HOUR,
    scope=RateLimitScope.USER,
)
REGISTRATION = RateLimitConfig(max_requests=3, window_seconds=1 * HOUR)

RATE_LIMIT_PRESETS: dict[str, RateLimitConfig] = {
    "LOGIN": LOGIN,
    "REFRESH": REFRESH,
    "API_GENERAL": API_GENERAL,
    "STRIPE_CHECKOUT": STRIPE_CHECKOUT,
    "REGISTRATION": REGISTRATION,
}


# =============================================================================
# Tier 2: Endpoint assignment
# =============================================================================
# Stripe webhooks are not rate limited.

RATE_LIMIT_RULES: dict[str, RateLimitConfig] = {
    # Unauthenticated endpoints (per IP)
    "POST /api/v1/users": REGISTRATION,
    "POST /api/v1/sessions": LOGIN,
    "POST /api/v1/tokens": REFRESH,
    # Authenticated endpoints (per user)
    "GET /api/v1/projects": API_GENERAL,
    "POST /api/v1/projects": API_GENERAL,
    "GET /api/v1/projects/{project_id}": API_GENERAL,
    "PATCH /api/v1/projects/{project_id}": API_GENERAL,
    "DELETE /api/v1/projects/{project_id}": API_GENERAL,
    "GET /api/v1/subscription": API_GENERAL,
    "GET /api/v1/invoices": API_GENERAL,
    "GET /api/v1/invoices/{invoice_id}": API_GENERAL,
    # Endpoints that call the Stripe API on the caller's behalf
    "POST /api/v1/invoices/syncs": STRIPE_CHECKOUT,
    "POST /api/v1/invoices/{invoice_id}/voids": STRIPE_CHECKOUT,
}


# =============================================================================
# Lookup Functions
# =============================================================================


def match_rule(
    endpoint: str,
    rules: dict[str, RateLimitConfig] | None = None,
) -> tuple[str, RateLimitConfig] | None:
    """Find the rule for an endpoint.

    Supports exact match and path parameter patterns (e.g., /invoices/{id}).
    The matched pattern (not the concrete path) is returned so that every
    invoice id shares one counter per caller.

    Args:
        endpoint: Endpoint string (e.g., "GET /api/v1/invoices/123").
        rules: Rule table (defaults to RATE_LIMIT_RULES).

    Returns:
        (pattern, rule) if found, None otherwise.

    Example:
        >>> match_rule("GET /api/v1/invoices/abc-123")
        ('GET /api/v1/invoices/{invoice_id}', RateLimitConfig(max_requests=100, ...))
    """
    table = RATE_LIMIT_RULES if rules is None else rules

    if endpoint in table:
        return endpoint, table[endpoint]

    method, _, path = endpoint.partition(" ")
    if not path:
        return None

    for pattern, rule in table.items():
        pattern_method, _, pattern_path = pattern.partition(" ")
        if method != pattern_method:
            continue
        if _paths_match(path, pattern_path):
            return pattern, rule

    return None


def _paths_match(actual: str, pattern: str) -> bool:
    """Check if actual path matches pattern with placeholders.

    Example:
        >>> _paths_match("/api/v1/invoices/123", "/api/v1/invoices/{id}")
        True
        >>> _paths_match("/api/v1/invoices", "/api/v1/invoices/{id}")
        False
    """
    actual_parts = actual.strip("/").split("/")
    pattern_parts = pattern.strip("/").split("/")

    if len(actual_parts) != len(pattern_parts):
        return False

    for actual_part, pattern_part in zip(actual_parts, pattern_parts, strict=True):
        if pattern_part.startswith("{") and pattern_part.endswith("}"):
            continue  # Placeholder matches anything
        if actual_part != pattern_part:
            return False

    return True
