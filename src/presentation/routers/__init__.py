"""External-facing routers (non-versioned API endpoints).

Routes that are external-facing but not part of the versioned API contract,
such as the root and health endpoints.
"""

from src.presentation.routers.system import system_router

__all__ = ["system_router"]
