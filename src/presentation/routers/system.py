"""System router for non-versioned application endpoints.

Provides root and health endpoints that are not part of the versioned API
contract. Both bypass rate limiting.
"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from src.core.config import settings


system_router = APIRouter(tags=["System"])


@system_router.get("/")
async def root() -> dict[str, str]:
    """Root endpoint - basic status check.

    Returns:
        dict[str, str]: Service name, status and version.
    """
    return {
        "message": settings.app_name,
        "status": "operational",
        "version": settings.app_version,
    }


@system_router.get("/health")
async def health() -> JSONResponse:
    """Health check endpoint for monitoring and load balancers.

    Reports 503 when the database is unreachable.

    Returns:
        JSONResponse: Health status with database connectivity.
    """
    from src.core.container import get_database

    database_ok = await get_database().check_connection()
    return JSONResponse(
        status_code=status.HTTP_200_OK
        if database_ok
        else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "healthy" if database_ok else "degraded",
            "database": "ok" if database_ok else "unavailable",
        },
    )
