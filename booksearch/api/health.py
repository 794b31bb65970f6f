"""
Booksearch - Health API Routes

Patterns Applied:
- Health Check Pattern with a HealthService class
- Pydantic response models

Anti-Patterns Avoided:
- Bare except clauses
- Missing response models
"""

from typing import Any

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from booksearch import __version__
from booksearch.core.logging import SERVICE_NAME, get_logger

router = APIRouter(tags=["health"])

logger = get_logger(__name__)


# =============================================================================
# Response Models
# =============================================================================


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str
    version: str
    service: str


class ReadinessResponse(BaseModel):
    """Readiness check response model.

    Returns 503 until the search engine has been built by the lifespan handler.
    """
    status: str
    checks: dict[str, bool]


# =============================================================================
# Health Service
# =============================================================================


class HealthService:
    """Service class for health check operations."""

    def __init__(self, version: str = __version__):
        """Initialize health service.

        Args:
            version: Service version string
        """
        self._version = version
        self._engine_ready = False

    def check_health(self) -> dict[str, Any]:
        """Check basic service health.

        Returns:
            Health status dictionary with status, version, service
        """
        return {
            "status": "healthy",
            "version": self._version,
            "service": SERVICE_NAME,
        }

    def check_readiness(self) -> tuple[dict[str, Any], bool]:
        """Check if service is ready to accept search requests.

        Returns:
            Tuple of (readiness dict, is_ready bool)
        """
        checks = {
            "engine_ready": self._engine_ready,
        }

        is_ready = all(checks.values())

        result: dict[str, Any] = {
            "status": "ready" if is_ready else "not_ready",
            "checks": checks,
        }

        return result, is_ready

    def set_engine_ready(self, ready: bool) -> None:
        """Set search engine readiness.

        Called by the lifespan handler on startup and shutdown.

        Args:
            ready: Whether the search engine is available
        """
        self._engine_ready = ready


_health_service = HealthService()


def get_health_service() -> HealthService:
    """Get health service instance."""
    return _health_service


# =============================================================================
# Endpoints
# =============================================================================


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="Basic health check endpoint for liveness probe",
)
async def health_check() -> HealthResponse:
    """Health check endpoint (liveness probe)."""
    service = get_health_service()
    data = service.check_health()
    logger.debug("health_check", status=data["status"])
    return HealthResponse(**data)


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={
        200: {"description": "Service is ready"},
        503: {"description": "Service is not ready"},
    },
    summary="Readiness Check",
    description="Readiness check endpoint for readiness probes",
)
async def readiness_check() -> JSONResponse:
    """Readiness check endpoint.

    Returns:
        200 if ready, 503 if not ready
    """
    service = get_health_service()
    data, is_ready = service.check_readiness()

    status_code = status.HTTP_200_OK if is_ready else status.HTTP_503_SERVICE_UNAVAILABLE

    logger.debug("readiness_check", status=data["status"], is_ready=is_ready)
    return JSONResponse(content=data, status_code=status_code)
