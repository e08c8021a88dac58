"""
Health check route for the Testimonial Curation backend.

This endpoint is PUBLIC and provides a simple status check for load
balancers, monitoring, and deployment verification. It never calls the
ranking service.
"""

from fastapi import APIRouter

from curation_backend.config import settings
from curation_backend.schemas.health import HealthResponse
from curation_backend.utils.logging import get_logger

logger = get_logger(__name__)

# Create router with no prefix (mounted at root level in main.py)
router = APIRouter()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check endpoint",
    description=(
        "Public health check endpoint. "
        "Returns a simple status indicator for monitoring and load balancing."
    ),
    status_code=200,
    tags=["system"],
)
async def health_check() -> HealthResponse:
    """
    Public health check endpoint.

    Example response:
        {
            "status": "ok",
            "service": "testimonial-curation-backend",
            "ai_curation_enabled": true
        }
    """
    logger.debug("Health check endpoint called")

    return HealthResponse(status="ok", ai_curation_enabled=settings.CURATION_AI_ENABLED)
