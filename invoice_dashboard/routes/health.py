"""
Health check route.

This endpoint is PUBLIC (no authentication required) and provides a simple
status check for load balancers and deployment verification.
"""

from fastapi import APIRouter

from invoice_dashboard.schemas.health import HealthResponse
from invoice_dashboard.utils.logging import get_logger

logger = get_logger(__name__)

# Mounted at root level in main.py
router = APIRouter()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check endpoint",
    tags=["system"],
    status_code=200,
)
async def health_check() -> HealthResponse:
    """
    Public health check endpoint.

    Example response:
        {
            "status": "ok"
        }
    """
    logger.debug("Health check endpoint called")

    return HealthResponse(status="ok")
