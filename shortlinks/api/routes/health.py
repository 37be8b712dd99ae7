"""Health check API routes."""

from fastapi import APIRouter

from ...core.config import settings
from ...schemas.url import HealthResponse

router = APIRouter(tags=["Health"])


@router.get("/", response_model=HealthResponse, summary="Health check")
async def health_check() -> dict:
    """Health check endpoint.

    Returns:
        Health status and where the API lives.
    """
    return {
        "status": "ok",
        "service": settings.app_title,
        "message": f"API endpoints available under {settings.public_base_url}/api",
    }
