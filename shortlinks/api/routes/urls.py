"""Short link API routes.

This module contains the JSON and image endpoints under /api:
- Create short URL (POST /api/shorten)
- Get link statistics (GET /api/stats/{short_code})
- Render QR code (GET /api/qr/{short_code})
- List all links (GET /api/debug/urls)
"""

import logging

from fastapi import APIRouter, HTTPException, Depends
from fastapi.responses import Response

from ...core.errors import InvalidInputError, NotFoundError, StoreFailureError
from ...models.url import ShortenRequest, ErrorResponse
from ...schemas.url import ShortenResponse, StatsResponse, DebugURLEntry
from ...services.link_service import LinkService, get_link_service
from ...utils.qr import render_qr_png
from ...utils.shortener import validate_short_code

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["URLs"])


@router.post(
    "/shorten",
    response_model=ShortenResponse,
    responses={
        200: {"description": "Short URL created or reused"},
        400: {"model": ErrorResponse, "description": "Invalid URL"},
        500: {"model": ErrorResponse, "description": "Failed to shorten"},
    },
    summary="Create a short URL",
    description="Shorten a long URL. Submitting an already shortened URL returns its existing code.",
)
async def shorten_url(
    url_data: ShortenRequest,
    service: LinkService = Depends(get_link_service),
) -> ShortenResponse:
    """Create a short URL from a long URL.

    Args:
        url_data: URL creation data.
        service: Link service instance.

    Returns:
        Short URL and short code.
    """
    try:
        link = service.create_short_link(url_data.url, url_data.expires_at)
    except InvalidInputError:
        raise HTTPException(status_code=400, detail="Invalid URL")
    except StoreFailureError as e:
        logger.error(f"Error creating short URL: {e}")
        raise HTTPException(status_code=500, detail="Failed to shorten")

    return ShortenResponse(
        short_url=service.build_short_url(link.short_code),
        short_code=link.short_code,
    )


@router.get(
    "/stats/{short_code}",
    response_model=StatsResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Short URL not found"},
    },
    summary="Get link statistics",
)
async def get_stats(
    short_code: str,
    service: LinkService = Depends(get_link_service),
) -> StatsResponse:
    """Get click count and timestamps for a short code.

    Args:
        short_code: The short URL code.
        service: Link service instance.

    Returns:
        Link statistics.
    """
    if not validate_short_code(short_code):
        raise HTTPException(status_code=404, detail="Not found")
    try:
        link = service.get_stats(short_code)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Not found")
    return StatsResponse(**link.model_dump())


@router.get(
    "/qr/{short_code}",
    response_class=Response,
    responses={
        200: {"content": {"image/png": {}}, "description": "QR code for the short URL"},
        404: {"model": ErrorResponse, "description": "Malformed short code"},
    },
    summary="QR code for a short URL",
)
async def get_qr_code(
    short_code: str,
    service: LinkService = Depends(get_link_service),
) -> Response:
    """Render a PNG QR code encoding the full short URL."""
    if not validate_short_code(short_code):
        raise HTTPException(status_code=404, detail="Not found")
    png = render_qr_png(service.build_short_url(short_code))
    return Response(content=png, media_type="image/png")


@router.get(
    "/debug/urls",
    response_model=list[DebugURLEntry],
    summary="List all short links",
)
async def list_urls(
    service: LinkService = Depends(get_link_service),
) -> list[DebugURLEntry]:
    """List every stored short code with its original URL, expired ones included."""
    return [
        DebugURLEntry(short_code=link.short_code, original_url=link.original_url)
        for link in service.list_links()
    ]
