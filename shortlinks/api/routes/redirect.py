"""Public short link redirect route.

Registered after every other router so that /api/... and / are matched first.
"""

import html
import logging
from datetime import datetime

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse, RedirectResponse

from ...core.errors import ExpiredError, NotFoundError
from ...services.link_service import LinkService, get_link_service
from ...utils.shortener import as_utc, validate_short_code

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Redirect"])

PAGE_STYLE = """
    body { font-family: Arial, sans-serif; display: flex; justify-content: center; align-items: center; height: 100vh; margin: 0; background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); }
    .container { background: white; padding: 40px; border-radius: 8px; text-align: center; box-shadow: 0 10px 25px rgba(0,0,0,0.2); }
    h1 { color: #d32f2f; margin: 0 0 10px 0; }
    p { color: #666; margin: 10px 0; }
    .expiry-time { color: #999; font-size: 14px; margin-top: 20px; }
"""


def render_error_page(title: str, message: str, extra: str = "") -> str:
    """Build the HTML page shown for unknown or expired links."""
    return f"""<!DOCTYPE html>
<html>
<head>
  <title>{html.escape(title)}</title>
  <style>{PAGE_STYLE}</style>
</head>
<body>
  <div class="container">
    <h1>{html.escape(title)}</h1>
    <p>{html.escape(message)}</p>
    {extra}
  </div>
</body>
</html>
"""


def not_found_page() -> HTMLResponse:
    content = render_error_page("Not Found", "This shortened URL does not exist.")
    return HTMLResponse(content=content, status_code=404)


def expired_page(expires_at: datetime) -> HTMLResponse:
    expired_text = as_utc(expires_at).strftime("%Y-%m-%d %H:%M:%S UTC")
    content = render_error_page(
        "Link Expired",
        "This shortened URL has expired and is no longer accessible.",
        extra=f'<p class="expiry-time">Expired at: {html.escape(expired_text)}</p>',
    )
    return HTMLResponse(content=content, status_code=410)


@router.get(
    "/{short_code}",
    status_code=302,
    responses={
        302: {"description": "Redirect to original URL"},
        404: {"content": {"text/html": {}}, "description": "Short URL not found"},
        410: {"content": {"text/html": {}}, "description": "Short URL expired"},
    },
    summary="Redirect to original URL",
)
async def redirect_to_url(
    short_code: str,
    service: LinkService = Depends(get_link_service),
):
    """Redirect to the original URL and count the click.

    Args:
        short_code: The short URL code.
        service: Link service instance.

    Returns:
        Redirect response, or an HTML error page.
    """
    if not validate_short_code(short_code):
        return not_found_page()

    try:
        link = service.resolve_short_link(short_code)
    except NotFoundError:
        return not_found_page()
    except ExpiredError as e:
        return expired_page(e.expires_at)

    service.increment_click_count(short_code)
    logger.info(f"Redirecting {short_code} -> {link.original_url}")
    return RedirectResponse(url=link.original_url, status_code=302)
