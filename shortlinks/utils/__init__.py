"""Utils package for URL Shortener Service."""

from .shortener import (
    generate_short_code,
    validate_short_code,
    normalize_url,
    is_valid_url,
    is_url_expired,
    as_utc,
    create_short_url,
)
from .qr import render_qr_png

__all__ = [
    "generate_short_code",
    "validate_short_code",
    "normalize_url",
    "is_valid_url",
    "is_url_expired",
    "as_utc",
    "create_short_url",
    "render_qr_png",
]
