"""URL shortening utilities module.

This module handles the generation and validation of short codes
and the shape-level checks applied to submitted URLs.
"""

import re
import secrets
import string
from datetime import datetime, timezone
from typing import Iterable, Optional
from urllib.parse import urlparse
import logging

from ..core.config import settings

logger = logging.getLogger(__name__)


# Characters used for generated short codes
ALPHABET = string.ascii_letters + string.digits

# Characters accepted in a short code path segment
SHORT_CODE_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")

MAX_URL_LENGTH = 2048


def generate_short_code(length: Optional[int] = None) -> str:
    """Generate a random short code.

    Args:
        length: Length of the generated code. Defaults to settings value.

    Returns:
        Random short code string.
    """
    length = length or settings.short_code_length
    return "".join(secrets.choice(ALPHABET) for _ in range(length))


def validate_short_code(code: str) -> bool:
    """Validate short code format.

    Args:
        code: Short code to validate.

    Returns:
        True if valid, False otherwise.
    """
    if not code:
        return False
    if len(code) < settings.min_short_code_length or len(code) > settings.max_short_code_length:
        return False
    return bool(SHORT_CODE_PATTERN.match(code))


def normalize_url(url: Optional[str]) -> str:
    """Strip surrounding whitespace from a submitted URL."""
    return (url or "").strip()


def _host_matches(host: str, blocked: str) -> bool:
    blocked = blocked.lower()
    return host == blocked or host.endswith("." + blocked)


def is_valid_url(
    url: str,
    base_url: Optional[str] = None,
    blocked_hosts: Iterable[str] = (),
) -> bool:
    """Check that a URL can be shortened.

    The URL must be an absolute http(s) URL with a host, and must not point
    back at this service or at one of the blocked hosts.

    Args:
        url: Trimmed URL to check.
        base_url: Public base URL of this service.
        blocked_hosts: Host names that may not be shortened.

    Returns:
        True if the URL is acceptable, False otherwise.
    """
    if not url or len(url) > MAX_URL_LENGTH:
        return False
    if any(ch.isspace() for ch in url):
        return False
    try:
        parsed = urlparse(url)
        host = parsed.hostname
    except ValueError:
        return False
    if parsed.scheme not in ("http", "https") or not host:
        return False

    host = host.lower()
    if base_url:
        own_host = urlparse(base_url).hostname
        if own_host and host == own_host.lower():
            return False
    if any(_host_matches(host, blocked) for blocked in blocked_hosts):
        return False
    return True


def as_utc(value: datetime) -> datetime:
    """Return an aware UTC datetime; naive values are taken to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def is_url_expired(expires_at: Optional[datetime], now: Optional[datetime] = None) -> bool:
    """Check if URL has expired.

    Args:
        expires_at: Expiration timestamp, or None for links that never expire.
        now: Reference time. Defaults to the current UTC time.

    Returns:
        True if expired, False otherwise.
    """
    if expires_at is None:
        return False
    now = as_utc(now) if now else datetime.now(timezone.utc)
    return now > as_utc(expires_at)


def create_short_url(base_url: str, short_code: str) -> str:
    """Create full short URL from base URL and short code.

    Args:
        base_url: Base URL of the service.
        short_code: Short code.

    Returns:
        Full short URL string.
    """
    return f"{base_url.rstrip('/')}/{short_code}"
