"""Business logic for short links.

Creation with deduplication, resolution with expiration checks, click
counting and statistics. Routers call this layer and translate the
exceptions from ``core.errors`` into HTTP responses.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import Depends

from ..core.config import Settings, settings as default_settings
from ..core.database import Database, get_db
from ..core.errors import (
    DuplicateRecordError,
    ExpiredError,
    InvalidInputError,
    NotFoundError,
    StoreFailureError,
)
from ..models.url import ShortLink
from ..utils.shortener import (
    as_utc,
    create_short_url,
    generate_short_code,
    is_url_expired,
    is_valid_url,
    normalize_url,
)

logger = logging.getLogger(__name__)


class LinkService:
    """Service layer over the short link store."""

    def __init__(self, db: Database, settings: Optional[Settings] = None):
        """Initialize the service.

        Args:
            db: Store handle used for every read and write.
            settings: Application settings. Defaults to the global settings.
        """
        self.db = db
        self.settings = settings or default_settings

    def create_short_link(self, url: str, expires_at: Optional[datetime] = None) -> ShortLink:
        """Return the short link for ``url``, creating it if needed.

        If the trimmed URL is already stored, the existing record is returned
        unchanged and ``expires_at`` is ignored.

        Args:
            url: Absolute http(s) URL to shorten.
            expires_at: Optional expiration timestamp.

        Returns:
            The existing or newly created record.

        Raises:
            InvalidInputError: The URL is malformed or points at a blocked host.
            StoreFailureError: The store failed or no free code was found.
        """
        original_url = normalize_url(url)
        if not is_valid_url(
            original_url,
            base_url=self.settings.public_base_url,
            blocked_hosts=self.settings.blocked_hosts,
        ):
            logger.warning(f"Rejected URL: {original_url!r}")
            raise InvalidInputError("Invalid URL")

        existing = self.db.get_url_by_original(original_url)
        if existing:
            logger.info(f"Reusing short code {existing['short_code']} for {original_url}")
            return ShortLink.model_validate(existing)

        if expires_at is not None:
            expires_at = as_utc(expires_at)

        for _ in range(self.settings.max_code_attempts):
            short_code = generate_short_code(self.settings.short_code_length)
            if self.db.url_exists(short_code):
                logger.info(f"Short code collision on {short_code}, regenerating")
                continue
            try:
                row = self.db.create_url(
                    original_url,
                    short_code,
                    created_at=datetime.now(timezone.utc),
                    expires_at=expires_at,
                )
            except DuplicateRecordError as e:
                if e.field == "original_url":
                    # Another request stored the same URL between our lookup and insert
                    winner = self.db.get_url_by_original(original_url)
                    if winner:
                        return ShortLink.model_validate(winner)
                    raise
                logger.info(f"Short code collision on {short_code}, regenerating")
                continue
            logger.info(f"Created short link {short_code} -> {original_url}")
            return ShortLink.model_validate(row)

        logger.error(
            f"Failed to generate unique short code after {self.settings.max_code_attempts} attempts"
        )
        raise StoreFailureError("Failed to generate unique short code")

    def resolve_short_link(self, code: str) -> ShortLink:
        """Look up a short code for redirection.

        Does not count the click; callers invoke ``increment_click_count``
        after a successful resolution.

        Raises:
            NotFoundError: No record matches ``code``.
            ExpiredError: The record's expiration time has passed.
        """
        row = self.db.get_url_by_code(code)
        if not row:
            logger.warning(f"Short code not found: {code}")
            raise NotFoundError(code)

        link = ShortLink.model_validate(row)
        if is_url_expired(link.expires_at):
            logger.warning(f"Short code {code} expired at {link.expires_at.isoformat()}")
            raise ExpiredError(code, link.expires_at)
        return link

    def increment_click_count(self, code: str) -> None:
        """Add one click to ``code``. Unknown codes are ignored."""
        self.db.increment_clicks(code)

    def get_stats(self, code: str) -> ShortLink:
        """Snapshot of a record. Expired records are reported as-is.

        Raises:
            NotFoundError: No record matches ``code``.
        """
        row = self.db.get_url_by_code(code)
        if not row:
            raise NotFoundError(code)
        return ShortLink.model_validate(row)

    def list_links(self) -> list[ShortLink]:
        """All records, newest first, expired ones included."""
        return [ShortLink.model_validate(row) for row in self.db.get_all_urls()]

    def build_short_url(self, code: str) -> str:
        return create_short_url(self.settings.public_base_url, code)


def get_link_service(db: Database = Depends(get_db)) -> LinkService:
    """Get a link service bound to the request's database for dependency injection."""
    return LinkService(db)
