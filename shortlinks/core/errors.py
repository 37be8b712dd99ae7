"""Failure types raised by the store and the link service.

The API layer maps these to HTTP responses; nothing below the routers
knows about status codes.
"""

from datetime import datetime


class ShortLinkError(Exception):
    """Base class for all short link failures."""


class InvalidInputError(ShortLinkError):
    """The submitted URL is malformed or not allowed."""


class NotFoundError(ShortLinkError):
    """No record matches the short code."""

    def __init__(self, short_code: str):
        super().__init__(f"Short code not found: {short_code}")
        self.short_code = short_code


class ExpiredError(ShortLinkError):
    """The record exists but its expiration time has passed."""

    def __init__(self, short_code: str, expires_at: datetime):
        super().__init__(f"Short code {short_code} expired at {expires_at.isoformat()}")
        self.short_code = short_code
        self.expires_at = expires_at


class StoreFailureError(ShortLinkError):
    """The persistence layer is unreachable or a query failed."""


class DuplicateRecordError(StoreFailureError):
    """An insert violated a unique constraint.

    ``field`` is the column that clashed: ``"short_code"`` or ``"original_url"``.
    """

    def __init__(self, field: str):
        super().__init__(f"Duplicate value for {field}")
        self.field = field
