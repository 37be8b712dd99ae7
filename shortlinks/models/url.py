"""Pydantic models for URL Shortener Service."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class ShortenRequest(BaseModel):
    """Model for creating a short URL.

    ``url`` is checked by the route rather than by pydantic so that it is
    stored exactly as submitted (after trimming) and a bad value answers 400.
    """

    url: Optional[str] = Field(None, description="The original long URL to shorten")
    expires_at: Optional[datetime] = Field(
        None, description="Expiration timestamp (ISO 8601); naive values are UTC"
    )


class ShortLink(BaseModel):
    """A stored short link record."""

    short_code: str
    original_url: str
    created_at: datetime
    expires_at: Optional[datetime] = None
    click_count: int = 0


class ErrorResponse(BaseModel):
    """Model for error responses."""

    detail: str
