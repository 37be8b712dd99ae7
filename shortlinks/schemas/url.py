"""Response schemas for URL Shortener Service."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class ShortenResponse(BaseModel):
    """Response model for created short URL."""

    short_url: str
    short_code: str


class StatsResponse(BaseModel):
    """Response model for short link statistics."""

    short_code: str
    original_url: str
    click_count: int
    created_at: datetime
    expires_at: Optional[datetime] = None


class DebugURLEntry(BaseModel):
    """One row of the debug listing."""

    short_code: str
    original_url: str


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str
    service: str
    message: str
