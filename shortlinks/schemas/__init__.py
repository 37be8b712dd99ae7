"""Schemas package for URL Shortener Service."""

from .url import (
    ShortenResponse,
    StatsResponse,
    DebugURLEntry,
    HealthResponse,
)

__all__ = [
    "ShortenResponse",
    "StatsResponse",
    "DebugURLEntry",
    "HealthResponse",
]
