"""Models package for URL Shortener Service."""

from .url import ShortenRequest, ShortLink, ErrorResponse

__all__ = ["ShortenRequest", "ShortLink", "ErrorResponse"]
