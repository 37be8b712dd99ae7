"""Services package - short link business logic."""

from .link_service import LinkService, get_link_service

__all__ = ["LinkService", "get_link_service"]
