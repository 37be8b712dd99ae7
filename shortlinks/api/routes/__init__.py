"""API route modules."""

from .health import router as health_router
from .urls import router as urls_router
from .redirect import router as redirect_router

__all__ = ["health_router", "urls_router", "redirect_router"]
