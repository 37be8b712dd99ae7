"""URL Shortener Service - Main FastAPI Application.

A small URL shortening service with:
- Create short URLs (deduplicated by URL)
- Redirect to original URLs with optional expiration
- Click statistics
- QR codes for short links
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from .core.config import settings
from .core.database import get_db
from .core.errors import StoreFailureError
from .api.routes import health_router, urls_router, redirect_router

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup and shutdown events."""
    # Startup
    logger.info(f"Starting {settings.app_title}...")
    db = get_db()
    db.init_db()
    logger.info("Database initialized")
    logger.info(f"API available at {settings.public_base_url}/api")
    yield
    # Shutdown
    logger.info(f"Shutting down {settings.app_title}...")
    db.close()


# Create FastAPI application
app = FastAPI(
    title=settings.app_title,
    description=settings.app_description,
    version=settings.app_version,
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StoreFailureError)
async def store_failure_handler(request: Request, exc: StoreFailureError):
    """Store failures answer with a generic message; the cause is only logged."""
    logger.error(f"Store failure on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """General exception handler."""
    logger.error(f"Unhandled Exception: {exc}")
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )


# Include routers; the catch-all redirect route goes last
app.include_router(health_router)
app.include_router(urls_router)
app.include_router(redirect_router)
