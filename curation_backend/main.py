"""
FastAPI application entry point for the Testimonial Curation backend.

This module creates the FastAPI app instance and registers all routers.
"""

import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from curation_backend.config import settings
from curation_backend.routes.curation import router as curation_router
from curation_backend.routes.health import router as health_router

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)


def _get_cors_origins() -> list[str]:
    """
    Get allowed CORS origins based on environment.

    - ENVIRONMENT=production: Uses CORS_ALLOWED_ORIGINS (empty means none)
    - Any other environment: Allows all origins for local development

    Returns:
        List of allowed origin URLs, or ["*"] outside production.
    """
    if settings.is_production():
        origins = settings.CORS_ALLOWED_ORIGINS
        if origins:
            logger.info(f"CORS configured for production with {len(origins)} allowed origins")
        else:
            logger.warning(
                "CORS_ALLOWED_ORIGINS not set in production. No web origins allowed."
            )
        return origins

    logger.info(f"CORS configured for {settings.ENVIRONMENT}: allowing all origins")
    return ["*"]


# Create FastAPI app
app = FastAPI(
    title="Testimonial Curation API",
    description="Selects and justifies testimonials for display, with a deterministic fallback",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc"
)


# Configure CORS with environment-based origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=_get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Curation-Source"],
)

# Register routers
app.include_router(health_router)
app.include_router(curation_router)

logger.info("FastAPI app initialized successfully")
