"""
Health check endpoint schemas.

The health endpoint is PUBLIC and returns a simple status indicator.
"""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """
    Response model for GET /health endpoint.

    Used by load balancers, monitoring systems, and deployment checks.
    `ai_curation_enabled` reports the site switch, not ranking service health.
    """

    status: str = Field(
        default="ok",
        description="Health status of the API (always 'ok' if responding)",
        examples=["ok"]
    )
    service: str = Field(
        default="testimonial-curation-backend",
        description="Service identifier"
    )
    ai_curation_enabled: bool = Field(
        ...,
        description="Whether curation requests are sent to the ranking service"
    )
