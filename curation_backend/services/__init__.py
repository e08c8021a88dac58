"""
Service layer for the Testimonial Curation backend.

Contains business logic orchestration that:
- Validates curation input before any external call
- Adapts requests to ranking service calls with retries
- Falls back to deterministic selection when the ranking service fails
- Maps results into Pydantic models

Services act as the glue between routes (HTTP layer) and agents.
"""

from .curation_service import (
    CurationEngine,
    build_curation_engine,
    curate_testimonials,
    curate_testimonials_with_provenance,
    get_default_ranker,
    select_fallback,
    validate_testimonials,
)

__all__ = [
    "CurationEngine",
    "build_curation_engine",
    "curate_testimonials",
    "curate_testimonials_with_provenance",
    "get_default_ranker",
    "select_fallback",
    "validate_testimonials",
]
