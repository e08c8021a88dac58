"""
AI Components for the Testimonial Curation backend.

1. Testimonial Ranker (Single-Shot Structured Output)
   - Uses Gemini with response_schema to pick testimonials and justify each pick
   - NOT an ADK agent - uses direct Gemini API
   - Located in: curation_backend/agents/curation/

Retries and the deterministic fallback are service-layer concerns and live in
curation_backend/services/curation_service.py.
"""

from curation_backend.agents.curation import (
    GeminiTestimonialRanker,
    TestimonialRanker,
)

__all__ = [
    "GeminiTestimonialRanker",
    "TestimonialRanker",
]
