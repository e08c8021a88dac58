"""
Testimonial Curation - Structured-Output LLM Ranking

This package contains the ranking side of the Curation Engine:
- prompts: system prompt and user prompt builder
- ranker: TestimonialRanker interface and the Gemini implementation

The retry, fallback and validation logic lives in:
- curation_backend/services/curation_service.py

Usage:
    from curation_backend.agents.curation import GeminiTestimonialRanker

    ranker = GeminiTestimonialRanker()
    results = await ranker.rank(testimonials)
"""

from curation_backend.agents.curation.prompts import (
    CURATION_SYSTEM_PROMPT,
    build_curation_user_prompt,
)
from curation_backend.agents.curation.ranker import (
    GeminiTestimonialRanker,
    TestimonialRanker,
    classify_api_error,
    parse_ranking_response,
)

__all__ = [
    "CURATION_SYSTEM_PROMPT",
    "build_curation_user_prompt",
    "GeminiTestimonialRanker",
    "TestimonialRanker",
    "classify_api_error",
    "parse_ranking_response",
]
