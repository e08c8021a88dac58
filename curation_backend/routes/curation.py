"""
Testimonial curation API endpoints.

Flow:
1. POST /ai/curate-testimonials - Rank testimonials with Gemini (falls back to
   the most recent ones when the ranking service cannot be used)

Nothing is persisted; the caller decides what to display.
"""

import json
import logging
from typing import List

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from curation_backend.agents.curation import TestimonialRanker
from curation_backend.errors import InvalidInput
from curation_backend.schemas.testimonials import CurationResult
from curation_backend.services import build_curation_engine, get_default_ranker

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ai", tags=["curation"])

CURATION_SOURCE_HEADER = "X-Curation-Source"


def get_testimonial_ranker() -> TestimonialRanker:
    """Dependency returning the ranking service (overridden in tests)."""
    return get_default_ranker()


@router.post(
    "/curate-testimonials",
    response_model=List[CurationResult],
    status_code=status.HTTP_200_OK,
    summary="Curate testimonials for display",
    description="""
    Selects the most impactful and recent testimonials and explains each pick.

    **Request body:** JSON array of `{id, text, author, date}` objects.

    **Behavior:**
    - Calls Gemini to rank the testimonials
    - Retries up to 2 times (1s, 2s backoff) when Gemini is overloaded (503)
    - Falls back to the 3 most recent testimonials on any other failure
    - The `X-Curation-Source` header reports `ai` or `fallback`

    **Errors:**
    - 400 when the body is not a JSON array of well-formed testimonials
    - 500 for unexpected server failures
    """,
)
async def curate_testimonials_endpoint(
    request: Request,
    response: Response,
    ranker: TestimonialRanker = Depends(get_testimonial_ranker),
):
    """
    Curation endpoint.

    - Parse: raw JSON body, shape checked by the service layer
    - Call service: engine handles retries and fallback
    - Map output: list of CurationResult, provenance in a response header
    """
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.warning(f"POST /ai/curate-testimonials received an unparsable body: {e}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": "Invalid input: Request body must be valid JSON."},
        )

    try:
        outcome = await build_curation_engine(ranker).curate_with_provenance(payload)
    except InvalidInput as e:
        logger.warning(f"Curation rejected input: {e.message}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": e.message},
        )
    except Exception as e:
        logger.error(f"Error in AI curation route: {e}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Failed to curate testimonials.", "error": str(e)},
        )

    response.headers[CURATION_SOURCE_HEADER] = outcome.source
    logger.info(
        f"Returning {len(outcome.results)} curated testimonials "
        f"(source={outcome.source}, attempts={outcome.attempts})"
    )
    return outcome.results
