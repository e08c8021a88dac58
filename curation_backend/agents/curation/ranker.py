"""
Testimonial Ranker

The ranking service is a black box behind a one-method interface so the
Curation Engine can be driven by a deterministic stub in tests.

GeminiTestimonialRanker is the production implementation:
- Model: configurable (CURATION_MODEL, default Gemini 2.0 Flash)
- API: Google Gen AI Python SDK (google-genai), async client
- Output: JSON array of {id, reason} enforced through response_schema

Every failure is reported as ServiceUnavailable (HTTP 503, retryable) or
ServiceError (everything else, not retryable).
"""

import json
import logging
from typing import List, Optional, Protocol, Sequence

from google import genai
from google.genai import errors, types
from pydantic import BaseModel, TypeAdapter, ValidationError

from curation_backend.agents.curation.prompts import (
    CURATION_SYSTEM_PROMPT,
    build_curation_user_prompt,
)
from curation_backend.config import settings
from curation_backend.errors import ServiceError, ServiceUnavailable
from curation_backend.schemas.testimonials import CurationResult, Testimonial
from curation_backend.utils.constants import TRANSIENT_STATUS_CODES

logger = logging.getLogger(__name__)

curation_results_adapter = TypeAdapter(List[CurationResult])


class RankedTestimonialSchema(BaseModel):
    """Schema for one ranked testimonial in the Gemini structured output."""
    id: str
    reason: str


class TestimonialRanker(Protocol):
    """Ranks testimonials and justifies each selection."""

    async def rank(self, testimonials: Sequence[Testimonial]) -> List[CurationResult]:
        ...


def classify_api_error(exc: errors.APIError) -> ServiceUnavailable | ServiceError:
    """Map a google-genai API error onto the curation error taxonomy."""
    status_code = getattr(exc, "code", None)
    if status_code in TRANSIENT_STATUS_CODES:
        return ServiceUnavailable(
            f"Ranking service temporarily unavailable ({status_code})",
            status_code=status_code,
            cause=exc,
        )
    return ServiceError(
        f"Ranking service returned an error ({status_code})",
        status_code=status_code,
        cause=exc,
    )


def parse_ranking_response(text: Optional[str]) -> List[CurationResult]:
    """
    Parse the JSON text returned by the ranking model.

    Raises:
        ServiceError: If the text is empty, not JSON, or not a list of {id, reason}.
    """
    if not text or not text.strip():
        raise ServiceError("Ranking service returned an empty response")

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise ServiceError("Ranking service returned malformed JSON", cause=e) from e

    if payload is None:
        raise ServiceError("Ranking service returned a null result")

    try:
        return curation_results_adapter.validate_python(payload)
    except ValidationError as e:
        raise ServiceError("Ranking service returned an unexpected payload shape", cause=e) from e


class GeminiTestimonialRanker:
    """Ranks testimonials with a single structured-output Gemini call."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        timeout_seconds: Optional[float] = None,
        client: Optional[genai.Client] = None,
    ):
        self.api_key = settings.GOOGLE_API_KEY if api_key is None else api_key
        self.model = model or settings.CURATION_MODEL
        self.temperature = settings.CURATION_TEMPERATURE if temperature is None else temperature
        self.timeout_seconds = (
            settings.CURATION_TIMEOUT_SECONDS if timeout_seconds is None else timeout_seconds
        )
        self._client = client

    def _get_client(self) -> genai.Client:
        """Lazy initialization of the Gemini client."""
        if self._client is not None:
            return self._client

        if not self.api_key:
            raise ServiceError("GOOGLE_API_KEY is not configured")

        self._client = genai.Client(
            api_key=self.api_key,
            http_options=types.HttpOptions(timeout=int(self.timeout_seconds * 1000)),
        )
        logger.info("Gemini client initialized for testimonial curation")
        return self._client

    async def rank(self, testimonials: Sequence[Testimonial]) -> List[CurationResult]:
        """
        Submit the testimonials to Gemini and return its selections.

        Raises:
            ServiceUnavailable: Gemini answered with HTTP 503
            ServiceError: Any other failure, including timeouts and bad payloads
        """
        client = self._get_client()

        config = types.GenerateContentConfig(
            system_instruction=CURATION_SYSTEM_PROMPT,
            temperature=self.temperature,
            response_mime_type="application/json",
            response_schema=list[RankedTestimonialSchema],
        )

        logger.debug(f"Sending {len(testimonials)} testimonials to {self.model}")
        try:
            response = await client.aio.models.generate_content(
                model=self.model,
                contents=build_curation_user_prompt(testimonials),
                config=config,
            )
        except errors.APIError as e:
            raise classify_api_error(e) from e
        except Exception as e:
            # Timeouts and transport failures are not the overload signal
            raise ServiceError(f"Ranking service call failed: {type(e).__name__}", cause=e) from e

        if response is None or not response.candidates:
            raise ServiceError("Ranking service returned no candidates")

        return parse_ranking_response(response.text)
