"""
Curation Service - Gemini ranking with retry and deterministic fallback

This service picks a bounded subset of testimonials for display and attaches
a reason to each pick.

Control flow for one request:
1. Validate the testimonial list (InvalidInput is the only error surfaced)
2. Call the ranking service (GeminiTestimonialRanker by default)
3. On ServiceUnavailable (HTTP 503), retry with exponential backoff
   (1s, then 2s with the default settings)
4. On ServiceError, or once retries are exhausted, fall back to the
   most recent testimonials
5. Return the results

No state is kept between requests: every call builds its own attempt
counter and suspends only on the ranking call and the backoff timer.
"""

import asyncio
import logging
from collections.abc import Mapping, Sequence
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, List, Optional, Tuple

from pydantic import ValidationError

from curation_backend.agents.curation.ranker import (
    GeminiTestimonialRanker,
    TestimonialRanker,
    curation_results_adapter,
)
from curation_backend.config import settings
from curation_backend.errors import InvalidInput, ServiceError, ServiceUnavailable
from curation_backend.schemas.testimonials import CurationOutcome, CurationResult, Testimonial
from curation_backend.utils.constants import CURATION_SOURCES, FALLBACK_LIMIT, FALLBACK_REASON

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("id", "text", "author", "date")

# Default ranker (lazy initialization)
_default_ranker: Optional[TestimonialRanker] = None


# =============================================================================
# INPUT CONTRACT
# =============================================================================

def validate_testimonials(testimonials: Any) -> List[Testimonial]:
    """
    Check the shape of the curation input before any ranking call.

    Items may be Testimonial instances or mappings carrying id, text, author
    and date as strings. Date format is not checked here.

    Raises:
        InvalidInput: If the value is not a sequence or any item is malformed.
    """
    if isinstance(testimonials, (str, bytes, bytearray, Mapping)) or not isinstance(
        testimonials, Sequence
    ):
        raise InvalidInput("Invalid input: Expected an array of testimonials.")

    validated: List[Testimonial] = []
    for index, item in enumerate(testimonials):
        if isinstance(item, Testimonial):
            validated.append(item)
            continue

        if not isinstance(item, Mapping):
            raise InvalidInput(f"Invalid input: testimonial at index {index} is not an object.")

        for field in REQUIRED_FIELDS:
            value = item.get(field)
            if value is None:
                raise InvalidInput(
                    f"Invalid input: testimonial at index {index} is missing required field '{field}'."
                )
            if not isinstance(value, str):
                raise InvalidInput(
                    f"Invalid input: field '{field}' of testimonial at index {index} must be a string."
                )

        try:
            validated.append(Testimonial.model_validate({field: item[field] for field in REQUIRED_FIELDS}))
        except ValidationError as e:
            fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err.get("loc"))
            raise InvalidInput(
                f"Invalid input: testimonial at index {index} has invalid field(s): {fields}.",
                cause=e,
            ) from e

    return validated


# =============================================================================
# FALLBACK SELECTOR
# =============================================================================

def parse_testimonial_date(value: str) -> Optional[datetime]:
    """
    Parse an ISO-8601 date or datetime string.

    A trailing 'Z' is read as UTC and naive values are assumed to be UTC.
    Returns None when the value cannot be parsed.
    """
    text = value.strip()
    if not text:
        return None
    if text[-1] in ("Z", "z"):
        text = text[:-1] + "+00:00"

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _recency_key(testimonial: Testimonial) -> Tuple[bool, float]:
    parsed = parse_testimonial_date(testimonial.date)
    if parsed is None:
        return (False, 0.0)
    return (True, parsed.timestamp())


def select_fallback(testimonials: Sequence[Testimonial]) -> List[CurationResult]:
    """
    Pick the most recent testimonials without calling the ranking service.

    Sorting is stable and descending by date; unparsable dates rank equal to
    each other and after every parsable date. A repeated id is picked once, at
    its most recent position. At most FALLBACK_LIMIT items are returned, all
    with FALLBACK_REASON.
    """
    ordered = sorted(testimonials, key=_recency_key, reverse=True)
    selected: List[CurationResult] = []
    seen_ids = set()
    for testimonial in ordered:
        if testimonial.id in seen_ids:
            continue
        seen_ids.add(testimonial.id)
        selected.append(CurationResult(id=testimonial.id, reason=FALLBACK_REASON))
        if len(selected) == FALLBACK_LIMIT:
            break
    return selected


# =============================================================================
# CURATION ENGINE
# =============================================================================

class CurationEngine:
    """
    Runs one curation request: validate, rank with retries, fall back.

    Args:
        ranker: Ranking service implementation
        max_retries: Retries after the first attempt (defaults to settings)
        backoff_base_seconds: First backoff delay, doubled per retry
        ai_enabled: When False, always use the fallback selection
        ai_min_testimonials: Inputs smaller than this skip the ranking service
        sleep: Awaitable sleep used for backoff (asyncio.sleep by default)
    """

    def __init__(
        self,
        ranker: TestimonialRanker,
        max_retries: Optional[int] = None,
        backoff_base_seconds: Optional[float] = None,
        ai_enabled: Optional[bool] = None,
        ai_min_testimonials: Optional[int] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.ranker = ranker
        self.max_retries = settings.CURATION_MAX_RETRIES if max_retries is None else max_retries
        self.backoff_base_seconds = (
            settings.CURATION_BACKOFF_BASE_SECONDS
            if backoff_base_seconds is None
            else backoff_base_seconds
        )
        self.ai_enabled = settings.CURATION_AI_ENABLED if ai_enabled is None else ai_enabled
        self.ai_min_testimonials = (
            settings.CURATION_AI_MIN_TESTIMONIALS
            if ai_min_testimonials is None
            else ai_min_testimonials
        )
        self._sleep = sleep

    def backoff_delay(self, attempt: int) -> float:
        """Delay before retrying after the given failed attempt (1-based)."""
        return self.backoff_base_seconds * (2 ** (attempt - 1))

    async def curate(self, testimonials: Any) -> List[CurationResult]:
        """Return the curated selection for the given testimonials."""
        outcome = await self.curate_with_provenance(testimonials)
        return outcome.results

    async def curate_with_provenance(self, testimonials: Any) -> CurationOutcome:
        """
        Return the curated selection together with where it came from.

        Raises:
            InvalidInput: If the testimonial list is malformed
        """
        validated = validate_testimonials(testimonials)
        logger.info(f"Curation requested for {len(validated)} testimonials")

        if not validated:
            return CurationOutcome(results=[], source=CURATION_SOURCES['FALLBACK'], attempts=0)

        if not self.ai_enabled or len(validated) < self.ai_min_testimonials:
            logger.info(
                f"AI curation skipped (enabled={self.ai_enabled}, "
                f"count={len(validated)}, minimum={self.ai_min_testimonials})"
            )
            return CurationOutcome(
                results=select_fallback(validated),
                source=CURATION_SOURCES['FALLBACK'],
                attempts=0,
            )

        ranked, attempts = await self._rank_with_retry(validated)
        if ranked is None:
            results = select_fallback(validated)
            logger.warning(
                f"Falling back to recent testimonials after {attempts} attempt(s): "
                f"selected ids={[r.id for r in results]}"
            )
            return CurationOutcome(
                results=results,
                source=CURATION_SOURCES['FALLBACK'],
                attempts=attempts,
            )

        logger.info(f"AI curation selected {len(ranked)} testimonials in {attempts} attempt(s)")
        return CurationOutcome(results=ranked, source=CURATION_SOURCES['AI'], attempts=attempts)

    async def _rank_with_retry(
        self, testimonials: List[Testimonial]
    ) -> Tuple[Optional[List[CurationResult]], int]:
        """
        Call the ranker under the bounded exponential backoff policy.

        Returns:
            (results, calls) where results is None when the caller must fall back
        """
        failures = 0
        calls = 0

        while failures <= self.max_retries:
            calls += 1
            try:
                ranked = await self.ranker.rank(testimonials)
                return _enforce_referential_integrity(testimonials, ranked), calls
            except ServiceUnavailable as e:
                failures += 1
                if failures > self.max_retries:
                    logger.warning(
                        f"Curation attempt {calls} failed with {e.code}; "
                        f"maximum retries ({self.max_retries}) reached"
                    )
                    break
                delay = self.backoff_delay(failures)
                logger.warning(
                    f"Curation attempt {calls} failed with {e.code}. Retrying in {delay:g}s..."
                )
                await self._sleep(delay)
            except ServiceError as e:
                logger.warning(
                    f"Curation attempt {calls} failed with non-retryable {e.code}: {e.message}"
                )
                break
            except Exception as e:
                logger.error(
                    f"Curation attempt {calls} failed unexpectedly: {type(e).__name__}",
                    exc_info=True,
                )
                break

        return None, calls


def _enforce_referential_integrity(
    testimonials: Sequence[Testimonial], ranked: Any
) -> List[CurationResult]:
    """
    Keep only results that point at input testimonials, each id once.

    Raises:
        ServiceError: If the ranker returned nothing usable
    """
    if ranked is None:
        raise ServiceError("Ranking service returned a null result")

    try:
        results = curation_results_adapter.validate_python(ranked)
    except ValidationError as e:
        raise ServiceError("Ranking service returned an unexpected payload shape", cause=e) from e

    known_ids = {testimonial.id for testimonial in testimonials}
    seen: set = set()
    kept: List[CurationResult] = []
    dropped: List[str] = []

    for result in results:
        if result.id not in known_ids or result.id in seen:
            dropped.append(result.id)
            continue
        seen.add(result.id)
        kept.append(result)

    if dropped:
        logger.warning(f"Dropped {len(dropped)} unknown or duplicate ids from ranking output: {dropped}")

    if not kept:
        raise ServiceError("Ranking service selected no known testimonials")

    return kept


# =============================================================================
# MODULE-LEVEL ENTRY POINTS
# =============================================================================

def get_default_ranker() -> TestimonialRanker:
    """Lazy initialization of the Gemini ranker."""
    global _default_ranker

    if _default_ranker is None:
        _default_ranker = GeminiTestimonialRanker()
    return _default_ranker


def build_curation_engine(ranker: Optional[TestimonialRanker] = None) -> CurationEngine:
    """Create an engine from settings, using the Gemini ranker unless one is given."""
    return CurationEngine(ranker=ranker or get_default_ranker())


async def curate_testimonials_with_provenance(
    testimonials: Any,
    ranker: Optional[TestimonialRanker] = None,
) -> CurationOutcome:
    """Curate testimonials and report whether AI or the fallback produced them."""
    return await build_curation_engine(ranker).curate_with_provenance(testimonials)


async def curate_testimonials(
    testimonials: Any,
    ranker: Optional[TestimonialRanker] = None,
) -> List[CurationResult]:
    """
    Curate testimonials for display.

    Never raises for well-formed input: ranking service failures resolve to
    the fallback selection.

    Args:
        testimonials: Sequence of Testimonial records or equivalent mappings
        ranker: Optional ranker override (defaults to GeminiTestimonialRanker)

    Returns:
        Ordered list of CurationResult

    Raises:
        InvalidInput: If the testimonial list is malformed
    """
    outcome = await curate_testimonials_with_provenance(testimonials, ranker)
    return outcome.results
