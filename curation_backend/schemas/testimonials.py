"""
Pydantic schemas for testimonial curation.

These models define the strict input/output contracts of the Curation Engine.
All models are frozen: the engine never mutates the records it receives and
the records it returns live only for one curation request.
"""

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field


class Testimonial(BaseModel):
    """
    A user-submitted testimonial offered as a curation candidate.

    `date` is kept as the submitted string. Its format is not validated here;
    unparsable dates simply rank last in the fallback selection.
    """
    model_config = ConfigDict(frozen=True, strict=True)

    id: str = Field(
        ...,
        description="Caller-assigned unique identifier for the testimonial.",
        min_length=1,
        examples=["t1"]
    )
    text: str = Field(
        ...,
        description="The text content of the testimonial.",
        examples=["The course changed how I approach my budget."]
    )
    author: str = Field(
        ...,
        description="Display name of the testimonial author.",
        examples=["Ana M."]
    )
    date: str = Field(
        ...,
        description="Submission time as an ISO-8601 date or datetime string.",
        examples=["2024-05-01T10:00:00Z"]
    )


class CurationResult(BaseModel):
    """A selected testimonial id with the reason it was selected."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(
        ...,
        description="Id of the selected testimonial (always one of the input ids).",
        min_length=1,
        examples=["t1"]
    )
    reason: str = Field(
        ...,
        description="Human-readable justification for the selection.",
        min_length=1,
        examples=["Detailed, specific, recent feedback."]
    )


class CurationOutcome(BaseModel):
    """
    Curation results plus provenance.

    `source` tells AI-ranked results apart from the deterministic fallback;
    `attempts` counts ranking service calls (0 when the service was skipped).
    """
    model_config = ConfigDict(frozen=True)

    results: List[CurationResult] = Field(default_factory=list)
    source: Literal["ai", "fallback"]
    attempts: int = Field(0, ge=0)
