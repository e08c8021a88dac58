"""
Pytest configuration for curation backend tests.

Sets up test environment and global fixtures.
"""
import os
from typing import Any, List

import pytest

# Disable config validation during tests
# This allows tests to run without requiring real environment variables
os.environ["VALIDATE_CONFIG"] = "false"

# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("GOOGLE_API_KEY", "test-google-api-key")
os.environ.setdefault("CURATION_AI_ENABLED", "true")
os.environ.setdefault("CURATION_AI_MIN_TESTIMONIALS", "1")


class StubRanker:
    """
    Ranker double that replays canned outcomes, one per call.

    An outcome that is an exception is raised; anything else is returned.
    The last outcome repeats once the list is exhausted.
    """

    def __init__(self, *outcomes: Any):
        self.outcomes = list(outcomes)
        self.calls = 0
        self.received: List[list] = []

    async def rank(self, testimonials):
        self.calls += 1
        self.received.append(list(testimonials))
        outcome = self.outcomes[min(self.calls - 1, len(self.outcomes) - 1)]
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


class RecordingSleep:
    """Awaitable replacement for asyncio.sleep that records requested delays."""

    def __init__(self):
        self.delays: List[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def stub_ranker():
    """Factory for StubRanker instances."""
    return StubRanker


@pytest.fixture
def recording_sleep():
    """Sleep double that returns immediately and remembers each delay."""
    return RecordingSleep()


@pytest.fixture
def monthly_testimonials():
    """Five testimonials dated January through May 2024, oldest first."""
    return [
        {
            "id": f"t{month}",
            "text": f"Testimonial number {month}.",
            "author": f"Author {month}",
            "date": f"2024-{month:02d}-15T12:00:00Z",
        }
        for month in range(1, 6)
    ]
