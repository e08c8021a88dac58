#!/usr/bin/env python3
"""
Curation Try-Out Script

Runs the Curation Engine locally against the real Gemini API (or the fallback
selector when GOOGLE_API_KEY is missing) without starting the HTTP server.

Usage:
    python scripts/try_curation.py
    python scripts/try_curation.py --file testimonials.json
    python scripts/try_curation.py --no-ai
"""

import argparse
import asyncio
import json
import logging
import os
import sys

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from curation_backend.errors import InvalidInput
from curation_backend.services import CurationEngine, get_default_ranker


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


SAMPLE_TESTIMONIALS = [
    {
        "id": "t1",
        "text": "Good course.",
        "author": "Marta",
        "date": "2024-01-10T08:00:00Z",
    },
    {
        "id": "t2",
        "text": "The budgeting module helped me pay off two credit cards in six months.",
        "author": "Jorge",
        "date": "2024-02-21T17:45:00Z",
    },
    {
        "id": "t3",
        "text": "Support answered my question about the video lessons within an hour.",
        "author": "Lucía",
        "date": "2024-03-05T12:00:00Z",
    },
    {
        "id": "t4",
        "text": "Clear explanations, although some videos could be shorter.",
        "author": "Daniel",
        "date": "2024-04-18T09:30:00Z",
    },
    {
        "id": "t5",
        "text": "I finally understand compound interest. My savings plan is on track.",
        "author": "Sofía",
        "date": "2024-05-02T19:15:00Z",
    },
]


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Curate testimonials locally")
    parser.add_argument("--file", help="JSON file containing an array of testimonials")
    parser.add_argument("--no-ai", action="store_true", help="Skip Gemini and use the fallback selector")
    return parser.parse_args()


async def main() -> int:
    args = parse_args()

    if args.file:
        with open(args.file, encoding="utf-8") as f:
            testimonials = json.load(f)
    else:
        testimonials = SAMPLE_TESTIMONIALS

    engine = CurationEngine(get_default_ranker(), ai_enabled=False if args.no_ai else None)

    try:
        outcome = await engine.curate_with_provenance(testimonials)
    except InvalidInput as e:
        logger.error(f"Invalid testimonials: {e.message}")
        return 1

    print("=" * 60)
    print(f"Source: {outcome.source}  Attempts: {outcome.attempts}")
    print("=" * 60)
    print(json.dumps([r.model_dump() for r in outcome.results], indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
