"""
Logging utilities for the Testimonial Curation backend.

Provides standardized logger configuration following privacy rules.

PRIVACY RULES:
- NEVER log testimonial text (user-submitted content)
- NEVER log author names
- NEVER log API keys or secrets

Acceptable logging:
- High-level events (e.g., "Curation requested", "Falling back to recent testimonials")
- Non-sensitive metadata (testimonial ids, counts, attempt numbers)
- Error codes and sanitized error messages
"""

import logging
from typing import Optional

from curation_backend.config import settings


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Get a configured logger for the specified module.

    Args:
        name: Module name (typically __name__)
        level: Optional logging level (defaults to settings.LOG_LEVEL)

    Returns:
        Configured logger instance

    Usage:
        >>> from curation_backend.utils.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("High-level event occurred")
    """
    logger = logging.getLogger(name)

    if level is None:
        level = logging.getLevelName(settings.LOG_LEVEL.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger.setLevel(level)

    # Add handler if not already configured (avoid duplicate handlers)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger
