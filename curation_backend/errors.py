"""
Error taxonomy for the Curation Engine.

Only InvalidInput crosses the engine boundary. ServiceUnavailable and
ServiceError are raised by ranker implementations and absorbed by the engine,
which retries the former and falls back on both.
"""

from typing import Optional


class CurationError(Exception):
    """Base error for curation failures."""

    code: str = "CURATION_ERROR"
    retryable: bool = False

    def __init__(self, message: str, *, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


class InvalidInput(CurationError):
    """The testimonial list is structurally invalid. Fatal, never retried."""

    code = "INVALID_INPUT"


class ServiceUnavailable(CurationError):
    """The ranking service reported transient overload (HTTP 503)."""

    code = "SERVICE_UNAVAILABLE"
    retryable = True

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = 503,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.status_code = status_code


class ServiceError(CurationError):
    """Any other ranking service failure (auth, bad payload, timeout, non-503 status)."""

    code = "SERVICE_ERROR"

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.status_code = status_code
