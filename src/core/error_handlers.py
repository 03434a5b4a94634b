"""
Common error handling utilities following Clean Code principles.

Classifies failed learner fetches into a small, stable taxonomy and maps each
kind to the message shown to the user. Each function has a single
responsibility and meaningful names.
"""

from enum import Enum
from typing import Optional

from core.constants import (
    ERROR_GATEWAY_TIMEOUT,
    ERROR_INVALID_PAGE,
    ERROR_SERVER,
    HTTP_STATUS_GATEWAY_TIMEOUT,
)


class ErrorKind(str, Enum):
    """Kinds of fetch failure surfaced to the roster."""

    GATEWAY_TIMEOUT = "gateway_timeout"
    SERVER_ERROR = "server_error"


class LearnerClientError(Exception):
    """Base exception for learner client operations."""
    pass


class TransportError(LearnerClientError):
    """Raised when a request fails before any HTTP status is received."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Request to {url} failed: {reason}")


class InvalidPageError(LearnerClientError, ValueError):
    """Raised when a page number is not a positive integer."""

    def __init__(self, page: object):
        self.page = page
        super().__init__(f"{ERROR_INVALID_PAGE}: {page!r}")


class MalformedResponseError(LearnerClientError, ValueError):
    """Raised when a successful response carries no usable result page."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Malformed learners response: {reason}")


_ERROR_MESSAGES = {
    ErrorKind.GATEWAY_TIMEOUT: ERROR_GATEWAY_TIMEOUT,
    ErrorKind.SERVER_ERROR: ERROR_SERVER,
}


def is_success_status(status: int) -> bool:
    """Check whether an HTTP status code denotes success."""
    return 200 <= status < 300


def classify_status(status: Optional[int]) -> ErrorKind:
    """
    Classify a failed request by its HTTP status code.

    Args:
        status: HTTP status of the failed response, or None when the request
            never produced a response (network failure)

    Returns:
        GATEWAY_TIMEOUT for 504, SERVER_ERROR for everything else
    """
    if status == HTTP_STATUS_GATEWAY_TIMEOUT:
        return ErrorKind.GATEWAY_TIMEOUT
    return ErrorKind.SERVER_ERROR


def message_for_error(kind: ErrorKind) -> str:
    """Get the user-facing message for an error kind."""
    return _ERROR_MESSAGES[kind]


def message_for_status(status: Optional[int]) -> str:
    """Get the user-facing message for a failed request's status code."""
    return message_for_error(classify_status(status))


def validate_page_number(page: object) -> int:
    """
    Validate that a page number is a positive integer.

    Args:
        page: Requested page number

    Returns:
        The page number

    Raises:
        InvalidPageError: If page is not an int or is less than 1
    """
    if isinstance(page, bool) or not isinstance(page, int) or page < 1:
        raise InvalidPageError(page)
    return page
