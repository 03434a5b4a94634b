"""
Core utilities and constants for the learner roster client.

Contains shared constants, configuration, and the error taxonomy.
"""

from .config import ClientSettings, configure_logging
from .error_handlers import (
    ErrorKind,
    InvalidPageError,
    LearnerClientError,
    MalformedResponseError,
    TransportError,
    classify_status,
    message_for_error,
    message_for_status,
)

__all__ = [
    "ClientSettings",
    "configure_logging",
    "ErrorKind",
    "InvalidPageError",
    "LearnerClientError",
    "MalformedResponseError",
    "TransportError",
    "classify_status",
    "message_for_error",
    "message_for_status",
]
