"""
Transport layer for the learner roster client.

This module isolates HTTP access behind a small interface.
"""

from .base import HttpResponse, HttpTransport
from .requests_transport import RequestsTransport

__all__ = [
    "HttpResponse",
    "HttpTransport",
    "RequestsTransport",
]
