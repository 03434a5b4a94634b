"""
HTTP transport backed by requests.

Runs blocking session calls in a worker thread so fetches stay non-blocking
for the event loop.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

import requests

from core.constants import DEFAULT_REQUEST_TIMEOUT_SECONDS
from core.error_handlers import TransportError
from .base import HttpResponse, HttpTransport

logger = logging.getLogger(__name__)


class RequestsTransport(HttpTransport):
    """
    Transport for the learners endpoint.

    Example usage:
        ```python
        with RequestsTransport(timeout=10) as transport:
            collection = LearnerCollection(
                transport,
                url="https://insights.example.com/api/learners/",
                scope_params={"course_id": "org/course/run"},
            )
            outcome = await collection.refresh()
        ```
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_REQUEST_TIMEOUT_SECONDS,
    ):
        """
        Initialize transport.

        Args:
            session: Session to send requests with; a new one is created if None
            timeout: Request timeout in seconds
        """
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()
        self.session.headers.update({"Accept": "application/json"})

    async def get(self, url: str, params: Dict[str, str]) -> HttpResponse:
        """Send a GET request without blocking the event loop."""
        return await asyncio.to_thread(self._get, url, dict(params))

    def _get(self, url: str, params: Dict[str, str]) -> HttpResponse:
        """Make the blocking request."""
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"Request failed: {e}")
            raise TransportError(url, str(e)) from e

        return HttpResponse(status=response.status_code, body=self._decode_body(response))

    @staticmethod
    def _decode_body(response: Any) -> Optional[Any]:
        """Decode a JSON body, treating empty or malformed bodies as absent."""
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            logger.debug("Response body is not JSON; ignoring it")
            return None

    def close(self) -> None:
        """Close the underlying session."""
        self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
