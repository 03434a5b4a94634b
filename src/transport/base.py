"""
Base transport interface.

Defines the abstract HTTP interface the learner collection depends on, so it
can be constructed against a real session or a test double.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from core.error_handlers import is_success_status


class HttpResponse(BaseModel):
    """Status and decoded body of a completed request."""

    status: int = Field(description="HTTP status code")
    body: Optional[Any] = Field(default=None, description="Decoded JSON body, if any")

    @property
    def ok(self) -> bool:
        """Check whether the status denotes success."""
        return is_success_status(self.status)


class HttpTransport(ABC):
    """
    Abstract HTTP transport.

    Implementations return every completed response, whatever its status,
    and raise only when no response was received.
    """

    @abstractmethod
    async def get(self, url: str, params: Dict[str, str]) -> HttpResponse:
        """
        Issue a GET request.

        Args:
            url: Endpoint URL
            params: Flat query-string mapping

        Returns:
            The completed response

        Raises:
            TransportError: If the request failed without a response
        """
        pass
