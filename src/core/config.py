"""
Client configuration and logging setup.

Settings are read from environment variables with constant defaults.
"""

import logging
import os

from pydantic import BaseModel, Field

from core.constants import (
    DEFAULT_API_URL,
    DEFAULT_LOG_LEVEL,
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
    ENV_API_URL,
    ENV_LOG_LEVEL,
    ENV_REQUEST_TIMEOUT,
    LOG_DATE_FORMAT,
    LOG_FORMAT,
)


class ClientSettings(BaseModel):
    """Settings for talking to the learners endpoint."""

    api_url: str = Field(default=DEFAULT_API_URL, description="Learners endpoint URL")
    timeout: float = Field(
        default=DEFAULT_REQUEST_TIMEOUT_SECONDS,
        gt=0,
        description="Request timeout in seconds",
    )
    log_level: str = Field(default=DEFAULT_LOG_LEVEL, description="Logging level name")

    @classmethod
    def from_environment(cls) -> "ClientSettings":
        """
        Build settings from environment variables.

        Raises:
            ValueError: If the timeout variable is not a number
        """
        raw_timeout = os.getenv(ENV_REQUEST_TIMEOUT)
        timeout = float(raw_timeout) if raw_timeout else DEFAULT_REQUEST_TIMEOUT_SECONDS
        return cls(
            api_url=os.getenv(ENV_API_URL, DEFAULT_API_URL),
            timeout=timeout,
            log_level=os.getenv(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL),
        )


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """Configure root logging with the standard format."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
    )
