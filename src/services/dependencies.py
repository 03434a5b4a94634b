"""
Factory helpers for wiring the learner collection.

Builds collections from settings so callers need not assemble transports.
"""

from typing import Any, Dict, Optional

from core.config import ClientSettings
from core.constants import PARAM_COURSE_ID
from transport.base import HttpTransport
from transport.requests_transport import RequestsTransport
from .learner_collection import LearnerCollection


def create_learner_collection(
    course_id: str,
    settings: Optional[ClientSettings] = None,
    transport: Optional[HttpTransport] = None,
    initial_response: Optional[Dict[str, Any]] = None,
) -> LearnerCollection:
    """
    Create a learner collection scoped to one course.

    Args:
        course_id: Course the roster belongs to
        settings: Client settings; read from the environment if None
        transport: Transport to use; a RequestsTransport is created if None
        initial_response: Optional pre-fetched response body

    Returns:
        Configured learner collection
    """
    settings = settings or ClientSettings.from_environment()
    if transport is None:
        transport = RequestsTransport(timeout=settings.timeout)
    return LearnerCollection(
        transport,
        url=settings.api_url,
        scope_params={PARAM_COURSE_ID: course_id},
        initial_response=initial_response,
    )
