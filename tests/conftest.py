"""
Shared fixtures for learner roster tests.
"""

import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))
sys.path.insert(0, os.path.dirname(__file__))

import pytest

from fakes import COURSE_ID, ENDPOINT, FakeServer, RecordingRenderTarget, response_body
from models.course_metadata import CourseMetadata
from services.learner_collection import LearnerCollection
from views.roster_view import RosterView


@pytest.fixture
def server():
    """Fake server that waits for each request to be answered."""
    return FakeServer()


@pytest.fixture
def auto_server():
    """Fake server that answers every request with an empty page."""
    return FakeServer(auto_respond=(200, {"count": 0, "num_pages": 0, "results": []}))


@pytest.fixture
def learners(auto_server):
    """Course-scoped collection on an auto-answering server."""
    return LearnerCollection(auto_server, url=ENDPOINT, scope_params={"course_id": COURSE_ID})


@pytest.fixture
def target():
    return RecordingRenderTarget()


@pytest.fixture
def app_errors():
    """Messages received by roster app error handlers."""
    return []


@pytest.fixture
def make_roster(server, target, app_errors):
    """
    Factory for shown roster views.

    Without ``collection_response`` the initial fetch is answered with a
    one-page body before the view is returned.
    """
    async def factory(collection_response=None, cohorts=None):
        collection = LearnerCollection(
            server,
            url="test-url",
            initial_response=collection_response,
        )
        view = RosterView(
            collection,
            target,
            course_metadata=CourseMetadata(cohorts=cohorts or {}),
            on_app_error=app_errors.append,
        )
        task = view.show()
        if task is not None:
            request = await server.next_request()
            request.respond(200, response_body(1, 1))
            await task
        return view

    return factory
