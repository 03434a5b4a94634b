"""
Learner Roster - Pydantic Models

This module contains the data models used by the learner collection and roster view.
"""

from .course_metadata import CourseMetadata
from .learner import Engagements, FetchResult, Learner
from .outcomes import FetchFailure, FetchOutcome, FetchSuccess, FetchSuperseded
from .pagination import PageLink, build_page_links, page_window
from .query_state import QueryState, SortDirection

__all__ = [
    "CourseMetadata",
    "Engagements",
    "FetchResult",
    "Learner",
    "FetchFailure",
    "FetchOutcome",
    "FetchSuccess",
    "FetchSuperseded",
    "PageLink",
    "build_page_links",
    "page_window",
    "QueryState",
    "SortDirection",
]
