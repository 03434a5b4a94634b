"""
View layer for the learner roster client.

This module keeps roster controls in sync with the learner collection.
"""

from .roster_view import RosterView
from .view_models import (
    CohortFilter,
    CohortOption,
    LearnerRow,
    RenderTarget,
    RosterViewModel,
    SearchBox,
    SortHeader,
    ViewState,
)

__all__ = [
    "RosterView",
    "CohortFilter",
    "CohortOption",
    "LearnerRow",
    "RenderTarget",
    "RosterViewModel",
    "SearchBox",
    "SortHeader",
    "ViewState",
]
