"""
View models for the learner roster.

These carry everything needed to draw the roster with display formatting
already applied, plus the interface of the surface that draws them.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from core.constants import SEARCH_INPUT_ID, SEARCH_LABEL
from models.pagination import PageLink


class ViewState(str, Enum):
    """Lifecycle state of a roster view."""

    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class SortHeader(BaseModel):
    """One column header."""

    field: str
    label: str
    tooltip: str
    glyph: str
    sr_text: str
    scope: str = "col"
    icon_aria_hidden: bool = True

    @property
    def tooltip_id(self) -> str:
        """Id of the tooltip element the header is described by."""
        return f"{self.field}-tooltip"


class LearnerRow(BaseModel):
    """One rendered learner row."""

    name: str
    username: str
    discussion_contributions: int = 0
    problems_attempted: int = 0
    problems_completed: int = 0
    videos_viewed: int = 0
    problem_attempts_per_completed: int = 0


class SearchBox(BaseModel):
    """Search form state."""

    input_id: str = SEARCH_INPUT_ID
    label: str = SEARCH_LABEL
    text: str = ""
    show_clear: bool = False
    icon_aria_hidden: bool = True


class CohortOption(BaseModel):
    """One option of the cohort filter."""

    value: str
    label: str
    selected: bool = False


class CohortFilter(BaseModel):
    """Cohort filter dropdown."""

    options: List[CohortOption] = Field(default_factory=list)

    @property
    def selected(self) -> Optional[CohortOption]:
        return next((option for option in self.options if option.selected), None)


class RosterViewModel(BaseModel):
    """Complete description of one roster render."""

    state: ViewState
    caption: str
    last_updated_message: Optional[str] = None
    headers: List[SortHeader] = Field(default_factory=list)
    rows: List[LearnerRow] = Field(default_factory=list)
    page_links: List[PageLink] = Field(default_factory=list)
    search: SearchBox = Field(default_factory=SearchBox)
    cohort_filter: Optional[CohortFilter] = None

    def header(self, field: str) -> SortHeader:
        """Get the header for a column."""
        return next(header for header in self.headers if header.field == field)

    def page_link(self, title: str) -> Optional[PageLink]:
        """Get a paging control by title, or None if it is not shown."""
        return next((link for link in self.page_links if link.title == title), None)


class RenderTarget(ABC):
    """Surface the roster draws itself onto."""

    @abstractmethod
    def render(self, model: RosterViewModel) -> None:
        """Draw the roster."""
        pass

    @abstractmethod
    def focus(self, element_id: str) -> None:
        """Move keyboard focus to an element."""
        pass
