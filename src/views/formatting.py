"""
Display formatting helpers for the roster.
"""

from datetime import datetime
from typing import Optional

from core.constants import (
    GLYPH_ASCENDING,
    GLYPH_DESCENDING,
    GLYPH_UNSORTED,
    LAST_UPDATED_PREFIX,
    SR_TEXT_ASCENDING,
    SR_TEXT_DESCENDING,
    SR_TEXT_UNSORTED,
)
from models.query_state import SortDirection


def pluralize_learners(count: int) -> str:
    """Format a learner count, e.g. '1 learner' or '2 learners'."""
    noun = "learner" if count == 1 else "learners"
    return f"{count} {noun}"


def cohort_option_label(name: str, count: int) -> str:
    """Format a cohort filter option, e.g. 'Cohort A (1 learner)'."""
    return f"{name} ({pluralize_learners(count)})"


def format_long_date(value: datetime) -> str:
    """Format a date as 'January 2, 2016'."""
    return f"{value:%B} {value.day}, {value:%Y}"


def last_updated_message(value: Optional[datetime]) -> Optional[str]:
    """Format the data freshness message, or None when the date is unknown."""
    if value is None:
        return None
    return f"{LAST_UPDATED_PREFIX}: {format_long_date(value)}"


def sort_glyph(field: str, sort_field: Optional[str], direction: SortDirection) -> str:
    """Get the sort icon class for a column header."""
    if field != sort_field:
        return GLYPH_UNSORTED
    return GLYPH_ASCENDING if direction is SortDirection.ASC else GLYPH_DESCENDING


def sort_screen_reader_text(field: str, sort_field: Optional[str], direction: SortDirection) -> str:
    """Get the screen reader text mirroring the header's sort icon."""
    if field != sort_field:
        return SR_TEXT_UNSORTED
    return SR_TEXT_ASCENDING if direction is SortDirection.ASC else SR_TEXT_DESCENDING
