"""
Course metadata model.

Read-only data about the course the roster is scoped to.
"""

from typing import Dict, List, Tuple

from pydantic import BaseModel, Field


class CourseMetadata(BaseModel):
    """Metadata about a course."""

    cohorts: Dict[str, int] = Field(
        default_factory=dict,
        description="Learner counts keyed by cohort name"
    )

    @property
    def has_cohorts(self) -> bool:
        """Check whether the course defines at least one cohort."""
        return len(self.cohorts) > 0

    def sorted_cohorts(self) -> List[Tuple[str, int]]:
        """Get (name, learner count) pairs ordered by cohort name."""
        return sorted(self.cohorts.items())
