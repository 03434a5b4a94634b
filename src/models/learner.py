"""
Learner record and result-page models.

Mirrors the body returned by the learners endpoint.
"""

import math
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from core.constants import DEFAULT_PAGE_SIZE
from core.error_handlers import MalformedResponseError


class Engagements(BaseModel):
    """Engagement metrics for one learner."""

    discussion_contributions: int = Field(default=0, ge=0)
    problems_attempted: int = Field(default=0, ge=0)
    problems_completed: int = Field(default=0, ge=0)
    videos_viewed: int = Field(default=0, ge=0)
    problem_attempts_per_completed: int = Field(default=0, ge=0)

    model_config = ConfigDict(extra="ignore")


class Learner(BaseModel):
    """A single learner row."""

    name: str = ""
    username: str = ""
    email: Optional[str] = None
    engagements: Engagements = Field(default_factory=Engagements)
    segments: List[str] = Field(default_factory=list)
    cohort: Optional[str] = None
    enrollment_mode: Optional[str] = None
    last_updated: Optional[datetime] = None

    model_config = ConfigDict(extra="ignore")


class FetchResult(BaseModel):
    """One page of learners as returned by the server."""

    count: int = Field(default=0, ge=0, description="Total matching learners")
    num_pages: int = Field(default=0, ge=0, description="Total number of pages")
    results: List[Learner] = Field(default_factory=list, description="Learners on this page")

    @property
    def last_updated(self) -> Optional[datetime]:
        """When the underlying data was last refreshed, per the first record."""
        if not self.results:
            return None
        return self.results[0].last_updated

    @classmethod
    def parse(cls, body: Optional[Dict[str, Any]], page_size: int = DEFAULT_PAGE_SIZE) -> "FetchResult":
        """
        Build a result page from a response body.

        Args:
            body: Decoded JSON body; None or empty yields an empty page
            page_size: Page size used to derive ``num_pages`` when absent

        Returns:
            Parsed result page
        """
        body = body or {}
        results = [Learner.model_validate(item) for item in body.get("results") or []]
        count = body.get("count")
        if count is None:
            count = len(results)
        num_pages = body.get("num_pages")
        if num_pages is None:
            num_pages = math.ceil(count / page_size) if count else 0
        return cls(count=count, num_pages=num_pages, results=results)

    @classmethod
    def from_response(cls, body: Any, page_size: int = DEFAULT_PAGE_SIZE) -> "FetchResult":
        """
        Build a result page from a successful fetch's body.

        Unlike ``parse``, a missing or undecodable body is an error rather
        than an empty page.

        Raises:
            MalformedResponseError: If the body is not a result page
        """
        if not isinstance(body, dict):
            raise MalformedResponseError(f"expected a JSON object, got {type(body).__name__}")
        if "results" not in body:
            raise MalformedResponseError("body has no results")
        try:
            return cls.parse(body, page_size)
        except (ValidationError, TypeError) as e:
            raise MalformedResponseError(str(e)) from e
