"""
Fetch outcome models.

Every fetch settles into exactly one of these.
"""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict

from core.error_handlers import ErrorKind
from .learner import FetchResult


class FetchSuccess(BaseModel):
    """The response was applied as the collection's new result page."""

    sequence: int
    page: int
    result: FetchResult

    model_config = ConfigDict(frozen=True)


class FetchFailure(BaseModel):
    """The request failed; the previous result page is untouched."""

    sequence: int
    kind: ErrorKind
    status: Optional[int] = None

    model_config = ConfigDict(frozen=True)


class FetchSuperseded(BaseModel):
    """A newer request was issued before this one settled; its response was discarded."""

    sequence: int

    model_config = ConfigDict(frozen=True)


FetchOutcome = Union[FetchSuccess, FetchFailure, FetchSuperseded]
