"""
Query state model for the learner collection.

Holds paging, sorting, filtering and search intent and serializes it into
the flat query-string mapping sent to the learners endpoint.
"""

from enum import Enum
from typing import Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from core.constants import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    FILTER_VALUE_SEPARATOR,
    PARAM_ORDER_BY,
    PARAM_PAGE,
    PARAM_PAGE_SIZE,
    PARAM_SORT_ORDER,
    PARAM_TEXT_SEARCH,
)

FilterValue = Union[str, Tuple[str, ...]]


class SortDirection(str, Enum):
    """Sort directions understood by the endpoint."""

    ASC = "asc"
    DESC = "desc"

    def flipped(self) -> "SortDirection":
        """Get the opposite direction."""
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


def normalize_filter_value(value: Union[str, List[str], Tuple[str, ...]]) -> FilterValue:
    """Store sequence-valued filters as tuples so snapshots cannot be mutated."""
    if isinstance(value, str):
        return value
    return tuple(str(item) for item in value)


def serialize_filter_value(value: FilterValue) -> str:
    """Serialize a filter value, joining sequences with commas."""
    if isinstance(value, str):
        return value
    return FILTER_VALUE_SEPARATOR.join(value)


def normalize_search_text(text: Optional[str]) -> Optional[str]:
    """Treat empty and whitespace-only search text as no search."""
    if text is None or not text.strip():
        return None
    return text


class QueryState(BaseModel):
    """
    Authoritative query state of one collection.

    Mutated only by its owning collection; fetches work from a frozen copy
    returned by ``snapshot``.
    """

    scope_params: Dict[str, str] = Field(
        default_factory=dict,
        description="Required parameters sent with every request"
    )
    page: int = Field(default=DEFAULT_PAGE, ge=1, description="1-based page number")
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1, description="Items per page")
    sort_field: Optional[str] = Field(default=None, description="Field to order by")
    sort_direction: SortDirection = Field(default=SortDirection.ASC)
    filter_fields: Dict[str, FilterValue] = Field(
        default_factory=dict,
        description="Active filters by name"
    )
    search_text: Optional[str] = Field(default=None, description="Free-text search")

    model_config = ConfigDict(validate_assignment=True)

    def snapshot(self) -> "QueryState":
        """Return an independent copy of this state."""
        return self.model_copy(deep=True)

    def to_request_params(self) -> Dict[str, str]:
        """
        Serialize the state into request parameters.

        Unset fields never appear as keys and every value is a string, so
        identical state always yields an identical mapping.

        Returns:
            Flat mapping of query-string keys to values
        """
        params = {key: str(value) for key, value in self.scope_params.items()}
        params[PARAM_PAGE] = str(self.page)
        params[PARAM_PAGE_SIZE] = str(self.page_size)

        if self.sort_field:
            params[PARAM_ORDER_BY] = self.sort_field
            params[PARAM_SORT_ORDER] = self.sort_direction.value

        for name, value in self.filter_fields.items():
            serialized = serialize_filter_value(value)
            if serialized:
                params[name] = serialized

        search_text = normalize_search_text(self.search_text)
        if search_text is not None:
            params[PARAM_TEXT_SEARCH] = search_text

        return params
