"""
Learner collection service.

Owns the roster's query state and fetch lifecycle: mutators change the state,
``fetch`` serializes a snapshot of it into one request, and each settled
request is reported as a typed outcome.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from core.constants import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, ERROR_INVALID_SORT_FIELD
from core.error_handlers import (
    ErrorKind,
    MalformedResponseError,
    TransportError,
    classify_status,
    validate_page_number,
)
from models.learner import FetchResult, Learner
from models.outcomes import FetchFailure, FetchOutcome, FetchSuccess, FetchSuperseded
from models.query_state import (
    FilterValue,
    QueryState,
    SortDirection,
    normalize_filter_value,
    normalize_search_text,
)
from transport.base import HttpTransport

logger = logging.getLogger(__name__)

OutcomeListener = Callable[[Union[FetchSuccess, FetchFailure]], None]


class LearnerCollection:
    """
    Paginated, sortable, filterable and searchable view of a course's learners.

    Requests are numbered as they are issued. A response that settles after a
    newer request was issued is discarded, so the result page always belongs
    to the latest request.
    """

    def __init__(
        self,
        transport: HttpTransport,
        url: str,
        scope_params: Optional[Dict[str, str]] = None,
        page_size: int = DEFAULT_PAGE_SIZE,
        initial_response: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize learner collection.

        Args:
            transport: HTTP transport used for fetches
            url: Learners endpoint URL
            scope_params: Parameters sent with every request, e.g. course_id
            page_size: Number of learners per page
            initial_response: Optional pre-fetched response body to seed results
        """
        self.transport = transport
        self.url = url
        self._state = QueryState(
            scope_params={key: str(value) for key, value in (scope_params or {}).items()},
            page_size=page_size,
        )
        self._result = FetchResult()
        self._is_seeded = initial_response is not None
        if initial_response is not None:
            self._result = FetchResult.parse(initial_response, page_size)

        self._listeners: List[OutcomeListener] = []
        self._latest_sequence = 0
        self._in_flight = 0

    # Query state accessors

    @property
    def page(self) -> int:
        return self._state.page

    @property
    def page_size(self) -> int:
        return self._state.page_size

    @property
    def scope_params(self) -> Dict[str, str]:
        return dict(self._state.scope_params)

    @property
    def sort_field(self) -> Optional[str]:
        return self._state.sort_field

    @property
    def sort_direction(self) -> SortDirection:
        return self._state.sort_direction

    @property
    def search_string(self) -> Optional[str]:
        return self._state.search_text

    @property
    def has_active_search(self) -> bool:
        return self._state.search_text is not None

    @property
    def active_filter_fields(self) -> Dict[str, FilterValue]:
        return dict(self._state.filter_fields)

    def get_filter_field(self, name: str) -> Optional[FilterValue]:
        """Get the value of an active filter, or None if unset."""
        return self._state.filter_fields.get(name)

    def snapshot(self) -> QueryState:
        """Get an independent copy of the current query state."""
        return self._state.snapshot()

    def request_params(self) -> Dict[str, str]:
        """Get the parameters the next fetch would send."""
        return self._state.to_request_params()

    # Result accessors

    @property
    def result(self) -> FetchResult:
        return self._result

    @property
    def results(self) -> List[Learner]:
        return list(self._result.results)

    @property
    def count(self) -> int:
        return self._result.count

    @property
    def num_pages(self) -> int:
        return self._result.num_pages

    @property
    def is_seeded(self) -> bool:
        """Check whether results were supplied at construction."""
        return self._is_seeded

    @property
    def is_fetching(self) -> bool:
        return self._in_flight > 0

    # Mutators

    def set_page(self, page: int) -> None:
        """
        Set the page to request next.

        Range checking against the page count is the caller's job.

        Raises:
            InvalidPageError: If page is not a positive integer
        """
        self._state.page = validate_page_number(page)

    def set_sort_field(self, field: str) -> None:
        """
        Set the sort field, resetting direction to ascending if the field changes.

        Raises:
            ValueError: If field is empty
        """
        if not field:
            raise ValueError(ERROR_INVALID_SORT_FIELD)
        if field != self._state.sort_field:
            self._state.sort_direction = SortDirection.ASC
        self._state.sort_field = field

    def flip_sort_direction(self) -> None:
        """Toggle between ascending and descending order."""
        self._state.sort_direction = self._state.sort_direction.flipped()

    def set_filter_field(self, name: str, value: Union[str, List[str], Tuple[str, ...]]) -> None:
        """Apply a filter; sequence values are sent comma-joined."""
        self._state.filter_fields[name] = normalize_filter_value(value)

    def unset_filter_field(self, name: str) -> None:
        """Remove a filter if it is set."""
        self._state.filter_fields.pop(name, None)

    def unset_all_filter_fields(self) -> None:
        """Remove every filter."""
        self._state.filter_fields.clear()

    def set_search_string(self, text: Optional[str]) -> None:
        """Set the search text; empty or blank text clears the search."""
        self._state.search_text = normalize_search_text(text)

    def unset_search_string(self) -> None:
        """Clear the search text."""
        self._state.search_text = None

    # Listeners

    def subscribe(self, listener: OutcomeListener) -> Callable[[], None]:
        """
        Register a listener for successful and failed fetches.

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, outcome: Union[FetchSuccess, FetchFailure]) -> None:
        for listener in list(self._listeners):
            listener(outcome)

    # Fetching

    async def refresh(self) -> FetchOutcome:
        """Return to the first page and fetch."""
        self._state.page = DEFAULT_PAGE
        return await self.fetch()

    async def fetch(self) -> FetchOutcome:
        """
        Fetch the page described by the current query state.

        Issues exactly one request built from a snapshot of the state taken
        before the request goes out.

        Returns:
            FetchSuccess with the new result page, FetchFailure with the error
            kind, or FetchSuperseded if a newer fetch was issued meanwhile
        """
        self._latest_sequence += 1
        sequence = self._latest_sequence
        snapshot = self._state.snapshot()
        params = snapshot.to_request_params()
        logger.debug(f"Fetching learners #{sequence} with {params}")

        self._in_flight += 1
        try:
            response = await self.transport.get(self.url, params)
        except TransportError as e:
            return self._settle_failure(sequence, None, str(e))
        finally:
            self._in_flight -= 1

        if not response.ok:
            return self._settle_failure(sequence, response.status, f"HTTP {response.status}")

        if self._is_stale(sequence):
            return FetchSuperseded(sequence=sequence)

        try:
            result = FetchResult.from_response(response.body, snapshot.page_size)
        except MalformedResponseError as e:
            return self._settle_failure(sequence, response.status, e.reason)
        self._result = result
        outcome = FetchSuccess(sequence=sequence, page=snapshot.page, result=result)
        self._notify(outcome)
        return outcome

    def _is_stale(self, sequence: int) -> bool:
        if sequence != self._latest_sequence:
            logger.debug(f"Discarding response #{sequence}; #{self._latest_sequence} is newer")
            return True
        return False

    def _settle_failure(self, sequence: int, status: Optional[int], reason: str) -> FetchOutcome:
        if self._is_stale(sequence):
            return FetchSuperseded(sequence=sequence)

        kind: ErrorKind = classify_status(status)
        logger.warning(f"Fetching learners #{sequence} failed ({reason}); classified as {kind.value}")
        outcome = FetchFailure(sequence=sequence, kind=kind, status=status)
        self._notify(outcome)
        return outcome
