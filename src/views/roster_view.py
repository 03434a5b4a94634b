"""
Learner roster view.

Binds roster controls to the learner collection, draws the roster after each
successful fetch, and turns failed fetches into user-facing error messages.
"""

import asyncio
import logging
from typing import Awaitable, Callable, List, Optional, Union

from core.constants import (
    COHORT_FILTER_ALL_LABEL,
    FILTER_COHORT,
    FOCUS_ANCHOR_ID,
    ROSTER_COLUMNS,
    SORTABLE_FIELDS,
    TABLE_CAPTION,
)
from core.error_handlers import message_for_error
from models.course_metadata import CourseMetadata
from models.learner import Learner
from models.outcomes import FetchFailure, FetchOutcome, FetchSuccess
from models.pagination import PageLink, build_page_links
from models.query_state import normalize_search_text
from services.learner_collection import LearnerCollection
from .formatting import (
    cohort_option_label,
    last_updated_message,
    sort_glyph,
    sort_screen_reader_text,
)
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

logger = logging.getLogger(__name__)

AppErrorHandler = Callable[[str], None]


class RosterView:
    """
    Sortable, pageable, searchable learner table.

    User actions mutate the collection and schedule one fetch each on the
    running event loop; the scheduled task is returned so callers can await
    it. Successful fetches re-render the table. Failed fetches leave the last
    rendered table in place and notify app error handlers with a finished
    message.
    """

    def __init__(
        self,
        collection: LearnerCollection,
        render_target: RenderTarget,
        course_metadata: Optional[CourseMetadata] = None,
        on_app_error: Optional[AppErrorHandler] = None,
    ):
        """
        Initialize roster view.

        Args:
            collection: Learner collection the view drives
            render_target: Surface the roster is drawn on
            course_metadata: Course data deciding which filters are offered
            on_app_error: Optional handler for app error messages
        """
        self.collection = collection
        self.render_target = render_target
        self.course_metadata = course_metadata or CourseMetadata()
        self.state = ViewState.LOADING
        self.last_model: Optional[RosterViewModel] = None

        self._error_handlers: List[AppErrorHandler] = []
        if on_app_error is not None:
            self._error_handlers.append(on_app_error)
        self._search_input = collection.search_string or ""
        self._rendered_page = collection.page
        self._unsubscribe = collection.subscribe(self._on_outcome)

    def on_app_error(self, handler: AppErrorHandler) -> None:
        """Register a handler for app error messages."""
        self._error_handlers.append(handler)

    def close(self) -> None:
        """Stop listening to the collection."""
        self._unsubscribe()

    # Lifecycle

    def show(self) -> Optional["asyncio.Task[FetchOutcome]"]:
        """
        Display the roster.

        Pre-seeded data is drawn right away; otherwise the first page is fetched.
        """
        if self.collection.is_seeded:
            self.state = ViewState.READY
            self.render()
            return None
        self.render()
        return self._schedule(self.collection.refresh())

    # User actions

    def click_sort_header(self, field: str) -> Optional["asyncio.Task[FetchOutcome]"]:
        """Sort by a column, flipping direction when it is already the sort column."""
        if field not in SORTABLE_FIELDS:
            logger.debug(f"Ignoring click on non-sortable column {field!r}")
            return None
        if field == self.collection.sort_field:
            self.collection.flip_sort_direction()
        else:
            self.collection.set_sort_field(field)
        self.render()
        return self._schedule(self.collection.refresh())

    def click_page_link(self, title: str) -> Optional["asyncio.Task[FetchOutcome]"]:
        """
        Navigate using a paging control.

        Controls resolve against the page most recently requested, so quick
        repeated clicks keep moving. Disabled and active controls issue no
        request; focus returns to them.

        Raises:
            KeyError: If no paging control has this title
        """
        link = self._find_page_link(title)
        if not link.is_navigable:
            self.render_target.focus(link.element_id)
            return None

        previous_page = self._rendered_page
        self.collection.set_page(link.target_page)
        return self._schedule(self._change_page(previous_page))

    def type_search(self, text: str) -> None:
        """Update the search box as the user types."""
        self._search_input = text
        self.render()

    def submit_search(self, text: Optional[str] = None) -> "asyncio.Task[FetchOutcome]":
        """Search for the box's text; searching for nothing clears the search."""
        if text is not None:
            self._search_input = text
        if normalize_search_text(self._search_input) is None:
            self.collection.unset_search_string()
        else:
            self.collection.set_search_string(self._search_input)
        self.render()
        return self._schedule(self.collection.refresh())

    def click_clear_search(self) -> "asyncio.Task[FetchOutcome]":
        """Clear the search box and the active search."""
        self._search_input = ""
        self.collection.unset_search_string()
        self.render()
        return self._schedule(self.collection.refresh())

    def select_cohort(self, value: str) -> "asyncio.Task[FetchOutcome]":
        """Filter by cohort; the empty value removes the filter."""
        if value:
            self.collection.set_filter_field(FILTER_COHORT, value)
        else:
            self.collection.unset_filter_field(FILTER_COHORT)
        self.render()
        return self._schedule(self.collection.refresh())

    # Fetch handling

    def _schedule(self, fetch: Awaitable[FetchOutcome]) -> "asyncio.Task[FetchOutcome]":
        self.state = ViewState.LOADING
        return asyncio.get_running_loop().create_task(fetch)

    async def _change_page(self, previous_page: int) -> FetchOutcome:
        outcome = await self.collection.fetch()
        if isinstance(outcome, FetchSuccess) and outcome.page != previous_page:
            self.render_target.focus(FOCUS_ANCHOR_ID)
        elif isinstance(outcome, FetchFailure) and self.collection.page != self._rendered_page:
            self.collection.set_page(self._rendered_page)
        return outcome

    def _on_outcome(self, outcome: Union[FetchSuccess, FetchFailure]) -> None:
        if isinstance(outcome, FetchSuccess):
            self.state = ViewState.READY
            self._rendered_page = outcome.page
            self.render()
        else:
            self.state = ViewState.ERROR
            self._raise_app_error(message_for_error(outcome.kind))

    def _raise_app_error(self, message: str) -> None:
        logger.info(f"Roster error: {message}")
        for handler in list(self._error_handlers):
            handler(message)

    # Rendering

    def render(self) -> RosterViewModel:
        """Draw the roster from the collection's current state and results."""
        model = self.build_view_model()
        self.last_model = model
        self.render_target.render(model)
        return model

    def build_view_model(self) -> RosterViewModel:
        """Describe the roster as it should currently be drawn."""
        result = self.collection.result
        return RosterViewModel(
            state=self.state,
            caption=TABLE_CAPTION,
            last_updated_message=last_updated_message(result.last_updated),
            headers=self._build_headers(),
            rows=[self._build_row(learner) for learner in result.results],
            page_links=self.page_links(),
            search=SearchBox(
                text=self._search_input,
                show_clear=normalize_search_text(self._search_input) is not None,
            ),
            cohort_filter=self._build_cohort_filter(),
        )

    def page_links(self) -> List[PageLink]:
        """Paging controls for the page currently on screen."""
        return build_page_links(self._rendered_page, self.collection.num_pages)

    def _find_page_link(self, title: str) -> PageLink:
        # Relative links follow the pending page; numbered links on screen stay valid.
        pending = build_page_links(self.collection.page, self.collection.num_pages)
        for link in pending + self.page_links():
            if link.title == title:
                return link
        raise KeyError(title)

    def _build_headers(self) -> List[SortHeader]:
        sort_field = self.collection.sort_field
        direction = self.collection.sort_direction
        return [
            SortHeader(
                field=field,
                label=label,
                tooltip=tooltip,
                glyph=sort_glyph(field, sort_field, direction),
                sr_text=sort_screen_reader_text(field, sort_field, direction),
            )
            for field, label, tooltip in ROSTER_COLUMNS
        ]

    @staticmethod
    def _build_row(learner: Learner) -> LearnerRow:
        engagements = learner.engagements
        return LearnerRow(
            name=learner.name,
            username=learner.username,
            discussion_contributions=engagements.discussion_contributions,
            problems_attempted=engagements.problems_attempted,
            problems_completed=engagements.problems_completed,
            videos_viewed=engagements.videos_viewed,
            problem_attempts_per_completed=engagements.problem_attempts_per_completed,
        )

    def _build_cohort_filter(self) -> Optional[CohortFilter]:
        if not self.course_metadata.has_cohorts:
            return None
        active = self.collection.get_filter_field(FILTER_COHORT) or ""
        options = [CohortOption(value="", label=COHORT_FILTER_ALL_LABEL, selected=not active)]
        for name, count in self.course_metadata.sorted_cohorts():
            options.append(
                CohortOption(
                    value=name,
                    label=cohort_option_label(name, count),
                    selected=name == active,
                )
            )
        return CohortFilter(options=options)
