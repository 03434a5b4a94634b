"""
Tests for the learner roster view.

Drives the view through user actions and checks the requests it issues, the
models it renders, focus changes and app error messages.
"""

import asyncio

import pytest

from core.constants import (
    ERROR_GATEWAY_TIMEOUT,
    ERROR_SERVER,
    FOCUS_ANCHOR_ID,
    SORTABLE_FIELDS,
)
from fakes import response_body
from views.view_models import ViewState

TOOLTIP_FIELDS = [
    "videos_viewed",
    "problems_completed",
    "problems_attempted",
    "discussion_contributions",
    "problem_attempts_per_completed",
]


def expect_link_states(model, active_title, disabled_titles):
    """Check every paging control is active, disabled or plain as expected."""
    for link in model.page_links:
        if link.title == active_title:
            assert link.is_active and not link.is_disabled, link.title
        elif link.title in disabled_titles:
            assert link.is_disabled and not link.is_active, link.title
        else:
            assert not link.is_active and not link.is_disabled, link.title


async def answer(server, task, status=200, body=None):
    """Answer the next request and wait for the view to handle it."""
    request = await server.next_request()
    request.respond(status, body)
    return request, await task


class TestRendering:
    """Test what a roster render contains."""

    @pytest.mark.asyncio
    async def test_displays_last_updated_date(self, make_roster, target):
        await make_roster(collection_response={"results": [{"last_updated": "2016-01-02T00:00:00"}]})

        assert target.last.last_updated_message == "Date Last Updated: January 2, 2016"

    @pytest.mark.asyncio
    async def test_renders_a_list_of_learners(self, make_roster, target):
        learners = [
            {
                "name": name,
                "username": name,
                "engagements": {
                    "discussion_contributions": index,
                    "problems_attempted": index + 1,
                    "problems_completed": index + 2,
                    "videos_viewed": index + 3,
                    "problem_attempts_per_completed": index + 4,
                },
            }
            for index, name in enumerate(["agnes", "lily", "zita"])
        ]
        await make_roster(collection_response={"results": learners})

        rows = target.last.rows
        assert [row.username for row in rows] == ["agnes", "lily", "zita"]
        for learner, row in zip(learners, rows):
            assert row.name == learner["name"]
            for metric, value in learner["engagements"].items():
                assert getattr(row, metric) == value

    @pytest.mark.asyncio
    async def test_unseeded_roster_fetches_on_show(self, server, make_roster, target):
        view = await make_roster()

        assert len(server.requests) == 1
        assert server.requests[0].params == {"page": "1", "page_size": "25"}
        assert view.state is ViewState.READY
        assert len(target.last.rows) == 25

    @pytest.mark.asyncio
    async def test_seeded_roster_does_not_fetch_on_show(self, server, make_roster):
        view = await make_roster(collection_response=response_body(2, 1))

        assert server.requests == []
        assert view.state is ViewState.READY

    @pytest.mark.asyncio
    async def test_all_headers_have_tooltips(self, make_roster, target):
        await make_roster()

        for field in TOOLTIP_FIELDS + ["username"]:
            header = target.last.header(field)
            assert header.tooltip_id == f"{field}-tooltip"
            assert len(header.tooltip) > 0


class TestSorting:
    """Test sorting through column headers."""

    @pytest.mark.parametrize("field", SORTABLE_FIELDS)
    @pytest.mark.asyncio
    async def test_can_sort_by_column(self, server, make_roster, target, field):
        view = await make_roster()
        assert target.last.header(field).glyph == "fa-sort"

        for direction in ("asc", "desc"):
            request, _ = await answer(server, view.click_sort_header(field), body=response_body(1, 1))
            assert request.params["order_by"] == field
            assert request.params["sort_order"] == direction
            assert target.last.header(field).glyph == f"fa-sort-{direction}"

    @pytest.mark.asyncio
    async def test_switching_column_starts_ascending(self, server, make_roster, target):
        view = await make_roster()
        await answer(server, view.click_sort_header("username"), body=response_body(1, 1))
        await answer(server, view.click_sort_header("username"), body=response_body(1, 1))

        request, _ = await answer(server, view.click_sort_header("videos_viewed"), body=response_body(1, 1))

        assert request.params["order_by"] == "videos_viewed"
        assert request.params["sort_order"] == "asc"
        assert target.last.header("username").glyph == "fa-sort"

    @pytest.mark.asyncio
    async def test_sorting_returns_to_first_page(self, server, make_roster):
        view = await make_roster(collection_response=response_body(2, 1))
        await answer(server, view.click_page_link("Next"), body=response_body(2, 2))

        request, _ = await answer(server, view.click_sort_header("username"), body=response_body(2, 1))

        assert request.params["page"] == "1"

    @pytest.mark.asyncio
    async def test_non_sortable_column_is_ignored(self, server, make_roster):
        view = await make_roster()

        assert view.click_sort_header("email") is None
        assert len(server.requests) == 1

    @pytest.mark.asyncio
    async def test_handles_server_errors(self, server, make_roster, app_errors):
        view = await make_roster()

        await answer(server, view.click_sort_header("username"), status=500)
        assert app_errors == [ERROR_SERVER]

        await answer(server, view.click_sort_header("username"), status=504)
        assert app_errors == [ERROR_SERVER, ERROR_GATEWAY_TIMEOUT]
        assert view.state is ViewState.ERROR


class TestPaging:
    """Test the paging controls."""

    @pytest.mark.asyncio
    async def test_initial_link_states(self, make_roster, target):
        await make_roster(collection_response=response_body(2, 1))

        expect_link_states(target.last, "Page 1", ["First", "Previous"])

    @pytest.mark.asyncio
    async def test_can_jump_to_a_particular_page(self, server, make_roster, target):
        view = await make_roster(collection_response=response_body(2, 1))

        request, _ = await answer(server, view.click_page_link("Page 2"), body=response_body(2, 2))

        assert request.params["page"] == "2"
        expect_link_states(target.last, "Page 2", ["Next", "Last"])

    @pytest.mark.asyncio
    async def test_can_navigate_to_next_and_previous_page(self, server, make_roster, target):
        view = await make_roster(collection_response=response_body(2, 1))

        request, _ = await answer(server, view.click_page_link("Next"), body=response_body(2, 2))
        assert request.params["page"] == "2"
        expect_link_states(target.last, "Page 2", ["Next", "Last"])
        assert [row.username for row in target.last.rows] == [f"user_{i}" for i in range(25, 50)]

        request, _ = await answer(server, view.click_page_link("Previous"), body=response_body(2, 1))
        assert request.params["page"] == "1"
        expect_link_states(target.last, "Page 1", ["First", "Previous"])
        assert len(target.last.rows) == 25

    @pytest.mark.asyncio
    async def test_paging_keeps_query_state(self, server, make_roster):
        view = await make_roster(collection_response=response_body(2, 1), cohorts={"A": 3})
        await answer(server, view.select_cohort("A"), body=response_body(2, 1))
        await answer(server, view.submit_search("ann"), body=response_body(2, 1))

        request, _ = await answer(server, view.click_page_link("Last"), body=response_body(2, 2))

        assert request.params == {
            "page": "2",
            "page_size": "25",
            "cohort": "A",
            "text_search": "ann",
        }

    @pytest.mark.asyncio
    async def test_unreachable_pages_issue_no_request(self, server, make_roster, target):
        view = await make_roster(collection_response=response_body(2, 1))
        renders = len(target.models)

        assert view.click_page_link("Previous") is None
        assert view.click_page_link("First") is None

        assert server.requests == []
        assert len(target.models) == renders
        assert view.collection.page == 1
        expect_link_states(target.last, "Page 1", ["First", "Previous"])

    @pytest.mark.asyncio
    async def test_unknown_link_title(self, make_roster):
        view = await make_roster(collection_response=response_body(2, 1))

        with pytest.raises(KeyError):
            view.click_page_link("Page 7")

    @pytest.mark.asyncio
    async def test_handles_gateway_timeouts(self, server, make_roster, app_errors, target):
        view = await make_roster(collection_response=response_body(2, 1))

        await answer(server, view.click_page_link("Next"), status=504)

        assert app_errors == [ERROR_GATEWAY_TIMEOUT]
        assert target.last.rows[0].username == "user_0"
        assert view.collection.page == 1
        assert FOCUS_ANCHOR_ID not in target.focused

    @pytest.mark.asyncio
    async def test_handles_server_errors(self, server, make_roster, app_errors):
        view = await make_roster(collection_response=response_body(2, 1))

        await answer(server, view.click_page_link("Next"), status=500)

        assert app_errors == [ERROR_SERVER]

    @pytest.mark.parametrize(
        "body",
        [
            None,
            {"count": 50, "num_pages": 2, "results": [
                {"username": "amy", "engagements": {"problem_attempts_per_completed": 1.5}},
            ]},
        ],
    )
    @pytest.mark.asyncio
    async def test_unusable_success_body_is_an_error(self, server, make_roster, app_errors, target, body):
        view = await make_roster(collection_response=response_body(2, 1))
        links = target.last.page_links

        await answer(server, view.click_page_link("Next"), body=body)

        assert app_errors == [ERROR_SERVER]
        assert view.state is ViewState.ERROR
        assert view.collection.page == 1
        assert view.collection.is_fetching is False
        assert target.last.rows[0].username == "user_0"
        assert target.last.page_links == links
        assert FOCUS_ANCHOR_ID not in target.focused

    @pytest.mark.asyncio
    async def test_quick_clicks_advance_from_the_requested_page(self, server, make_roster, target):
        view = await make_roster(collection_response=response_body(3, 1))

        first = view.click_page_link("Next")
        first_request = await server.next_request()
        second = view.click_page_link("Next")
        second_request = await server.next_request()

        assert (first_request.params["page"], second_request.params["page"]) == ("2", "3")
        assert view.click_page_link("Next") is None
        assert target.focused == ["page-link-next"]

        second_request.respond(200, response_body(3, 3))
        await second
        first_request.respond(200, response_body(3, 2))
        await first

        expect_link_states(target.last, "Page 3", ["Next", "Last"])
        assert target.last.rows[0].username == "user_50"

    @pytest.mark.asyncio
    async def test_failed_quick_clicks_return_to_the_rendered_page(self, server, make_roster, app_errors):
        view = await make_roster(collection_response=response_body(3, 1))

        first = view.click_page_link("Next")
        first_request = await server.next_request()
        second = view.click_page_link("Next")
        second_request = await server.next_request()

        second_request.respond(500)
        await second
        first_request.respond(200, response_body(3, 2))
        await first

        assert app_errors == [ERROR_SERVER]
        assert view.collection.page == 1
        expect_link_states(view.last_model, "Page 1", ["First", "Previous"])

    @pytest.mark.asyncio
    async def test_page_window_on_many_pages(self, make_roster, target):
        await make_roster(collection_response=response_body(25, 1))

        titles = [link.title for link in target.last.page_links]
        assert titles == ["First", "Previous"] + [f"Page {n}" for n in range(1, 11)] + ["Next", "Last"]
        assert target.last.page_link("Last").target_page == 25


class TestSearch:
    """Test the search form."""

    @pytest.mark.asyncio
    async def test_can_search_for_arbitrary_strings(self, server, make_roster):
        view = await make_roster()

        view.type_search("search string")
        request, _ = await answer(server, view.submit_search(), body=response_body(1, 1))

        assert request.params["text_search"] == "search string"

    @pytest.mark.asyncio
    async def test_clear_link_follows_input(self, make_roster, target):
        view = await make_roster()
        assert target.last.search.show_clear is False

        view.type_search("abc")
        assert target.last.search.show_clear is True

        view.type_search("")
        assert target.last.search.show_clear is False

    @pytest.mark.asyncio
    async def test_clear_link_hidden_for_blank_input(self, make_roster, target):
        view = await make_roster()

        view.type_search("   ")

        assert target.last.search.text == "   "
        assert target.last.search.show_clear is False

    @pytest.mark.asyncio
    async def test_can_clear_the_search_with_the_clear_link(self, server, make_roster, target):
        view = await make_roster()
        await answer(server, view.submit_search("search string"), body=response_body(1, 1))

        request, _ = await answer(server, view.click_clear_search(), body=response_body(1, 1))

        assert "text_search" not in request.params
        assert target.last.search.text == ""
        assert target.last.search.show_clear is False

    @pytest.mark.asyncio
    async def test_can_clear_the_search_by_searching_the_empty_string(self, server, make_roster):
        view = await make_roster()
        await answer(server, view.submit_search("search string"), body=response_body(1, 1))

        request, _ = await answer(server, view.submit_search(""), body=response_body(1, 1))

        assert "text_search" not in request.params

    @pytest.mark.asyncio
    async def test_handles_server_errors(self, server, make_roster, app_errors):
        view = await make_roster()

        await answer(server, view.submit_search("test search"), status=504)
        await answer(server, view.submit_search("test search"), status=500)

        assert app_errors == [ERROR_GATEWAY_TIMEOUT, ERROR_SERVER]


class TestCohortFilter:
    """Test filtering by cohort."""

    @pytest.mark.asyncio
    async def test_not_rendered_without_cohorts(self, make_roster, target):
        await make_roster(cohorts={})

        assert target.last.cohort_filter is None

    @pytest.mark.asyncio
    async def test_rendered_with_cohorts(self, make_roster, target):
        await make_roster(cohorts={"Cohort B": 2, "Cohort A": 1})

        options = target.last.cohort_filter.options
        assert [(o.value, o.label, o.selected) for o in options] == [
            ("", "All", True),
            ("Cohort A", "Cohort A (1 learner)", False),
            ("Cohort B", "Cohort B (2 learners)", False),
        ]

    @pytest.mark.asyncio
    async def test_can_execute_a_cohort_filter(self, server, make_roster, target):
        view = await make_roster(cohorts={"Cohort A": 1})

        request, _ = await answer(server, view.select_cohort("Cohort A"), body=response_body(1, 1))
        assert request.params["cohort"] == "Cohort A"
        assert target.last.cohort_filter.selected.value == "Cohort A"

        request, _ = await answer(server, view.select_cohort(""), body=response_body(1, 1))
        assert "cohort" not in request.params
        assert target.last.cohort_filter.selected.value == ""

    @pytest.mark.asyncio
    async def test_handles_server_errors(self, server, make_roster, app_errors):
        view = await make_roster(cohorts={"Cohort A": 1})

        await answer(server, view.select_cohort("Cohort A"), status=504)
        await answer(server, view.select_cohort(""), status=503)

        assert app_errors == [ERROR_GATEWAY_TIMEOUT, ERROR_SERVER]


class TestAccessibility:
    """Test the accessibility contracts of every render."""

    @pytest.mark.asyncio
    async def test_table_has_caption(self, make_roster, target):
        await make_roster()

        assert target.last.caption

    @pytest.mark.asyncio
    async def test_headers_have_col_scope(self, make_roster, target):
        await make_roster()

        assert all(header.scope == "col" for header in target.last.headers)

    @pytest.mark.asyncio
    async def test_headers_have_screen_reader_text(self, server, make_roster, target):
        view = await make_roster()
        assert all(header.sr_text == "click to sort" for header in target.last.headers)

        task = view.click_sort_header("username")
        assert target.last.header("username").sr_text == "sort ascending"
        await answer(server, task, body=response_body(1, 1))

        task = view.click_sort_header("username")
        assert target.last.header("username").sr_text == "sort descending"
        await answer(server, task, body=response_body(1, 1))

    @pytest.mark.asyncio
    async def test_search_input_has_label(self, make_roster, target):
        await make_roster()

        search = target.last.search
        assert search.input_id == "search-learners"
        assert search.label == "Search learners"

    @pytest.mark.asyncio
    async def test_icons_are_aria_hidden(self, make_roster, target):
        await make_roster()

        assert all(header.icon_aria_hidden for header in target.last.headers)
        assert target.last.search.icon_aria_hidden

    @pytest.mark.asyncio
    async def test_focus_after_paging(self, server, make_roster, target):
        view = await make_roster(collection_response=response_body(2, 1))

        assert view.click_page_link("Page 1") is None
        assert target.focused == ["page-link-page-1"]

        await answer(server, view.click_page_link("Page 2"), body=response_body(2, 2))
        assert target.focused == ["page-link-page-1", FOCUS_ANCHOR_ID]


class TestOverlappingFetches:
    """Test that only the latest request drives the roster."""

    @pytest.mark.asyncio
    async def test_stale_response_is_not_rendered(self, server, make_roster, target, app_errors):
        view = await make_roster(collection_response=response_body(2, 1))

        first = view.click_page_link("Next")
        first_request = await server.next_request()
        second = view.submit_search("zz")
        second_request = await server.next_request()

        second_request.respond(200, response_body(1, 1))
        await second
        rendered = len(target.models)

        first_request.respond(504)
        await first

        assert len(target.models) == rendered
        assert app_errors == []
        assert view.state is ViewState.READY
        assert target.last.rows[0].username == "user_0"

    @pytest.mark.asyncio
    async def test_close_stops_rendering(self, server, make_roster, target):
        view = await make_roster()
        view.close()
        rendered = len(target.models)

        task = asyncio.get_running_loop().create_task(view.collection.fetch())
        await answer(server, task, body=response_body(1, 1))

        assert len(target.models) == rendered
