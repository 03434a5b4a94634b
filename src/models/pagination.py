"""
Pagination models for the roster's paging controls.

The link states are a pure function of the current page and page count.
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from core.constants import (
    PAGE_LINK_FIRST,
    PAGE_LINK_LAST,
    PAGE_LINK_NEXT,
    PAGE_LINK_NUMBER_FORMAT,
    PAGE_LINK_PREVIOUS,
    PAGE_WINDOW_SIZE,
)


class PageLink(BaseModel):
    """State of one paging control."""

    title: str = Field(description="Accessible title, e.g. 'Next' or 'Page 2'")
    label: str = Field(description="Visible text of the control")
    target_page: int = Field(description="Page the control navigates to")
    is_active: bool = Field(default=False, description="Target is the current page")
    is_disabled: bool = Field(default=False, description="Control cannot navigate")

    model_config = ConfigDict(frozen=True)

    @property
    def element_id(self) -> str:
        """Identifier used when moving focus to this control."""
        return "page-link-" + self.title.lower().replace(" ", "-")

    @property
    def is_navigable(self) -> bool:
        """Check whether clicking the control should change page."""
        return not self.is_active and not self.is_disabled


def page_window(page: int, num_pages: int, window_size: int = PAGE_WINDOW_SIZE) -> range:
    """
    Get the block of page numbers shown around the current page.

    Args:
        page: Current 1-based page
        num_pages: Total number of pages
        window_size: Maximum page numbers shown at once

    Returns:
        Range of page numbers in the block containing ``page``
    """
    if num_pages < 1:
        return range(1, 1)
    start = ((page - 1) // window_size) * window_size + 1
    end = min(start + window_size - 1, num_pages)
    return range(start, end + 1)


def build_page_links(page: int, num_pages: int) -> List[PageLink]:
    """
    Compute the full set of paging controls.

    Args:
        page: Current 1-based page
        num_pages: Total number of pages

    Returns:
        First, Previous, one link per page in the window, Next, Last
    """
    def out_of_range(target: int) -> bool:
        return target < 1 or target > num_pages

    last_page = max(num_pages, 1)
    links = [
        PageLink(
            title=PAGE_LINK_FIRST,
            label="«",
            target_page=1,
            is_disabled=page <= 1 or out_of_range(1),
        ),
        PageLink(
            title=PAGE_LINK_PREVIOUS,
            label="‹",
            target_page=max(page - 1, 1),
            is_disabled=page <= 1 or out_of_range(page - 1),
        ),
    ]

    for number in page_window(page, num_pages):
        links.append(
            PageLink(
                title=PAGE_LINK_NUMBER_FORMAT.format(page=number),
                label=str(number),
                target_page=number,
                is_active=number == page,
            )
        )

    links.extend([
        PageLink(
            title=PAGE_LINK_NEXT,
            label="›",
            target_page=min(page + 1, last_page),
            is_disabled=page >= num_pages or out_of_range(page + 1),
        ),
        PageLink(
            title=PAGE_LINK_LAST,
            label="»",
            target_page=last_page,
            is_disabled=page >= num_pages or out_of_range(last_page),
        ),
    ])
    return links
