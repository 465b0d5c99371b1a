"""Fixed-size page slicing and page-link windows."""

import math
from dataclasses import dataclass, field
from typing import Generic, List, Sequence, TypeVar

T = TypeVar("T")

MAX_PAGE_LINKS = 5


@dataclass(frozen=True)
class PageWindow(Generic[T]):
    items: List[T]
    total_pages: int
    page: int = 1
    total_items: int = 0


@dataclass(frozen=True)
class PageLinks:
    """What the pagination control renders for the current page."""
    current: int
    total_pages: int
    numbers: List[int] = field(default_factory=list)
    show_ellipsis: bool = False
    has_previous: bool = False
    has_next: bool = False
    visible: bool = False


def total_pages_for(count: int, page_size: int) -> int:
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")
    return max(1, math.ceil(count / page_size))


def clamp_page(page: int, total_pages: int) -> int:
    return min(max(1, page), max(1, total_pages))


def paginate(records: Sequence[T], page: int, page_size: int) -> PageWindow[T]:
    """
    Slice ``records`` into page ``page`` (1-based).

    An out-of-range page yields an empty slice rather than an error.

    Raises:
        ValueError: If page_size < 1
    """
    total_pages = total_pages_for(len(records), page_size)
    start = max(page - 1, 0) * page_size
    items = list(records[start:start + page_size]) if page >= 1 else []
    return PageWindow(items=items, total_pages=total_pages, page=page, total_items=len(records))


def page_links(
    current: int,
    total_pages: int,
    total_items: int,
    page_size: int,
    max_links: int = MAX_PAGE_LINKS,
) -> PageLinks:
    """
    Numbered links are capped at ``max_links`` (always starting at 1), with
    an ellipsis when more pages exist. Controls are hidden when everything
    fits on one page.
    """
    return PageLinks(
        current=current,
        total_pages=total_pages,
        numbers=list(range(1, min(total_pages, max_links) + 1)),
        show_ellipsis=total_pages > max_links,
        has_previous=current > 1,
        has_next=current < total_pages,
        visible=total_items > page_size,
    )


def next_page(current: int, total_pages: int) -> int:
    return current + 1 if current < total_pages else current


def previous_page(current: int) -> int:
    return current - 1 if current > 1 else current
