"""State holder for the "comments on my vehicles" listing."""

from dataclasses import dataclass
from typing import Any, List, Optional

from ..parsing.normalizer import MalformedRecordError, normalize_comment_list
from ..query.paginator import MAX_PAGE_LINKS, PageLinks, PageWindow, next_page, page_links, previous_page
from ..query.pipeline import run_comment_pipeline
from ..query.query_spec import COMMENTS_PAGE_SIZE, DateBound, QuerySpec, SortDirection, SortKey
from ..reviews.review_models import CanonicalComment
from ..state.selection import SelectionState
from ..utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class LoadResult:
    ok: bool
    count: int = 0
    error: Optional[str] = None


class CommentListing:
    """Canonical comments plus the QuerySpec and selection that drive the view.

    Every mutation replaces the QuerySpec; ``view()`` re-runs the whole
    pipeline against the current collection.
    """

    def __init__(self, page_size: int = COMMENTS_PAGE_SIZE, max_page_links: int = MAX_PAGE_LINKS):
        self.comments: List[CanonicalComment] = []
        self.query = QuerySpec(page_size=page_size)
        self.selection = SelectionState()
        self.max_page_links = max_page_links
        self.last_error: Optional[str] = None

    def load(self, payload: Any) -> LoadResult:
        """
        Replace the collection with a freshly fetched comment list.

        A malformed payload empties the collection instead of keeping stale
        data; the error message is returned for the empty state.
        """
        try:
            comments = normalize_comment_list(payload)
        except MalformedRecordError as e:
            logger.warning("Discarding comment payload: %s", e)
            self.comments = []
            self.last_error = str(e)
            self.selection.clear()
            return LoadResult(ok=False, error=str(e))

        self.comments = comments
        self.last_error = None
        self.selection.prune(self.comments)
        self.view()
        logger.info("Loaded %d comments", len(comments))
        return LoadResult(ok=True, count=len(comments))

    def set_search(self, term: Optional[str]) -> None:
        self.query = self.query.with_search(term)

    def set_date_range(self, date_from: DateBound, date_to: DateBound) -> None:
        self.query = self.query.with_date_range(date_from, date_to)

    def clear_date_range(self) -> None:
        self.query = self.query.with_date_range(None, None)

    def set_sort_key(self, key: SortKey) -> None:
        self.query = self.query.with_sort_key(key)

    def set_sort_direction(self, direction: SortDirection) -> None:
        self.query = self.query.with_sort_direction(direction)

    def go_to_page(self, page: int) -> None:
        self.query = self.query.with_page(page)
        self.view()

    def next_page(self) -> None:
        window = self.view()
        self.query = self.query.with_page(next_page(window.page, window.total_pages))

    def previous_page(self) -> None:
        window = self.view()
        self.query = self.query.with_page(previous_page(window.page))

    def view(self) -> PageWindow[CanonicalComment]:
        """Derive the visible page, clamping the stored page number if needed."""
        window = run_comment_pipeline(self.comments, self.query)
        if window.page != self.query.page:
            self.query = self.query.with_page(window.page)
        return window

    def links(self) -> PageLinks:
        window = self.view()
        return page_links(
            window.page,
            window.total_pages,
            window.total_items,
            self.query.page_size,
            max_links=self.max_page_links,
        )
