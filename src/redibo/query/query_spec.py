"""Query parameters driving one derived comment view."""

from datetime import date, datetime
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

COMMENTS_PAGE_SIZE = 4

DateBound = Optional[Union[datetime, date]]


class SortKey(str, Enum):
    TEMPORAL = "date"
    RATING = "rating"
    NAME = "name"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class QuerySpec(BaseModel):
    """Filter/sort/page parameters for a comment listing.

    Instances are immutable; the ``with_*`` helpers return an updated copy.
    Every change to the search term, date range, sort key or direction sends
    the listing back to page 1.
    """
    model_config = ConfigDict(frozen=True)

    search_term: str = ""
    date_from: DateBound = None
    date_to: DateBound = None
    sort_key: SortKey = SortKey.TEMPORAL
    sort_direction: SortDirection = SortDirection.DESC
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=COMMENTS_PAGE_SIZE, ge=1)

    @property
    def has_search(self) -> bool:
        return bool(self.search_term)

    @property
    def has_date_range(self) -> bool:
        """The date clause only applies once both bounds are picked."""
        return self.date_from is not None and self.date_to is not None

    def with_search(self, term: Optional[str]) -> "QuerySpec":
        return self.model_copy(update={"search_term": term or "", "page": 1})

    def with_date_range(self, date_from: DateBound, date_to: DateBound) -> "QuerySpec":
        return self.model_copy(update={"date_from": date_from, "date_to": date_to, "page": 1})

    def with_sort_key(self, key: SortKey) -> "QuerySpec":
        return self.model_copy(update={"sort_key": SortKey(key), "page": 1})

    def with_sort_direction(self, direction: SortDirection) -> "QuerySpec":
        return self.model_copy(update={"sort_direction": SortDirection(direction), "page": 1})

    def with_page(self, page: int) -> "QuerySpec":
        """Move to ``page``; the pipeline clamps it against the filtered count."""
        return self.model_copy(update={"page": max(1, int(page))})
