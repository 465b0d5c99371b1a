"""Comment query engine: filter, sort and paginate canonical comments."""

from .filter_engine import filter_comments
from .paginator import PageLinks, PageWindow, clamp_page, page_links, paginate
from .pipeline import run_comment_pipeline
from .query_spec import COMMENTS_PAGE_SIZE, QuerySpec, SortDirection, SortKey
from .sort_engine import sort_comments

__all__ = [
    "COMMENTS_PAGE_SIZE",
    "PageLinks",
    "PageWindow",
    "QuerySpec",
    "SortDirection",
    "SortKey",
    "clamp_page",
    "filter_comments",
    "page_links",
    "paginate",
    "run_comment_pipeline",
    "sort_comments",
]
