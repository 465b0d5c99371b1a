"""filter → sort → clamp → paginate, run from scratch on every change."""

from typing import Sequence

from ..reviews.review_models import CanonicalComment
from .filter_engine import filter_comments
from .paginator import PageWindow, clamp_page, paginate, total_pages_for
from .query_spec import QuerySpec
from .sort_engine import sort_comments


def run_comment_pipeline(
    records: Sequence[CanonicalComment],
    spec: QuerySpec,
) -> PageWindow[CanonicalComment]:
    """
    Derive the displayed page for ``spec``.

    The requested page is clamped to the filtered page count, so the
    returned ``PageWindow.page`` may differ from ``spec.page``.

    Args:
        records: Full canonical collection (not modified)
        spec: Current query parameters

    Returns:
        PageWindow with the visible items and page counters
    """
    filtered = filter_comments(records, spec)
    ordered = sort_comments(filtered, spec.sort_key, spec.sort_direction)
    total_pages = total_pages_for(len(ordered), spec.page_size)
    page = clamp_page(spec.page, total_pages)
    return paginate(ordered, page, spec.page_size)
