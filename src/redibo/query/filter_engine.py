"""Compound predicate over canonical comments."""

from datetime import datetime, timezone
from typing import Callable, List, Sequence

from ..reviews.review_models import CanonicalComment
from .query_spec import DateBound, QuerySpec

Predicate = Callable[[CanonicalComment], bool]


def _matches_text(comment: CanonicalComment, term: str) -> bool:
    """Case-insensitive substring of the embedded vehicle's brand or model."""
    if comment.vehicle is None:
        return False
    return term in comment.vehicle.brand.lower() or term in comment.vehicle.model.lower()


def _as_aware(bound: datetime) -> datetime:
    if bound.tzinfo is None:
        return bound.replace(tzinfo=timezone.utc)
    return bound


def _after_lower(created_at: datetime, bound: DateBound) -> bool:
    if isinstance(bound, datetime):
        return created_at >= _as_aware(bound)
    return created_at.astimezone(timezone.utc).date() >= bound


def _before_upper(created_at: datetime, bound: DateBound) -> bool:
    if isinstance(bound, datetime):
        return created_at <= _as_aware(bound)
    # A plain date covers the whole day
    return created_at.astimezone(timezone.utc).date() <= bound


def build_predicates(spec: QuerySpec) -> List[Predicate]:
    """Return the active clauses for ``spec``; all of them must match."""
    predicates: List[Predicate] = []

    if spec.has_search:
        term = spec.search_term.lower()
        predicates.append(lambda c: _matches_text(c, term))

    if spec.has_date_range:
        lower, upper = spec.date_from, spec.date_to
        predicates.append(
            lambda c: _after_lower(c.created_at, lower) and _before_upper(c.created_at, upper)
        )

    return predicates


def filter_comments(records: Sequence[CanonicalComment], spec: QuerySpec) -> List[CanonicalComment]:
    """
    Apply the search and date clauses of ``spec``.

    Args:
        records: Canonical comments (left untouched)
        spec: Current query parameters

    Returns:
        New list with the matching records, in input order
    """
    predicates = build_predicates(spec)
    if not predicates:
        return list(records)
    return [record for record in records if all(p(record) for p in predicates)]
