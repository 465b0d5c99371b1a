"""Ordering of canonical comments by a selected key."""

import unicodedata
from typing import Any, Callable, Dict, List, Sequence, Tuple

from ..reviews.review_models import CanonicalComment
from ..utils.time import to_epoch_millis
from .query_spec import SortDirection, SortKey


def display_name(comment: CanonicalComment) -> str:
    """``"brand model"`` of the embedded vehicle; missing parts render empty."""
    vehicle = comment.vehicle
    brand = vehicle.brand if vehicle else ""
    model = vehicle.model if vehicle else ""
    return f"{brand} {model}"


def collation_key(text: str) -> Tuple[str, str]:
    """
    Locale-aware, case-insensitive sort key.

    Accents are ignored at the primary level ("Ñ" sorts with "N", "é" with
    "e"); the case-folded original breaks ties so the order stays total.
    """
    folded = text.casefold()
    decomposed = unicodedata.normalize("NFKD", folded)
    primary = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return primary, folded


SORT_KEYS: Dict[SortKey, Callable[[CanonicalComment], Any]] = {
    SortKey.TEMPORAL: lambda c: to_epoch_millis(c.created_at),
    SortKey.RATING: lambda c: c.rating,
    SortKey.NAME: lambda c: collation_key(display_name(c)),
}


def sort_comments(
    records: Sequence[CanonicalComment],
    key: SortKey,
    direction: SortDirection,
) -> List[CanonicalComment]:
    """
    Return a new list ordered by ``key``.

    DESC reverses the ASC comparison; records with equal keys keep their
    input order under both directions.
    """
    key_func = SORT_KEYS[SortKey(key)]
    return sorted(records, key=key_func, reverse=SortDirection(direction) is SortDirection.DESC)
