"""Tests for comment ordering."""

from redibo.query.query_spec import SortDirection, SortKey
from redibo.query.sort_engine import collation_key, display_name, sort_comments

from conftest import make_comment


def _ids(comments):
    return [c.id for c in comments]


def test_temporal_ascending_is_earliest_first(six_comments):
    shuffled = [six_comments[i] for i in (3, 0, 5, 2, 4, 1)]
    result = sort_comments(shuffled, SortKey.TEMPORAL, SortDirection.ASC)
    assert _ids(result) == [1, 2, 3, 4, 5, 6]


def test_temporal_descending_is_most_recent_first(six_comments):
    result = sort_comments(six_comments, SortKey.TEMPORAL, SortDirection.DESC)
    assert _ids(result) == [6, 5, 4, 3, 2, 1]


def test_rating_ascending(six_comments):
    result = sort_comments(six_comments, SortKey.RATING, SortDirection.ASC)
    assert _ids(result) == [5, 4, 2, 6, 1, 3]


def test_name_sort_is_case_insensitive():
    comments = [
        make_comment(1, brand="toyota", model="Yaris"),
        make_comment(2, brand="Audi", model="A4"),
        make_comment(3, brand="BMW", model="X1"),
    ]
    result = sort_comments(comments, SortKey.NAME, SortDirection.ASC)
    assert _ids(result) == [2, 3, 1]


def test_name_sort_ignores_accents_at_primary_level():
    comments = [
        make_comment(1, brand="Oz", model=""),
        make_comment(2, brand="Ñandú", model=""),
        make_comment(3, brand="Nissan", model=""),
    ]
    result = sort_comments(comments, SortKey.NAME, SortDirection.ASC)
    assert _ids(result) == [2, 3, 1]


def test_missing_vehicle_sorts_as_empty_name():
    comments = [make_comment(1, brand="Audi"), make_comment(2, with_vehicle=False)]

    result = sort_comments(comments, SortKey.NAME, SortDirection.ASC)

    assert _ids(result) == [2, 1]
    assert display_name(comments[1]) == " "


def test_collation_key_folds_case_and_accents():
    assert collation_key("Éclair")[0] == collation_key("eclair")[0]


def test_descending_reverses_distinct_keys(six_comments):
    for key in (SortKey.TEMPORAL, SortKey.NAME):
        ascending = sort_comments(six_comments, key, SortDirection.ASC)
        descending = sort_comments(ascending, key, SortDirection.DESC)
        assert _ids(descending) == list(reversed(_ids(ascending)))


def test_ties_keep_input_order_in_both_directions():
    comments = [
        make_comment(1, rating=4),
        make_comment(2, rating=2),
        make_comment(3, rating=4),
        make_comment(4, rating=2),
    ]

    ascending = sort_comments(comments, SortKey.RATING, SortDirection.ASC)
    descending = sort_comments(comments, SortKey.RATING, SortDirection.DESC)

    assert _ids(ascending) == [2, 4, 1, 3]
    assert _ids(descending) == [1, 3, 2, 4]


def test_sort_returns_new_list(six_comments):
    snapshot = list(six_comments)
    result = sort_comments(six_comments, SortKey.RATING, SortDirection.DESC)
    assert result is not six_comments
    assert six_comments == snapshot


def test_string_enum_values_are_accepted(six_comments):
    result = sort_comments(six_comments, "rating", "desc")
    assert _ids(result)[0] == 3
