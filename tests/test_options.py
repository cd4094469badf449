"""Tests for crunchylib.options and the option sets in crunchylib.search."""

from crunchylib.options import (
    BrowseSortType,
    Category,
    MediaType,
    QueryType,
    query_pairs,
    serialize,
)
from crunchylib.search import BrowseOptions, QueryOptions


def test_browse_defaults_emit_only_defaulted_fields():
    assert BrowseOptions().into_query() == [("sort", "newly_added"), ("n", "20")]


def test_query_defaults_emit_only_limit():
    assert QueryOptions().into_query() == [("n", "20")]


def test_browse_every_field_set_in_declared_order():
    options = BrowseOptions(
        categories=[Category.ACTION, Category.DRAMA],
        is_dubbed=True,
        is_subbed=False,
        simulcast_season="fall-2022",
        sort=BrowseSortType.POPULARITY,
        media_type=MediaType.MOVIE_LISTING,
        limit=5,
        start=10,
    )

    assert options.into_query() == [
        ("categories", "action,drama"),
        ("is_dubbed", "true"),
        ("is_subbed", "false"),
        ("season_tag", "fall-2022"),
        ("sort", "popularity"),
        ("type", "movie_listing"),
        ("n", "5"),
        ("start", "10"),
    ]


def test_query_every_field_set():
    options = QueryOptions(limit=3, result_type=QueryType.EPISODE)
    assert options.into_query() == [("n", "3"), ("type", "episode")]


def test_defaulted_field_can_be_unset():
    assert BrowseOptions(sort=None, limit=None).into_query() == []


def test_into_query_is_idempotent():
    options = BrowseOptions(categories=[Category.SHONEN], start=40)
    assert options.into_query() == options.into_query()


def test_empty_list_is_omitted():
    assert BrowseOptions(categories=[]).into_query() == [
        ("sort", "newly_added"),
        ("n", "20"),
    ]


def test_zero_is_not_treated_as_unset():
    assert query_pairs(("start", 0), ("is_dubbed", False)) == [
        ("start", "0"),
        ("is_dubbed", "false"),
    ]


def test_serialize():
    assert serialize(True) == "true"
    assert serialize(BrowseSortType.ALPHABETICAL) == "alphabetical"
    assert serialize(7) == "7"
    assert serialize("winter-2023") == "winter-2023"
    assert serialize([Category.SCI_FI, Category.SLICE_OF_LIFE]) == "sci-fi,slice+of+life"
