import copy
from dataclasses import dataclass
from enum import Enum
from typing import Any, assert_never

from crunchylib.errors import ShapeMismatchError, UnknownResultTypeError
from crunchylib.options import (
    BrowseSortType,
    Category,
    MediaType,
    QueryType,
    query_pairs,
)
from crunchylib.types import (
    BulkResult,
    Episode,
    MediaCollection,
    Model,
    MovieListing,
    Series,
    validate,
)


@dataclass
class BrowseOptions:
    # categories the entries must belong to
    categories: list[Category] | None = None
    is_dubbed: bool | None = None
    is_subbed: bool | None = None
    # a tag from Crunchyroll.simulcast_seasons()
    simulcast_season: str | None = None
    sort: BrowseSortType | None = BrowseSortType.NEWLY_ADDED
    media_type: MediaType | None = None
    limit: int | None = 20
    start: int | None = None

    def into_query(self) -> list[tuple[str, str]]:
        return query_pairs(
            ("categories", self.categories),
            ("is_dubbed", self.is_dubbed),
            ("is_subbed", self.is_subbed),
            ("season_tag", self.simulcast_season),
            ("sort", self.sort),
            ("type", self.media_type),
            ("n", self.limit),
            ("start", self.start),
        )


@dataclass
class QueryOptions:
    limit: int | None = 20
    # restrict the results to a single kind, every bucket is filled otherwise
    result_type: QueryType | None = None

    def into_query(self) -> list[tuple[str, str]]:
        return query_pairs(
            ("n", self.limit),
            ("type", self.result_type),
        )


class ResultType(str, Enum):
    TOP_RESULTS = "top_results"
    SERIES = "series"
    MOVIE_LISTING = "movie_listing"
    EPISODE = "episode"


class ResultGroup(Model):
    type: str
    total: int = 0
    items: list[dict[str, Any]] = []


class QueryEnvelope(Model):
    # groups are checked one by one, tag first
    items: list[dict[str, Any]] = []
    total: int = 0


TopResults = BulkResult[MediaCollection]
SeriesResults = BulkResult[Series]
MovieListingResults = BulkResult[MovieListing]
EpisodeResults = BulkResult[Episode]


class QueryResults(Model):
    """
    Results of a catalog search, one bucket per result type.

    A bucket is None when the response carried no group of that type, e.g.
    every bucket but ``series`` when searching with ``QueryType.SERIES``.
    """

    total: int = 0
    top_results: TopResults | None = None
    series: SeriesResults | None = None
    movie_listing: MovieListingResults | None = None
    episode: EpisodeResults | None = None

    def kinds(self) -> list[ResultType]:
        buckets = {
            ResultType.TOP_RESULTS: self.top_results,
            ResultType.SERIES: self.series,
            ResultType.MOVIE_LISTING: self.movie_listing,
            ResultType.EPISODE: self.episode,
        }
        return [kind for kind, bucket in buckets.items() if bucket is not None]


def decode_query_results(envelope: Any) -> QueryResults:
    """
    Split a search response into typed buckets.

    The response is ``{"items": [{"type": ..., "total": ..., "items": [...]}],
    "total": ...}``. Each group keeps the total reported by the service.

    Raises UnknownResultTypeError for a group type outside ResultType and
    ShapeMismatchError when an item does not decode to its group's kind. No
    results are returned if any group fails.
    """
    raw = validate(QueryEnvelope, envelope)

    top_results = None
    series = None
    movie_listing = None
    episode = None

    for raw_group in raw.items:
        tag = raw_group.get("type")
        if not isinstance(tag, str):
            raise ShapeMismatchError(
                "result group without a type", value=copy.deepcopy(envelope)
            )
        try:
            result_type = ResultType(tag)
        except ValueError:
            raise UnknownResultTypeError(tag, value=copy.deepcopy(envelope)) from None

        group = validate(ResultGroup, raw_group)

        bucket = {"items": group.items, "total": group.total}
        match result_type:
            case ResultType.TOP_RESULTS:
                top_results = validate(TopResults, bucket)
            case ResultType.SERIES:
                series = validate(SeriesResults, bucket)
            case ResultType.MOVIE_LISTING:
                movie_listing = validate(MovieListingResults, bucket)
            case ResultType.EPISODE:
                episode = validate(EpisodeResults, bucket)
            case _:
                assert_never(result_type)

    return QueryResults(
        total=raw.total,
        top_results=top_results,
        series=series,
        movie_listing=movie_listing,
        episode=episode,
    )
