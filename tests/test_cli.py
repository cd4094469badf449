from crunchylib import build_parser
from crunchylib.options import MediaType, QueryType


def test_search_arguments():
    args = build_parser().parse_args(["search", "spy", "--episode", "-n", "5"])

    assert args.cmd == "search"
    assert args.query == "spy"
    assert args.result_type == QueryType.EPISODE
    assert args.limit == 5


def test_browse_defaults():
    args = build_parser().parse_args(["browse"])

    assert args.sort == "newly_added"
    assert args.limit == 20
    assert args.categories is None
    assert args.dubbed is None
    assert args.media_type is None


def test_browse_arguments():
    args = build_parser().parse_args(
        [
            "--locale",
            "es-LA",
            "browse",
            "--category",
            "action",
            "--category",
            "drama",
            "--dubbed",
            "--movie",
            "--start",
            "40",
        ]
    )

    assert args.locale == "es-LA"
    assert args.categories == ["action", "drama"]
    assert args.dubbed is True
    assert args.media_type == MediaType.MOVIE_LISTING
    assert args.start == 40
