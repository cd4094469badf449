#!/usr/bin/env python3
# PYTHON_ARGCOMPLETE_OK
import argparse
import asyncio
import importlib.metadata
import signal
import sys

import argcomplete
from rich.console import Console

from .config import CrunchyConfigs
from .crunchyroll import Crunchyroll
from .errors import (
    AuthenticationError,
    CrunchyrollError,
    DecodeError,
    RequestError,
    ShapeMismatchError,
    UnknownResultTypeError,
)
from .options import BrowseSortType, Category, Locale, MediaType, QueryType
from .search import BrowseOptions, QueryOptions, QueryResults, ResultType
from .types import (
    BulkResult,
    Episode,
    MediaCollection,
    Movie,
    MovieListing,
    Season,
    Series,
    SimulcastSeason,
)

__all__ = [
    "AuthenticationError",
    "BrowseOptions",
    "BrowseSortType",
    "BulkResult",
    "Category",
    "Crunchyroll",
    "CrunchyrollError",
    "DecodeError",
    "Episode",
    "Locale",
    "MediaCollection",
    "MediaType",
    "Movie",
    "MovieListing",
    "QueryOptions",
    "QueryResults",
    "QueryType",
    "RequestError",
    "ResultType",
    "Season",
    "Series",
    "ShapeMismatchError",
    "SimulcastSeason",
    "UnknownResultTypeError",
]

console = Console(stderr=True)


def signal_handler(sig, frame):
    sys.exit(0)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="crunchylib")

    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {importlib.metadata.version('crunchylib')}",
        help="show crunchylib version number and exit",
    )

    parser.add_argument("--config", help="config name to use from ~/.crunchylib")
    parser.add_argument("--refresh-token", help="Crunchyroll refresh token")
    parser.add_argument(
        "--locale",
        choices=[locale.value for locale in Locale],
        help="locale of titles and descriptions, e.g. en-US",
    )
    parser.add_argument(
        "--debug",
        help="print HTTP requests and responses to and from Crunchyroll",
        action="store_true",
    )

    subparsers = parser.add_subparsers(title="commands", dest="cmd")

    login_parser = subparsers.add_parser("login")
    login_parser.add_argument("--name", help="name of the configuration")
    login_parser.add_argument("--email", help="account email")

    info_parser = subparsers.add_parser("info")
    info_parser.add_argument("media_id", help="Crunchyroll media ID")

    search_parser = subparsers.add_parser("search")
    search_parser.add_argument("query", help="search query")
    search_parser.add_argument("-n", "--limit", type=int, default=20)
    type_group = search_parser.add_mutually_exclusive_group()
    type_group.add_argument(
        "--series", dest="result_type", action="store_const", const=QueryType.SERIES
    )
    type_group.add_argument(
        "--movie",
        dest="result_type",
        action="store_const",
        const=QueryType.MOVIE_LISTING,
    )
    type_group.add_argument(
        "--episode", dest="result_type", action="store_const", const=QueryType.EPISODE
    )

    browse_parser = subparsers.add_parser("browse")
    browse_parser.add_argument(
        "--sort",
        choices=[sort.value for sort in BrowseSortType],
        default=BrowseSortType.NEWLY_ADDED.value,
    )
    browse_parser.add_argument(
        "--category",
        dest="categories",
        action="append",
        choices=[category.value for category in Category],
    )
    browse_parser.add_argument("--dubbed", action="store_true", default=None)
    browse_parser.add_argument("--subbed", action="store_true", default=None)
    browse_parser.add_argument("--season", help="simulcast season tag, see `seasons`")
    media_group = browse_parser.add_mutually_exclusive_group()
    media_group.add_argument(
        "--series", dest="media_type", action="store_const", const=MediaType.SERIES
    )
    media_group.add_argument(
        "--movie",
        dest="media_type",
        action="store_const",
        const=MediaType.MOVIE_LISTING,
    )
    browse_parser.add_argument("-n", "--limit", type=int, default=20)
    browse_parser.add_argument("--start", type=int)

    subparsers.add_parser("seasons")

    return parser


async def run():
    parser = build_parser()
    argcomplete.autocomplete(parser)
    args = parser.parse_args()

    if args.cmd is None:
        parser.print_help(sys.stderr)
        sys.exit(1)

    configs = CrunchyConfigs.load()

    if args.cmd == "login":
        configs.configure(email=args.email, name=args.name)
        configs.save()
        return

    config = configs.resolve(parser, args)

    async with Crunchyroll(config.locale, debug=args.debug) as crunchy:
        if config.refresh_token is None:
            await crunchy.login_anonymously()
        else:
            await crunchy.login_with_refresh_token(config.refresh_token)
            if config.name is not None and crunchy.refresh_token:
                configs.update_token(config.name, crunchy.refresh_token)
                configs.save()

        if args.cmd == "info":
            media = await crunchy.media_from_id(args.media_id)
            print(media.model_dump_json(indent=2))
            return

        if args.cmd == "search":
            options = QueryOptions(limit=args.limit, result_type=args.result_type)
            await crunchy.search(args.query, options)
            return

        if args.cmd == "browse":
            options = BrowseOptions(
                categories=[Category(c) for c in args.categories or []],
                is_dubbed=args.dubbed,
                is_subbed=args.subbed,
                simulcast_season=args.season,
                sort=BrowseSortType(args.sort),
                media_type=args.media_type,
                limit=args.limit,
                start=args.start,
            )
            await crunchy.show_catalog(options)
            return

        if args.cmd == "seasons":
            await crunchy.show_simulcast_seasons()
            return


def main():
    signal.signal(signal.SIGINT, signal_handler)
    try:
        asyncio.run(run())
    except CrunchyrollError as e:
        console.print(f"[bold red]{e}[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
