import asyncio
from dataclasses import KW_ONLY, dataclass, field
from typing import Any

import httpx
from rich import print
from rich.console import Console
from rich.table import Table

from crunchylib.errors import (
    AuthenticationError,
    CrunchyrollError,
    RequestError,
    ShapeMismatchError,
)
from crunchylib.options import Locale
from crunchylib.search import (
    BrowseOptions,
    QueryOptions,
    QueryResults,
    decode_query_results,
)
from crunchylib.types import (
    BulkResult,
    Episode,
    MediaCollection,
    MediaEnvelope,
    Movie,
    MovieListing,
    Panel,
    Season,
    Series,
    SimulcastSeason,
    TokenResponse,
    parse_media,
    validate,
)

BASE_URL = "https://www.crunchyroll.com"
TOKEN_URL = f"{BASE_URL}/auth/v1/token"
# public client id of the web player, "cr_web:"
BASIC_AUTH = "Basic Y3Jfd2ViOg=="

console = Console()


def parse_token(resp: httpx.Response) -> TokenResponse:
    try:
        data = resp.json()
    except ValueError as e:
        raise ShapeMismatchError(
            f"POST {TOKEN_URL} did not return JSON", value=resp.text
        ) from e
    return validate(TokenResponse, data)


@dataclass
class Crunchyroll:
    locale: Locale = Locale.EN_US
    _: KW_ONLY
    debug: bool = False
    access_token: str | None = field(default=None, init=False)
    refresh_token: str | None = field(default=None, init=False)
    account_id: str | None = field(default=None, init=False)

    def __post_init__(self):
        self.client = httpx.AsyncClient(
            transport=httpx.AsyncHTTPTransport(
                retries=5,
                limits=httpx.Limits(
                    max_connections=20,
                ),
            ),
            timeout=30,
        )
        self.semaphore = asyncio.Semaphore(20)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.close()

    async def close(self):
        await self.client.aclose()

    async def login_with_credentials(self, email: str, password: str):
        await self.authenticate(
            {
                "grant_type": "password",
                "username": email,
                "password": password,
                "scope": "offline_access",
            }
        )

    async def login_with_refresh_token(self, refresh_token: str):
        await self.authenticate(
            {
                "grant_type": "refresh_token",
                "refresh_token": refresh_token,
                "scope": "offline_access",
            }
        )

    async def login_anonymously(self):
        await self.authenticate({"grant_type": "client_id"})

    async def authenticate(self, data: dict[str, str]):
        if self.debug:
            print(f"POST {TOKEN_URL} grant_type={data['grant_type']}")
        try:
            resp = await self.client.post(
                TOKEN_URL, data=data, headers={"Authorization": BASIC_AUTH}
            )
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise AuthenticationError(
                f"Authentication failed with status {e.response.status_code}",
                url=TOKEN_URL,
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise RequestError(f"POST {TOKEN_URL} failed: {e}", url=TOKEN_URL) from e

        token = parse_token(resp)
        if self.debug:
            print(f"logged in as {token.account_id}")
        self.access_token = token.access_token
        self.refresh_token = token.refresh_token
        self.account_id = token.account_id

    def get_auth_header(self) -> dict[str, str]:
        if self.access_token is None:
            raise CrunchyrollError("Not logged in, call one of the login methods first")
        return {"Authorization": f"Bearer {self.access_token}"}

    async def get(self, url: str, params: list[tuple[str, str]] | None = None) -> Any:
        params = [*(params or []), ("locale", self.locale.value)]
        if self.debug:
            print(f"GET {url} {params}")
        headers = self.get_auth_header()
        async with self.semaphore:
            try:
                resp = await self.client.get(url, params=params, headers=headers)
                resp.raise_for_status()
            except httpx.HTTPStatusError as e:
                raise RequestError(
                    f"GET {url} returned {e.response.status_code}",
                    url=url,
                    status_code=e.response.status_code,
                ) from e
            except httpx.HTTPError as e:
                raise RequestError(f"GET {url} failed: {e}", url=url) from e
        try:
            data = resp.json()
        except ValueError as e:
            raise ShapeMismatchError(
                f"GET {url} did not return JSON", value=resp.text
            ) from e
        if self.debug:
            print(data)
        return data

    async def query(
        self, query: str, options: QueryOptions | None = None
    ) -> QueryResults:
        """Search the catalog for ``query``."""
        options = options or QueryOptions()
        url = f"{BASE_URL}/content/v1/search"
        data = await self.get(url, [*options.into_query(), ("q", query)])
        return decode_query_results(data)

    async def browse(
        self, options: BrowseOptions | None = None
    ) -> BulkResult[MediaCollection]:
        """Browse the catalog, filtered and sorted by ``options``."""
        options = options or BrowseOptions()
        url = f"{BASE_URL}/content/v1/browse"
        data = await self.get(url, options.into_query())
        return validate(BulkResult[MediaCollection], data)

    async def simulcast_seasons(self) -> list[SimulcastSeason]:
        url = f"{BASE_URL}/content/v1/season_list"
        data = await self.get(url)
        return validate(BulkResult[SimulcastSeason], data).items

    async def media_from_id(
        self, media_id: str, kind: type[Panel] | None = None
    ) -> Panel:
        url = f"{BASE_URL}/content/v2/cms/objects/{media_id}"
        data = await self.get(url)
        envelope = validate(MediaEnvelope, data)
        if len(envelope.data) == 0:
            raise CrunchyrollError(f"No media found for id {media_id}")
        media = envelope.data[0]
        if kind is not None and not isinstance(media, kind):
            raise ShapeMismatchError(
                f"{media_id} is a {media.type}, not a {kind.TAG}", value=data
            )
        return media

    async def get_listing(self, url: str, kind: type[Panel]) -> list[Any]:
        data = await self.get(url)
        if not isinstance(data, dict) or not isinstance(data.get("data"), list):
            raise ShapeMismatchError(f"GET {url} returned no data list", value=data)
        return [parse_media(item, kind) for item in data["data"]]

    async def seasons(self, series_id: str) -> list[Season]:
        url = f"{BASE_URL}/content/v2/cms/series/{series_id}/seasons"
        return await self.get_listing(url, Season)

    async def episodes(self, season_id: str) -> list[Episode]:
        url = f"{BASE_URL}/content/v2/cms/seasons/{season_id}/episodes"
        return await self.get_listing(url, Episode)

    async def movies(self, movie_listing_id: str) -> list[Movie]:
        url = f"{BASE_URL}/content/v2/cms/movie_listings/{movie_listing_id}/movies"
        return await self.get_listing(url, Movie)

    def render_table(self, items: list[Panel]):
        table = Table("Type", "Title", "Year", "ID")
        for item in items:
            name = item.title
            year = str(item.year or "")

            if isinstance(item, Series):
                style = "magenta"
            elif isinstance(item, Episode):
                style = "cyan"
                name = f"{item.title} ({item.series_title})"
            elif isinstance(item, (MovieListing, Movie)):
                style = "green"
            else:
                style = None

            table.add_row(item.type, name, year, item.id, style=style)
        console.print(table)

    async def search(self, query: str, options: QueryOptions | None = None):
        results = await self.query(query, options)
        kinds = results.kinds()
        if len(kinds) == 0:
            print(f'No results found for "{query}"')
            return
        for kind in kinds:
            bucket = getattr(results, kind.value)
            console.print(
                f"[bold]{kind.value}[/bold] ({len(bucket.items)} of {bucket.total})"
            )
            self.render_table(bucket.items)

    async def show_catalog(self, options: BrowseOptions | None = None):
        result = await self.browse(options)
        if len(result.items) == 0:
            print("Nothing to browse")
            return
        self.render_table(result.items)

    async def show_simulcast_seasons(self):
        seasons = await self.simulcast_seasons()
        table = Table("Tag", "Title", "Description")
        for season in seasons:
            table.add_row(
                season.id, season.localization.title, season.localization.description
            )
        console.print(table)
