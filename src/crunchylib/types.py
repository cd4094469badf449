from datetime import datetime
from typing import Annotated, Any, ClassVar, Generic, Literal, TypeVar, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    model_validator,
)

from crunchylib.errors import ShapeMismatchError

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)


class Model(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class TokenResponse(Model):
    access_token: str
    refresh_token: str | None = None
    expires_in: int = 0
    token_type: str = ""
    account_id: str | None = None
    country: str = ""


class Image(Model):
    source: str
    type: str = ""
    width: int = 0
    height: int = 0


class Images(Model):
    poster_tall: list[list[Image]] = []
    poster_wide: list[list[Image]] = []
    thumbnail: list[list[Image]] = []


class SearchMetadata(Model):
    score: float = 0.0


class Panel(Model):
    """
    Fields shared by every catalog object.

    The service nests the kind specific fields under ``<type>_metadata``
    (``series_metadata``, ``episode_metadata``, ...) in v1 and object
    responses, while v2 listings return them flat. Both shapes are accepted.
    """

    TAG: ClassVar[str]

    id: str
    title: str = ""
    slug_title: str = ""
    description: str = ""
    channel_id: str = ""
    external_id: str = ""
    images: Images = Field(default_factory=Images)
    search_metadata: SearchMetadata | None = None

    @model_validator(mode="before")
    @classmethod
    def flatten_metadata(cls, data: Any) -> Any:
        if isinstance(data, dict):
            metadata = data.get(f"{data.get('type')}_metadata")
            if isinstance(metadata, dict):
                data = {**metadata, **data}
        return data

    @property
    def year(self) -> int | None:
        return None


class Series(Panel):
    TAG: ClassVar[str] = "series"

    type: Literal["series"]
    episode_count: int = 0
    season_count: int = 0
    is_mature: bool = False
    is_subbed: bool = False
    is_dubbed: bool = False
    is_simulcast: bool = False
    audio_locales: list[str] = []
    subtitle_locales: list[str] = []
    maturity_ratings: list[str] = []
    series_launch_year: int | None = None

    @property
    def year(self) -> int | None:
        return self.series_launch_year


class Season(Panel):
    TAG: ClassVar[str] = "season"

    type: Literal["season"]
    series_id: str
    season_number: int = 0
    number_of_episodes: int = 0
    is_subbed: bool = False
    is_dubbed: bool = False
    audio_locales: list[str] = []
    subtitle_locales: list[str] = []


class Episode(Panel):
    TAG: ClassVar[str] = "episode"

    type: Literal["episode"]
    series_id: str
    series_title: str = ""
    season_id: str = ""
    season_title: str = ""
    season_number: int = 0
    episode: str = ""
    episode_number: int | None = None
    sequence_number: float = 0
    duration_ms: int = 0
    episode_air_date: datetime | None = None
    is_premium_only: bool = False
    is_subbed: bool = False
    is_dubbed: bool = False
    audio_locale: str = ""
    subtitle_locales: list[str] = []

    @property
    def year(self) -> int | None:
        if self.episode_air_date is None:
            return None
        return self.episode_air_date.year


class MovieListing(Panel):
    TAG: ClassVar[str] = "movie_listing"

    type: Literal["movie_listing"]
    movie_release_year: int | None = None
    duration_ms: int = 0
    is_premium_only: bool = False
    is_mature: bool = False
    is_subbed: bool = False
    is_dubbed: bool = False

    @property
    def year(self) -> int | None:
        return self.movie_release_year


class Movie(Panel):
    TAG: ClassVar[str] = "movie"

    type: Literal["movie"]
    listing_id: str = ""
    movie_listing_title: str = ""
    duration_ms: int = 0
    premium_available_date: datetime | None = None
    is_premium_only: bool = False


MediaCollection = Annotated[
    Union[Series, Season, Episode, MovieListing, Movie], Field(discriminator="type")
]

media_collection: TypeAdapter[Panel] = TypeAdapter(MediaCollection)


class BulkResult(Model, Generic[T]):
    items: list[T] = []
    total: int = 0


class MediaEnvelope(Model):
    data: list[MediaCollection] = []
    total: int = 0


class SimulcastSeasonLocalization(Model):
    title: str = ""
    description: str = ""


class SimulcastSeason(Model):
    id: str
    localization: SimulcastSeasonLocalization = Field(
        default_factory=SimulcastSeasonLocalization
    )


def validate(model: type[M], data: Any) -> M:
    """Validate ``data`` against ``model``, raising ShapeMismatchError on failure."""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise ShapeMismatchError(
            f"failed to decode {model.__name__}: {e}", value=data
        ) from e


def parse_media(raw: dict[str, Any], kind: type[Panel] | None = None) -> Panel:
    """
    Decode a single catalog object.

    When ``kind`` is given the object must be of that kind. Objects without a
    ``type`` tag (v2 listings) are tagged as ``kind``.
    """
    if kind is None:
        try:
            return media_collection.validate_python(raw)
        except ValidationError as e:
            raise ShapeMismatchError(f"failed to decode media: {e}", value=raw) from e

    if not isinstance(raw, dict):
        raise ShapeMismatchError(f"expected {kind.TAG} object, got {raw!r}", value=raw)
    if "type" not in raw:
        raw = {"type": kind.TAG, **raw}
    if raw["type"] != kind.TAG:
        raise ShapeMismatchError(
            f"expected {kind.TAG} object, got '{raw['type']}'", value=raw
        )
    return validate(kind, raw)
