from enum import Enum
from typing import Any


class Locale(str, Enum):
    JA_JP = "ja-JP"
    EN_US = "en-US"
    ES_LA = "es-LA"
    ES_ES = "es-ES"
    FR_FR = "fr-FR"
    PT_BR = "pt-BR"
    IT_IT = "it-IT"
    DE_DE = "de-DE"
    RU_RU = "ru-RU"
    AR_SA = "ar-SA"


class Category(str, Enum):
    ACTION = "action"
    ADVENTURE = "adventure"
    COMEDY = "comedy"
    DRAMA = "drama"
    FANTASY = "fantasy"
    MUSIC = "music"
    ROMANCE = "romance"
    SCI_FI = "sci-fi"
    SEINEN = "seinen"
    SHOJO = "shojo"
    SHONEN = "shonen"
    SLICE_OF_LIFE = "slice+of+life"
    SPORTS = "sports"
    SUPERNATURAL = "supernatural"
    THRILLER = "thriller"


class BrowseSortType(str, Enum):
    POPULARITY = "popularity"
    NEWLY_ADDED = "newly_added"
    ALPHABETICAL = "alphabetical"


class MediaType(str, Enum):
    SERIES = "series"
    MOVIE_LISTING = "movie_listing"


class QueryType(str, Enum):
    SERIES = "series"
    MOVIE_LISTING = "movie_listing"
    EPISODE = "episode"


def serialize(value: Any) -> str:
    # bool is checked before the str/int fallback, str(True) is not a wire token
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return ",".join(serialize(v) for v in value)
    return str(value)


def query_pairs(*fields: tuple[str, Any]) -> list[tuple[str, str]]:
    """
    Turn ``(key, value)`` fields into query string pairs.

    Fields are emitted in the order given. A field whose value is None, or an
    empty list, is left out.
    """
    pairs = []
    for key, value in fields:
        if value is None:
            continue
        if isinstance(value, (list, tuple)) and len(value) == 0:
            continue
        pairs.append((key, serialize(value)))
    return pairs
