"""
Shared sample payloads for crunchylib tests.

The panels mirror what the content/v1 endpoints return: common fields at the
top level and kind specific fields under ``<type>_metadata``.
"""

import pytest


def series_panel(id="GRDQPM1ZY", title="Spy x Family"):
    return {
        "id": id,
        "type": "series",
        "title": title,
        "slug_title": "spy-x-family",
        "description": "A spy, an assassin and a telepath walk into a family.",
        "channel_id": "crunchyroll",
        "images": {
            "poster_tall": [
                [{"source": "https://img/tall.jpg", "type": "poster_tall", "width": 60, "height": 90}]
            ]
        },
        "series_metadata": {
            "episode_count": 37,
            "season_count": 3,
            "is_subbed": True,
            "is_dubbed": True,
            "audio_locales": ["ja-JP", "en-US"],
            "series_launch_year": 2022,
        },
        "search_metadata": {"score": 42.5},
    }


def episode_panel(id="GRDKJZ81Y", title="Operation Strix"):
    return {
        "id": id,
        "type": "episode",
        "title": title,
        "episode_metadata": {
            "series_id": "GRDQPM1ZY",
            "series_title": "Spy x Family",
            "season_id": "GR49C7EPD",
            "season_number": 1,
            "episode": "1",
            "episode_number": 1,
            "sequence_number": 1,
            "duration_ms": 1420000,
            "episode_air_date": "2022-04-09T15:30:00Z",
            "is_premium_only": False,
            "audio_locale": "ja-JP",
        },
    }


def movie_listing_panel(id="G6MG10746", title="Jujutsu Kaisen 0"):
    return {
        "id": id,
        "type": "movie_listing",
        "title": title,
        "movie_listing_metadata": {
            "movie_release_year": 2021,
            "is_premium_only": True,
            "is_subbed": True,
        },
    }


@pytest.fixture
def series():
    return series_panel()


@pytest.fixture
def episode():
    return episode_panel()


@pytest.fixture
def movie_listing():
    return movie_listing_panel()


@pytest.fixture
def search_response(series, episode, movie_listing):
    """A search response with one group of every result type."""
    return {
        "total": 4,
        "items": [
            {"type": "top_results", "total": 3, "items": [series, movie_listing, episode]},
            {"type": "series", "total": 12, "items": [series]},
            {"type": "movie_listing", "total": 1, "items": [movie_listing]},
            {"type": "episode", "total": 250, "items": [episode]},
        ],
    }
