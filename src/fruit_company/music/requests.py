"""Catalog requests for the music service."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import cast

from ..exceptions import RESTError, UnexpectedResponseError
from ..http import HttpResponse, OutboundRequest
from ..request import Request
from .models import MusicSearchResponse
from .token import MusicDeveloperToken

APPLE_MUSIC_API_URL = "https://api.music.apple.com/v1"


class MusicCatalogType(str, Enum):
    ACTIVITIES = "activities"
    ALBUMS = "albums"
    APPLE_CURATORS = "apple-curators"
    ARTISTS = "artists"
    CURATORS = "curators"
    MUSIC_VIDEOS = "music-videos"
    PLAYLISTS = "playlists"
    RECORD_LABELS = "record-labels"
    SONGS = "songs"
    STATIONS = "stations"


class MusicCatalogSearchModification(str, Enum):
    TOP_RESULTS = "topResults"


@dataclass(frozen=True)
class SearchMusicCatalog(Request[MusicDeveloperToken, MusicSearchResponse]):
    """Search a storefront's catalog for resources matching a term."""

    storefront: str
    types: Sequence[MusicCatalogType | str]
    term: str
    language: str | None = None
    limit: int | None = None
    offset: int | None = None
    with_: Sequence[MusicCatalogSearchModification | str] | None = None

    def prepare(self, authority: MusicDeveloperToken) -> OutboundRequest:
        params = [
            ("types", _join(self.types)),
            ("term", self.term),
        ]
        if self.language is not None:
            params.append(("l", self.language))
        if self.limit is not None:
            params.append(("limit", str(self.limit)))
        if self.offset is not None:
            params.append(("offset", str(self.offset)))
        if self.with_ is not None:
            params.append(("with", _join(self.with_)))
        return OutboundRequest(
            url=f"{APPLE_MUSIC_API_URL}/catalog/{self.storefront}/search",
            params=params,
        )

    def parse(self, authority: MusicDeveloperToken, response: HttpResponse) -> MusicSearchResponse:
        if not response.ok:
            raise RESTError(
                f"<{response.url}>",
                status_code=response.status_code,
                status_text=response.status_text,
            )
        payload = response.json()
        if not isinstance(payload, Mapping):
            raise UnexpectedResponseError("Search payload is not a JSON object")
        return cast(MusicSearchResponse, dict(payload))


def _join(values: Sequence[Enum | str]) -> str:
    return ",".join(value.value if isinstance(value, Enum) else str(value) for value in values)
