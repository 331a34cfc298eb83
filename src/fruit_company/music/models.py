"""Typed shapes of music catalog search responses.

Payloads are returned as plain JSON dictionaries; these types describe the
keys callers can expect. Every key is optional because the service omits
attributes it does not know.
"""

from __future__ import annotations

from typing import Any, TypedDict


class MusicArtwork(TypedDict, total=False):
    url: str
    height: int
    width: int
    bgColor: str
    textColor1: str
    textColor2: str
    textColor3: str
    textColor4: str


class MusicPlayParameters(TypedDict, total=False):
    id: str
    kind: str


class MusicPreview(TypedDict, total=False):
    artwork: MusicArtwork
    url: str
    hlsUrl: str


class SongAttributes(TypedDict, total=False):
    albumName: str
    artistName: str
    artistUrl: str
    artwork: MusicArtwork
    audioVariants: list[str]
    composerName: str
    contentRating: str
    discNumber: int
    durationInMillis: int
    genreNames: list[str]
    hasLyrics: bool
    isAppleDigitalMaster: bool
    isrc: str
    name: str
    playParams: MusicPlayParameters
    previews: list[MusicPreview]
    releaseDate: str
    trackNumber: int
    url: str


class MusicResource(TypedDict, total=False):
    id: str
    type: str
    href: str
    attributes: dict[str, Any]
    relationships: dict[str, Any]
    meta: dict[str, Any]


class SongResource(TypedDict, total=False):
    id: str
    type: str
    href: str
    attributes: SongAttributes
    relationships: dict[str, Any]


class ResourceSearchResult(TypedDict, total=False):
    data: list[MusicResource]
    href: str
    next: str


class SongSearchResult(TypedDict, total=False):
    data: list[SongResource]
    href: str
    next: str


# Several result keys are not identifiers, hence the functional syntax.
MusicSearchResults = TypedDict(
    "MusicSearchResults",
    {
        "activities": ResourceSearchResult,
        "albums": ResourceSearchResult,
        "apple-curators": ResourceSearchResult,
        "artists": ResourceSearchResult,
        "curators": ResourceSearchResult,
        "music-videos": ResourceSearchResult,
        "playlists": ResourceSearchResult,
        "record-labels": ResourceSearchResult,
        "songs": SongSearchResult,
        "stations": ResourceSearchResult,
        "top": ResourceSearchResult,
    },
    total=False,
)


class MusicSearchResponse(TypedDict, total=False):
    results: MusicSearchResults
    meta: dict[str, Any]
