"""Music catalog service bindings."""
from .models import MusicSearchResponse, MusicSearchResults, SongAttributes, SongResource
from .requests import (
    APPLE_MUSIC_API_URL,
    MusicCatalogSearchModification,
    MusicCatalogType,
    SearchMusicCatalog,
)
from .token import MusicDeveloperToken

__all__ = [
    "APPLE_MUSIC_API_URL",
    "MusicCatalogSearchModification",
    "MusicCatalogType",
    "MusicDeveloperToken",
    "MusicSearchResponse",
    "MusicSearchResults",
    "SearchMusicCatalog",
    "SongAttributes",
    "SongResource",
]
