"""Remote music-service contract, models, and Spotify adapter."""

from libman.service.base import (
    AuthenticationError,
    MusicService,
    SearchItem,
    ServiceError,
)
from libman.service.models import (
    Album,
    Artist,
    Device,
    Episode,
    Playback,
    Playlist,
    PlaylistDetail,
    PlaylistSummary,
    RepeatMode,
    SearchKind,
    Track,
    User,
    join_artists,
)

__all__ = [
    "Album",
    "Artist",
    "AuthenticationError",
    "Device",
    "Episode",
    "MusicService",
    "Playback",
    "Playlist",
    "PlaylistDetail",
    "PlaylistSummary",
    "RepeatMode",
    "SearchItem",
    "SearchKind",
    "ServiceError",
    "Track",
    "User",
    "join_artists",
]
