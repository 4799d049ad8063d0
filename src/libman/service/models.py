"""Music-service domain models."""

from __future__ import annotations

from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class SearchKind(StrEnum):
    """Searchable catalog object kinds."""

    TRACK = "track"
    ALBUM = "album"
    ARTIST = "artist"
    PLAYLIST = "playlist"


class RepeatMode(StrEnum):
    """Player repeat states."""

    OFF = "off"
    TRACK = "track"
    CONTEXT = "context"


class User(BaseModel):
    """Authenticated service user."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    display_name: str | None = None


class Artist(BaseModel):
    """Catalog artist."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str | None = None
    uri: str
    name: str


class Album(BaseModel):
    """Catalog album (simplified representation)."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str | None = None
    uri: str | None = None
    name: str
    artists: tuple[Artist, ...] = ()


class Track(BaseModel):
    """Catalog track."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str | None = None
    uri: str
    name: str
    album_name: str = ""
    artists: tuple[Artist, ...] = ()

    @property
    def ref(self) -> str:
        """Return the identifier used for library mutations (id, else URI)."""
        return self.id or self.uri


class Episode(BaseModel):
    """Podcast episode reported by the player."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    show_name: str = ""
    publisher: str = ""
    description: str = ""


class PlaylistSummary(BaseModel):
    """Playlist reference without its track listing."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["summary"] = "summary"
    id: str
    uri: str
    name: str
    owner_name: str | None = None
    track_count: int = 0


class PlaylistDetail(BaseModel):
    """Playlist with its materialized track listing."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["detailed"] = "detailed"
    id: str
    uri: str
    name: str
    owner_name: str | None = None
    tracks: tuple[Track, ...] = ()

    @property
    def track_count(self) -> int:
        """Return number of materialized tracks."""
        return len(self.tracks)


Playlist = PlaylistSummary | PlaylistDetail


class Device(BaseModel):
    """Playback endpoint."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    name: str
    is_active: bool = False
    volume_percent: int | None = Field(default=None, ge=0, le=100)


class Playback(BaseModel):
    """Player status snapshot."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    device: Device | None = None
    repeat: RepeatMode = RepeatMode.OFF
    shuffle: bool = False
    is_playing: bool = False
    item: Track | Episode | None = None


def join_artists(artists: tuple[Artist, ...]) -> str:
    """Render artist names for display.

    Args:
        artists: Artists to render.

    Returns:
        Comma-separated names, or `unknown` when empty.
    """
    if not artists:
        return "unknown"
    return ", ".join(artist.name for artist in artists)
