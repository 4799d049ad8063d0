"""Remote music-service capability contract."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from libman.service.models import (
    Album,
    Artist,
    Device,
    Playback,
    PlaylistDetail,
    PlaylistSummary,
    RepeatMode,
    SearchKind,
    Track,
    User,
)

SearchItem = Track | Album | Artist | PlaylistSummary


class ServiceError(RuntimeError):
    """Raised when a remote call fails (transport, authorization, or payload)."""


class AuthenticationError(ServiceError):
    """Raised when the OAuth flow cannot produce a usable token."""


class MusicService(Protocol):
    """Operations consumed from the remote music service.

    Every method may raise `ServiceError`. `device_id=None` targets whatever
    device the service considers active.
    """

    def current_user(self) -> User:
        """Return the authenticated user."""

    def search(self, kind: SearchKind, query: str, limit: int) -> list[SearchItem]:
        """Return ordered search results of one kind."""

    def current_playback(self) -> Playback | None:
        """Return the player status, or None when nothing is playing."""

    def currently_playing_track(self) -> Track | None:
        """Return the playing track (episodes are reported as None)."""

    def list_devices(self) -> list[Device]:
        """Return the user's available devices."""

    def set_volume(self, percent: int, device_id: str | None = None) -> None:
        """Set playback volume."""

    def set_shuffle(self, state: bool, device_id: str | None = None) -> None:
        """Set shuffle flag."""

    def set_repeat(self, mode: RepeatMode, device_id: str | None = None) -> None:
        """Set repeat mode."""

    def start_playback(
        self,
        device_id: str | None = None,
        context_uri: str | None = None,
        track_uris: Sequence[str] | None = None,
        offset: int | None = None,
    ) -> None:
        """Start or resume playback."""

    def pause_playback(self, device_id: str | None = None) -> None:
        """Pause playback."""

    def next_track(self, device_id: str | None = None) -> None:
        """Skip to next track."""

    def previous_track(self, device_id: str | None = None) -> None:
        """Skip to previous track."""

    def transfer_playback(self, device_id: str) -> None:
        """Move playback to another device."""

    def list_user_playlists(self, limit: int) -> list[PlaylistSummary]:
        """Return the current user's playlists."""

    def get_playlist(self, playlist_id: str) -> PlaylistDetail:
        """Return one playlist with its full track listing."""

    def create_playlist(
        self,
        user_id: str,
        name: str,
        public: bool | None = None,
        description: str = "",
    ) -> PlaylistSummary:
        """Create a playlist owned by `user_id`."""

    def edit_playlist_details(
        self,
        playlist_id: str,
        name: str | None = None,
        public: bool | None = None,
        description: str | None = None,
    ) -> None:
        """Change playlist name, visibility, or description."""

    def unfollow_playlist(self, playlist_id: str) -> None:
        """Remove a playlist from the user's library (deletes owned playlists)."""

    def add_tracks_to_playlist(
        self, playlist_id: str, track_refs: Sequence[str], position: int | None = None
    ) -> None:
        """Insert tracks into a playlist."""

    def remove_tracks_from_playlist(
        self, playlist_id: str, track_refs: Sequence[str]
    ) -> None:
        """Remove every occurrence of tracks from a playlist."""

    def add_to_queue(self, uri: str, device_id: str | None = None) -> None:
        """Append an item to the playback queue."""

    def save_track(self, track_id: str) -> None:
        """Save a track to the user's liked songs."""

    def check_track_saved(self, track_id: str) -> bool:
        """Return whether a track is in the user's liked songs."""

    def follow_artist(self, artist_id: str) -> None:
        """Follow an artist."""

    def check_artist_followed(self, artist_id: str) -> bool:
        """Return whether the user follows an artist."""

    def save_album(self, album_id: str) -> None:
        """Save an album to the user's library."""

    def check_album_saved(self, album_id: str) -> bool:
        """Return whether an album is saved."""

    def follow_playlist(self, playlist_id: str) -> None:
        """Follow a playlist."""

    def check_playlist_followed(self, playlist_id: str, user_id: str) -> bool:
        """Return whether `user_id` follows a playlist."""

    def album_tracks(self, album: Album) -> list[Track]:
        """Return the tracks of an album."""

    def artist_top_tracks(self, artist: Artist) -> list[Track]:
        """Return an artist's top tracks."""
