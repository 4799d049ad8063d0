"""Playlist representation helpers."""

from __future__ import annotations

from libman.service.base import MusicService
from libman.service.models import Playlist, PlaylistDetail, Track


def ensure_detailed(playlist: Playlist, service: MusicService) -> PlaylistDetail:
    """Materialize a playlist's track listing when only a summary is known.

    Callers owning a cache must store the returned value back into it.

    Args:
        playlist: Summary or detailed playlist.
        service: Remote service used to fetch the full playlist.

    Returns:
        Detailed playlist (the input itself when already detailed).
    """
    if isinstance(playlist, PlaylistDetail):
        return playlist
    return service.get_playlist(playlist.id)


def _same_track(left: Track, right: Track) -> bool:
    if left.id is not None and right.id is not None:
        return left.id == right.id
    return left.uri == right.uri


def contains_track(playlist: PlaylistDetail, track: Track) -> bool:
    """Return whether a track is in a playlist (by id, falling back to URI).

    Args:
        playlist: Detailed playlist.
        track: Track to look for.

    Returns:
        True when at least one occurrence exists.
    """
    return any(_same_track(item, track) for item in playlist.tracks)


def with_track_added(
    playlist: PlaylistDetail, track: Track, position: int = 0
) -> PlaylistDetail:
    """Return a copy with a track inserted at `position`."""
    tracks = list(playlist.tracks)
    tracks.insert(position, track)
    return playlist.model_copy(update={"tracks": tuple(tracks)})


def with_track_removed(playlist: PlaylistDetail, track: Track) -> PlaylistDetail:
    """Return a copy without any occurrence of a track."""
    tracks = tuple(item for item in playlist.tracks if not _same_track(item, track))
    return playlist.model_copy(update={"tracks": tracks})


def renamed(playlist: Playlist, name: str) -> Playlist:
    """Return a copy of a playlist with a new name."""
    return playlist.model_copy(update={"name": name})


def name_matches(playlist: Playlist, name: str) -> bool:
    """Compare a playlist name case-insensitively and exactly."""
    return playlist.name.casefold() == name.casefold()
