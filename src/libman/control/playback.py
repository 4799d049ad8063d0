"""Player and library actions shared by the top-level and result shells."""

from __future__ import annotations

import logging

from libman.commands.types import CommandResult
from libman.control.context import ShellContext
from libman.library.playlists import (
    contains_track,
    ensure_detailed,
    with_track_added,
    with_track_removed,
)
from libman.service.base import SearchItem
from libman.service.models import (
    Album,
    Artist,
    Playlist,
    PlaylistDetail,
    Track,
    join_artists,
)

_LOGGER = logging.getLogger(__name__)


def describe_track(track: Track) -> str:
    """Render a track as `name [album] by artists`."""
    if track.album_name:
        return f"{track.name} [{track.album_name}] by {join_artists(track.artists)}"
    return f"{track.name} by {join_artists(track.artists)}"


def toggle_playback(context: ShellContext) -> CommandResult:
    """Flip the session's playing flag and pause or resume accordingly.

    Args:
        context: Session collaborators.

    Returns:
        Silent success result.
    """
    playing = not context.session.is_playing
    if playing:
        context.service.start_playback(device_id=context.device_id)
    else:
        context.service.pause_playback(device_id=context.device_id)
    context.session.is_playing = playing
    _LOGGER.debug("playback toggled: playing=%s", playing)
    return CommandResult.ok(
        "", code="playback_resumed" if playing else "playback_paused"
    )


def skip(context: ShellContext, *, forward: bool) -> CommandResult:
    """Skip to the next or previous track and mark the session as playing."""
    if forward:
        context.service.next_track(device_id=context.device_id)
    else:
        context.service.previous_track(device_id=context.device_id)
    context.session.is_playing = True
    return CommandResult.ok("", code="skipped_next" if forward else "skipped_prev")


def play_track(context: ShellContext, track: Track) -> CommandResult:
    """Start playing a single track."""
    context.service.start_playback(device_id=context.device_id, track_uris=[track.uri])
    context.session.is_playing = True
    return CommandResult.ok(
        f"playing {describe_track(track)}",
        code="playing",
        data={"uri": track.uri},
    )


def play_album(context: ShellContext, album: Album) -> CommandResult:
    """Play an album from its first track."""
    target = album.uri or album.id
    if target is None:
        return CommandResult.error(
            f"{album.name} has neither a uri nor an id", code="not_playable"
        )
    context.service.start_playback(
        device_id=context.device_id, context_uri=target, offset=0
    )
    context.session.is_playing = True
    return CommandResult.ok(
        f"playing {album.name} by {join_artists(album.artists)}",
        code="playing",
        data={"uri": target},
    )


def play_artist(context: ShellContext, artist: Artist) -> CommandResult:
    """Play an artist context."""
    context.service.start_playback(
        device_id=context.device_id, context_uri=artist.uri, offset=0
    )
    context.session.is_playing = True
    return CommandResult.ok(
        f"playing {artist.name}", code="playing", data={"uri": artist.uri}
    )


def play_playlist(
    context: ShellContext, playlist: Playlist, *, from_library: bool = False
) -> CommandResult:
    """Play a playlist from its first track.

    Args:
        context: Session collaborators.
        playlist: Playlist to play.
        from_library: Whether the playlist was picked from the user's library,
            in which case it is remembered as the last played one.

    Returns:
        Success result naming the playlist.
    """
    context.service.start_playback(
        device_id=context.device_id, context_uri=playlist.uri, offset=0
    )
    context.session.is_playing = True
    if from_library:
        context.session.last_playlist = playlist
    return CommandResult.ok(
        f"playing {playlist.name}", code="playing", data={"uri": playlist.uri}
    )


def play_item(context: ShellContext, item: SearchItem) -> CommandResult:
    """Run the default play action for any search result."""
    if isinstance(item, Track):
        return play_track(context, item)
    if isinstance(item, Album):
        return play_album(context, item)
    if isinstance(item, Artist):
        return play_artist(context, item)
    return play_playlist(context, item)


def _queue_tracks(
    context: ShellContext, tracks: list[Track], source: str
) -> CommandResult:
    if not tracks:
        return CommandResult.ok(
            f"{source} has no track to queue", code="nothing_queued"
        )
    for track in tracks:
        context.service.add_to_queue(track.uri, device_id=context.device_id)
    return CommandResult.ok(
        f"queued {len(tracks)} tracks from {source}",
        code="queued",
        data={"count": len(tracks)},
    )


def queue_track(context: ShellContext, track: Track) -> CommandResult:
    """Append one track to the playback queue."""
    context.service.add_to_queue(track.uri, device_id=context.device_id)
    return CommandResult.ok(f"queued {track.name}", code="queued", data={"count": 1})


def queue_album(context: ShellContext, album: Album) -> CommandResult:
    """Append every track of an album to the playback queue."""
    return _queue_tracks(context, context.service.album_tracks(album), album.name)


def queue_artist(context: ShellContext, artist: Artist) -> CommandResult:
    """Append an artist's top tracks to the playback queue."""
    return _queue_tracks(
        context, context.service.artist_top_tracks(artist), artist.name
    )


def queue_playlist(context: ShellContext, playlist: Playlist) -> CommandResult:
    """Append the materialized tracks of a playlist to the playback queue."""
    detail = materialize_playlist(context, playlist)
    return _queue_tracks(context, list(detail.tracks), playlist.name)


def like_track(context: ShellContext, track: Track) -> CommandResult:
    """Save a track to liked songs unless it is already there."""
    if context.service.check_track_saved(track.ref):
        return CommandResult.ok(
            f"{track.name} is already in your liked songs, no action taken",
            code="already_saved",
        )
    context.service.save_track(track.ref)
    return CommandResult.ok(f"liked {track.name}", code="saved")


def save_album(context: ShellContext, album: Album) -> CommandResult:
    """Save an album to the library unless it is already saved."""
    ref = album.id or album.uri
    if ref is None:
        return CommandResult.error(
            f"{album.name} has neither a uri nor an id", code="not_savable"
        )
    if context.service.check_album_saved(ref):
        return CommandResult.ok(
            f"{album.name} is already in your library, no action taken",
            code="already_saved",
        )
    context.service.save_album(ref)
    return CommandResult.ok(f"saved {album.name}", code="saved")


def follow_artist(context: ShellContext, artist: Artist) -> CommandResult:
    """Follow an artist unless it is already followed."""
    ref = artist.id or artist.uri
    if context.service.check_artist_followed(ref):
        return CommandResult.ok(
            f"you already follow {artist.name}, no action taken",
            code="already_followed",
        )
    context.service.follow_artist(ref)
    return CommandResult.ok(f"following {artist.name}", code="followed")


def follow_playlist(context: ShellContext, playlist: Playlist) -> CommandResult:
    """Follow a playlist unless the user already follows it.

    A newly followed playlist enters the user's library, so the cached library
    listing is dropped.
    """
    if context.service.check_playlist_followed(playlist.id, context.session.user_id):
        return CommandResult.ok(
            f"you already follow {playlist.name}, no action taken",
            code="already_followed",
        )
    context.service.follow_playlist(playlist.id)
    context.session.playlist_cache.invalidate()
    return CommandResult.ok(f"following {playlist.name}", code="followed")


def materialize_playlist(
    context: ShellContext, playlist: Playlist
) -> PlaylistDetail:
    """Return the detailed playlist, storing a fresh fetch back in the session."""
    detail = ensure_detailed(playlist, context.service)
    if detail is not playlist:
        _store(context, detail)
    return detail


def _store(context: ShellContext, detail: PlaylistDetail) -> None:
    """Write a newer playlist representation back to every session reference."""
    context.session.playlist_cache.replace(detail)
    last = context.session.last_playlist
    if last is not None and last.id == detail.id:
        context.session.last_playlist = detail


def add_track_to_playlist(
    context: ShellContext, playlist: Playlist, track: Track
) -> CommandResult:
    """Insert a track at the top of a library playlist unless already present.

    Args:
        context: Session collaborators.
        playlist: Target playlist (summary or detailed).
        track: Track to add.

    Returns:
        Success result, or an `already_present` no-op result.
    """
    detail = materialize_playlist(context, playlist)
    if contains_track(detail, track):
        return CommandResult.ok(
            f"{track.name} is already in {detail.name}, no action taken",
            code="already_present",
        )
    context.service.add_tracks_to_playlist(detail.id, [track.ref], position=0)
    _store(context, with_track_added(detail, track, position=0))
    return CommandResult.ok(
        f"saved {track.name} to {detail.name}",
        code="track_added",
        data={"playlist_id": detail.id},
    )


def remove_track_from_playlist(
    context: ShellContext, playlist: Playlist, track: Track
) -> CommandResult:
    """Remove every occurrence of a track from a library playlist.

    Args:
        context: Session collaborators.
        playlist: Target playlist (summary or detailed).
        track: Track to remove.

    Returns:
        Success result, or a `not_present` no-op result.
    """
    detail = materialize_playlist(context, playlist)
    if not contains_track(detail, track):
        return CommandResult.ok(
            f"{track.name} is not in {detail.name}, no action taken",
            code="not_present",
        )
    context.service.remove_tracks_from_playlist(detail.id, [track.ref])
    _store(context, with_track_removed(detail, track))
    return CommandResult.ok(
        f"removed {track.name} from {detail.name}",
        code="track_removed",
        data={"playlist_id": detail.id},
    )
