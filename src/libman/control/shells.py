"""Per-kind result-shell factories."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from libman.commands.catalog import (
    album_registry,
    artist_registry,
    playlist_registry,
    track_registry,
)
from libman.commands.types import (
    AlbumCommand,
    ArtistCommand,
    CommandResult,
    PlaylistCommand,
    TrackCommand,
)
from libman.control import playback
from libman.control.context import ShellContext
from libman.control.result_shell import ResultShell
from libman.control.selection import choose_user_playlist
from libman.service.base import SearchItem
from libman.service.models import (
    Album,
    Artist,
    PlaylistSummary,
    SearchKind,
    Track,
    join_artists,
)


def track_row(track: Track) -> tuple[str, str, str]:
    """Return listing cells for a track."""
    return (track.name, join_artists(track.artists), track.album_name)


def album_row(album: Album) -> tuple[str, str]:
    """Return listing cells for an album."""
    return (album.name, join_artists(album.artists))


def artist_row(artist: Artist) -> tuple[str]:
    """Return listing cells for an artist."""
    return (artist.name,)


def playlist_row(playlist: PlaylistSummary) -> tuple[str, str, str]:
    """Return listing cells for a playlist."""
    return (playlist.name, playlist.owner_name or "", str(playlist.track_count))


def _save_to_playlist(
    context: ShellContext, track: Track, playlist_name: str | None
) -> CommandResult:
    choice = choose_user_playlist(context, playlist_name)
    if isinstance(choice, CommandResult):
        return choice
    return playback.add_track_to_playlist(context, choice, track)


def track_shell(
    context: ShellContext, tracks: Sequence[Track]
) -> ResultShell[Track, TrackCommand]:
    """Build the result shell for track search results."""
    return ResultShell(
        terminal=context.terminal,
        renderer=context.renderer,
        registry=track_registry(),
        items=tracks,
        columns=("track", "artists", "album"),
        row=track_row,
        actions={
            TrackCommand.PLAY: lambda track, _: playback.play_track(context, track),
            TrackCommand.QUEUE: lambda track, _: playback.queue_track(context, track),
            TrackCommand.SAVE: lambda track, rest: _save_to_playlist(
                context, track, rest
            ),
            TrackCommand.LIKE: lambda track, _: playback.like_track(context, track),
        },
        default_action=TrackCommand.PLAY,
        help_id=TrackCommand.HELP,
        title="tracks",
    )


def album_shell(
    context: ShellContext, albums: Sequence[Album]
) -> ResultShell[Album, AlbumCommand]:
    """Build the result shell for album search results."""
    return ResultShell(
        terminal=context.terminal,
        renderer=context.renderer,
        registry=album_registry(),
        items=albums,
        columns=("album", "artists"),
        row=album_row,
        actions={
            AlbumCommand.PLAY: lambda album, _: playback.play_album(context, album),
            AlbumCommand.QUEUE: lambda album, _: playback.queue_album(context, album),
            AlbumCommand.SAVE: lambda album, _: playback.save_album(context, album),
        },
        default_action=AlbumCommand.PLAY,
        help_id=AlbumCommand.HELP,
        title="albums",
    )


def artist_shell(
    context: ShellContext, artists: Sequence[Artist]
) -> ResultShell[Artist, ArtistCommand]:
    """Build the result shell for artist search results."""
    return ResultShell(
        terminal=context.terminal,
        renderer=context.renderer,
        registry=artist_registry(),
        items=artists,
        columns=("artist",),
        row=artist_row,
        actions={
            ArtistCommand.PLAY: lambda artist, _: playback.play_artist(
                context, artist
            ),
            ArtistCommand.QUEUE: lambda artist, _: playback.queue_artist(
                context, artist
            ),
            ArtistCommand.FOLLOW: lambda artist, _: playback.follow_artist(
                context, artist
            ),
        },
        default_action=ArtistCommand.PLAY,
        help_id=ArtistCommand.HELP,
        title="artists",
    )


def playlist_shell(
    context: ShellContext, playlists: Sequence[PlaylistSummary]
) -> ResultShell[PlaylistSummary, PlaylistCommand]:
    """Build the result shell for playlist search results."""
    return ResultShell(
        terminal=context.terminal,
        renderer=context.renderer,
        registry=playlist_registry(),
        items=playlists,
        columns=("playlist", "owner", "tracks"),
        row=playlist_row,
        actions={
            PlaylistCommand.PLAY: lambda playlist, _: playback.play_playlist(
                context, playlist
            ),
            PlaylistCommand.QUEUE: lambda playlist, _: playback.queue_playlist(
                context, playlist
            ),
            PlaylistCommand.FOLLOW: lambda playlist, _: playback.follow_playlist(
                context, playlist
            ),
        },
        default_action=PlaylistCommand.PLAY,
        help_id=PlaylistCommand.HELP,
        title="playlists",
    )


def result_shell_for(
    context: ShellContext, kind: SearchKind, items: Sequence[SearchItem]
) -> ResultShell[Any, Any]:
    """Build the result shell matching a search kind.

    Args:
        context: Session collaborators.
        kind: Kind the items were searched as.
        items: Non-empty search results of that kind.

    Returns:
        Kind-scoped result shell.
    """
    if kind is SearchKind.TRACK:
        return track_shell(context, [item for item in items if isinstance(item, Track)])
    if kind is SearchKind.ALBUM:
        return album_shell(context, [item for item in items if isinstance(item, Album)])
    if kind is SearchKind.ARTIST:
        return artist_shell(
            context, [item for item in items if isinstance(item, Artist)]
        )
    return playlist_shell(
        context, [item for item in items if isinstance(item, PlaylistSummary)]
    )
