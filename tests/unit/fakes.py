"""Hand-written test doubles shared by libman unit tests."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from io import StringIO
from typing import Any

from rich.console import Console

from libman.cli.rendering import CliRenderer
from libman.cli.terminal import Terminal
from libman.config.global_config import LibmanConfig
from libman.control.context import ShellContext
from libman.service.base import SearchItem, ServiceError
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
from libman.session.models import SessionState

MUTATING_CALLS = frozenset(
    {
        "set_volume",
        "set_shuffle",
        "set_repeat",
        "start_playback",
        "pause_playback",
        "next_track",
        "previous_track",
        "transfer_playback",
        "create_playlist",
        "edit_playlist_details",
        "unfollow_playlist",
        "add_tracks_to_playlist",
        "remove_tracks_from_playlist",
        "add_to_queue",
        "save_track",
        "follow_artist",
        "save_album",
        "follow_playlist",
    }
)


def make_track(name: str, *, track_id: str | None = None, album: str = "") -> Track:
    """Build a track whose uri derives from its name."""
    slug = name.lower().replace(" ", "-")
    return Track(
        id=track_id if track_id is not None else slug,
        uri=f"spotify:track:{slug}",
        name=name,
        album_name=album,
        artists=(Artist(id="artist-1", uri="spotify:artist:artist-1", name="Band"),),
    )


def make_summary(name: str, playlist_id: str, track_count: int = 0) -> PlaylistSummary:
    """Build a playlist summary."""
    return PlaylistSummary(
        id=playlist_id,
        uri=f"spotify:playlist:{playlist_id}",
        name=name,
        owner_name="me",
        track_count=track_count,
    )


@dataclass
class FakeMusicService:
    """In-memory `MusicService` recording every call."""

    user: User = field(default_factory=lambda: User(id="user-1", display_name="Ada"))
    search_results: dict[SearchKind, list[SearchItem]] = field(default_factory=dict)
    playback: Playback | None = None
    playing_track: Track | None = None
    devices: list[Device] = field(default_factory=list)
    playlists: list[PlaylistSummary] = field(default_factory=list)
    details: dict[str, PlaylistDetail] = field(default_factory=dict)
    liked: set[str] = field(default_factory=set)
    followed_artists: set[str] = field(default_factory=set)
    saved_albums: set[str] = field(default_factory=set)
    followed_playlists: set[str] = field(default_factory=set)
    album_listing: dict[str, list[Track]] = field(default_factory=dict)
    top_tracks: dict[str, list[Track]] = field(default_factory=dict)
    failures: dict[str, ServiceError] = field(default_factory=dict)
    calls: list[tuple[str, dict[str, Any]]] = field(default_factory=list)

    def _record(self, method: str, /, **kwargs: Any) -> None:
        self.calls.append((method, kwargs))
        failure = self.failures.get(method)
        if failure is not None:
            raise failure

    def calls_to(self, name: str) -> list[dict[str, Any]]:
        """Return the arguments of every call to one method."""
        return [kwargs for called, kwargs in self.calls if called == name]

    def mutating_calls(self) -> list[str]:
        """Return the names of calls that change remote state."""
        return [called for called, _ in self.calls if called in MUTATING_CALLS]

    def current_user(self) -> User:
        self._record("current_user")
        return self.user

    def search(self, kind: SearchKind, query: str, limit: int) -> list[SearchItem]:
        self._record("search", kind=kind, query=query, limit=limit)
        return list(self.search_results.get(kind, []))[:limit]

    def current_playback(self) -> Playback | None:
        self._record("current_playback")
        return self.playback

    def currently_playing_track(self) -> Track | None:
        self._record("currently_playing_track")
        return self.playing_track

    def list_devices(self) -> list[Device]:
        self._record("list_devices")
        return list(self.devices)

    def set_volume(self, percent: int, device_id: str | None = None) -> None:
        self._record("set_volume", percent=percent, device_id=device_id)

    def set_shuffle(self, state: bool, device_id: str | None = None) -> None:
        self._record("set_shuffle", state=state, device_id=device_id)

    def set_repeat(self, mode: RepeatMode, device_id: str | None = None) -> None:
        self._record("set_repeat", mode=mode, device_id=device_id)

    def start_playback(
        self,
        device_id: str | None = None,
        context_uri: str | None = None,
        track_uris: Sequence[str] | None = None,
        offset: int | None = None,
    ) -> None:
        self._record(
            "start_playback",
            device_id=device_id,
            context_uri=context_uri,
            track_uris=list(track_uris) if track_uris is not None else None,
            offset=offset,
        )

    def pause_playback(self, device_id: str | None = None) -> None:
        self._record("pause_playback", device_id=device_id)

    def next_track(self, device_id: str | None = None) -> None:
        self._record("next_track", device_id=device_id)

    def previous_track(self, device_id: str | None = None) -> None:
        self._record("previous_track", device_id=device_id)

    def transfer_playback(self, device_id: str) -> None:
        self._record("transfer_playback", device_id=device_id)

    def list_user_playlists(self, limit: int) -> list[PlaylistSummary]:
        self._record("list_user_playlists", limit=limit)
        return list(self.playlists)[:limit]

    def get_playlist(self, playlist_id: str) -> PlaylistDetail:
        self._record("get_playlist", playlist_id=playlist_id)
        return self.details[playlist_id]

    def create_playlist(
        self,
        user_id: str,
        name: str,
        public: bool | None = None,
        description: str = "",
    ) -> PlaylistSummary:
        self._record(
            "create_playlist",
            user_id=user_id,
            name=name,
            public=public,
            description=description,
        )
        return make_summary(name, f"new-{len(self.calls)}")

    def edit_playlist_details(
        self,
        playlist_id: str,
        name: str | None = None,
        public: bool | None = None,
        description: str | None = None,
    ) -> None:
        self._record(
            "edit_playlist_details",
            playlist_id=playlist_id,
            name=name,
            public=public,
            description=description,
        )

    def unfollow_playlist(self, playlist_id: str) -> None:
        self._record("unfollow_playlist", playlist_id=playlist_id)

    def add_tracks_to_playlist(
        self, playlist_id: str, track_refs: Sequence[str], position: int | None = None
    ) -> None:
        self._record(
            "add_tracks_to_playlist",
            playlist_id=playlist_id,
            track_refs=list(track_refs),
            position=position,
        )

    def remove_tracks_from_playlist(
        self, playlist_id: str, track_refs: Sequence[str]
    ) -> None:
        self._record(
            "remove_tracks_from_playlist",
            playlist_id=playlist_id,
            track_refs=list(track_refs),
        )

    def add_to_queue(self, uri: str, device_id: str | None = None) -> None:
        self._record("add_to_queue", uri=uri, device_id=device_id)

    def save_track(self, track_id: str) -> None:
        self._record("save_track", track_id=track_id)
        self.liked.add(track_id)

    def check_track_saved(self, track_id: str) -> bool:
        self._record("check_track_saved", track_id=track_id)
        return track_id in self.liked

    def follow_artist(self, artist_id: str) -> None:
        self._record("follow_artist", artist_id=artist_id)
        self.followed_artists.add(artist_id)

    def check_artist_followed(self, artist_id: str) -> bool:
        self._record("check_artist_followed", artist_id=artist_id)
        return artist_id in self.followed_artists

    def save_album(self, album_id: str) -> None:
        self._record("save_album", album_id=album_id)
        self.saved_albums.add(album_id)

    def check_album_saved(self, album_id: str) -> bool:
        self._record("check_album_saved", album_id=album_id)
        return album_id in self.saved_albums

    def follow_playlist(self, playlist_id: str) -> None:
        self._record("follow_playlist", playlist_id=playlist_id)
        self.followed_playlists.add(playlist_id)

    def check_playlist_followed(self, playlist_id: str, user_id: str) -> bool:
        self._record(
            "check_playlist_followed", playlist_id=playlist_id, user_id=user_id
        )
        return playlist_id in self.followed_playlists

    def album_tracks(self, album: Album) -> list[Track]:
        self._record("album_tracks", album=album.name)
        return list(self.album_listing.get(album.name, []))

    def artist_top_tracks(self, artist: Artist) -> list[Track]:
        self._record("artist_top_tracks", artist=artist.name)
        return list(self.top_tracks.get(artist.name, []))


class ScriptedInput:
    """Line reader replaying scripted answers, then signalling EOF."""

    def __init__(
        self,
        lines: Iterable[str] = (),
        *,
        end: type[BaseException] = EOFError,
    ) -> None:
        self._lines = list(lines)
        self._end = end
        self.prompts: list[str] = []

    def feed(self, *lines: str) -> None:
        """Append more answers."""
        self._lines.extend(lines)

    @property
    def remaining(self) -> int:
        """Return how many answers were not consumed."""
        return len(self._lines)

    def __call__(self, text: str) -> str:
        self.prompts.append(text)
        if not self._lines:
            raise self._end
        return self._lines.pop(0)


@dataclass
class Harness:
    """Shell context wired to in-memory doubles."""

    context: ShellContext
    service: FakeMusicService
    reader: ScriptedInput
    output: StringIO

    @property
    def session(self) -> SessionState:
        """Return the session under test."""
        return self.context.session

    def printed(self) -> str:
        """Return everything printed so far."""
        return self.output.getvalue()


def build_harness(
    service: FakeMusicService | None = None,
    *,
    lines: Iterable[str] = (),
    config: LibmanConfig | None = None,
    session: SessionState | None = None,
    end: type[BaseException] = EOFError,
) -> Harness:
    """Wire a shell context to a fake service, scripted input, and captured output."""
    fake = service or FakeMusicService()
    reader = ScriptedInput(lines, end=end)
    output = StringIO()
    console = Console(file=output, width=160, color_system=None, force_terminal=False)
    context = ShellContext(
        service=fake,
        session=session or SessionState(user_id=fake.user.id),
        terminal=Terminal(console=console, reader=reader),
        renderer=CliRenderer(console=console),
        config=config or LibmanConfig(),
    )
    return Harness(context=context, service=fake, reader=reader, output=output)
