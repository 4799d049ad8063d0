"""Unit tests for the Spotipy-backed service adapter."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import requests
from spotipy.cache_handler import CacheFileHandler, MemoryCacheHandler
from spotipy.exceptions import SpotifyException
from spotipy.oauth2 import SpotifyOauthError

from libman.config.credentials import Credentials
from libman.control.dispatcher import Controller
from libman.service.base import AuthenticationError, ServiceError
from libman.service.models import (
    Album,
    Episode,
    PlaylistSummary,
    RepeatMode,
    SearchKind,
    Track,
)
from libman.service.spotify import (
    SpotifyService,
    _build_cache_handler,
    build_spotify_service,
)
from libman.session.models import SessionState
from tests.unit.fakes import build_harness


def _track_payload(name: str, *, kind: str = "track") -> dict[str, Any]:
    slug = name.lower()
    return {
        "type": kind,
        "id": slug,
        "uri": f"spotify:{kind}:{slug}",
        "name": name,
        "album": {"name": "Album"},
        "artists": [{"id": "a1", "uri": "spotify:artist:a1", "name": "Band"}],
    }


class _StubClient:
    """Minimal stand-in for `spotipy.Spotify` recording calls."""

    def __init__(self, **responses: Any) -> None:
        self.responses = responses
        self.calls: list[tuple[str, tuple[Any, ...], dict[str, Any]]] = []
        self.error: Exception | None = None

    def _answer(self, name: str, *args: Any, **kwargs: Any) -> Any:
        self.calls.append((name, args, kwargs))
        if self.error is not None:
            raise self.error
        return self.responses.get(name)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        return lambda *args, **kwargs: self._answer(name, *args, **kwargs)


@pytest.mark.unit
def test_search_parses_tracks_and_skips_null_items() -> None:
    """Track search results become `Track` models."""
    # Arrange - one track plus a null entry
    client = _StubClient(
        search={"tracks": {"items": [_track_payload("Song"), None]}}
    )
    service = SpotifyService(client)

    # Act - search
    items = service.search(SearchKind.TRACK, "song", 5)

    # Assert - parsed and forwarded
    assert items == [
        Track(
            id="song",
            uri="spotify:track:song",
            name="Song",
            album_name="Album",
            artists=items[0].artists,
        )
    ]
    assert client.calls == [("search", (), {"q": "song", "limit": 5, "type": "track"})]


@pytest.mark.unit
def test_search_parses_playlists() -> None:
    """Playlist results keep owner and track count."""
    client = _StubClient(
        search={
            "playlists": {
                "items": [
                    {
                        "id": "pl-1",
                        "uri": "spotify:playlist:pl-1",
                        "name": "Mix",
                        "owner": {"display_name": "dj"},
                        "tracks": {"total": 12},
                    }
                ]
            }
        }
    )

    items = SpotifyService(client).search(SearchKind.PLAYLIST, "mix", 5)

    assert items == [
        PlaylistSummary(
            id="pl-1",
            uri="spotify:playlist:pl-1",
            name="Mix",
            owner_name="dj",
            track_count=12,
        )
    ]


@pytest.mark.unit
def test_current_playback_parses_episode_and_state() -> None:
    """Playback snapshots carry device, modes, and the playing episode."""
    client = _StubClient(
        current_playback={
            "device": {"id": "d1", "name": "Speaker", "is_active": True},
            "repeat_state": "context",
            "shuffle_state": True,
            "is_playing": False,
            "item": {
                "type": "episode",
                "name": "Ep",
                "description": "About",
                "show": {"name": "Talk", "publisher": "Pub"},
            },
        }
    )

    playback = SpotifyService(client).current_playback()

    assert playback is not None
    assert playback.device is not None and playback.device.name == "Speaker"
    assert playback.repeat is RepeatMode.CONTEXT
    assert playback.shuffle is True
    assert playback.item == Episode(
        name="Ep", show_name="Talk", publisher="Pub", description="About"
    )
    assert client.calls[0][2] == {"additional_types": "track,episode"}


@pytest.mark.unit
def test_nothing_playing_is_none() -> None:
    """Empty player payloads and episodes yield no playing track."""
    empty = SpotifyService(_StubClient(current_playback=None))
    episode = SpotifyService(
        _StubClient(
            current_user_playing_track={"item": _track_payload("Ep", kind="episode")}
        )
    )

    assert empty.current_playback() is None
    assert episode.currently_playing_track() is None


@pytest.mark.unit
def test_get_playlist_follows_pages_and_skips_episodes() -> None:
    """Every page of a playlist is read; non-track entries are dropped."""
    # Arrange - two pages, one episode and one removed track
    second_page = {"items": [{"track": _track_payload("Two")}], "next": None}
    client = _StubClient(
        playlist={
            "id": "pl-1",
            "uri": "spotify:playlist:pl-1",
            "name": "Mix",
            "owner": {"display_name": "me"},
            "tracks": {
                "items": [
                    {"track": _track_payload("One")},
                    {"track": _track_payload("Ep", kind="episode")},
                    {"track": None},
                ],
                "next": "https://api.spotify.com/next",
            },
        },
        next=second_page,
    )

    # Act - fetch
    detail = SpotifyService(client).get_playlist("pl-1")

    # Assert - both pages parsed in order
    assert [track.name for track in detail.tracks] == ["One", "Two"]
    assert detail.owner_name == "me"
    assert [name for name, _, _ in client.calls] == ["playlist", "next"]


@pytest.mark.unit
def test_start_playback_translates_offset_and_uris() -> None:
    """Offsets become position objects; track lists are sent as uris."""
    client = _StubClient()
    service = SpotifyService(client)

    service.start_playback(device_id="d1", context_uri="spotify:album:x", offset=0)
    service.start_playback(track_uris=("spotify:track:a",))

    assert client.calls[0][2] == {
        "device_id": "d1",
        "context_uri": "spotify:album:x",
        "uris": None,
        "offset": {"position": 0},
    }
    assert client.calls[1][2]["uris"] == ["spotify:track:a"]
    assert client.calls[1][2]["offset"] is None


@pytest.mark.unit
def test_create_playlist_defaults_to_public() -> None:
    """An unanswered visibility question creates a public playlist."""
    client = _StubClient(
        user_playlist_create={
            "id": "new",
            "uri": "spotify:playlist:new",
            "name": "Road",
            "tracks": {"total": 0},
        }
    )

    created = SpotifyService(client).create_playlist("user-1", "Road")

    assert created.id == "new"
    assert client.calls[0][2] == {"public": True, "description": ""}


@pytest.mark.unit
def test_membership_checks_return_first_flag() -> None:
    """Library checks unwrap the single-element answer lists."""
    client = _StubClient(
        current_user_saved_tracks_contains=[True],
        current_user_following_artists=[False],
        playlist_is_following=[True],
    )
    service = SpotifyService(client)

    assert service.check_track_saved("t1") is True
    assert service.check_artist_followed("a1") is False
    assert service.check_playlist_followed("pl-1", "user-1") is True
    assert client.calls[-1][1] == ("pl-1", ["user-1"])


@pytest.mark.unit
def test_album_tracks_carry_album_name() -> None:
    """Album listings omit album data, so the album name is filled in."""
    client = _StubClient(album_tracks={"items": [_track_payload("One")]})
    album = Album(id="alb-1", uri="spotify:album:alb-1", name="Record")

    tracks = SpotifyService(client).album_tracks(album)

    assert tracks[0].album_name == "Record"
    assert client.calls[0][1] == ("alb-1",)


@pytest.mark.unit
@pytest.mark.parametrize(
    ("error", "expected"),
    [
        (SpotifyException(404, -1, "not found"), ServiceError),
        (SpotifyOauthError("invalid_client"), AuthenticationError),
        (requests.ConnectionError("unreachable"), ServiceError),
    ],
)
def test_remote_failures_are_translated(
    error: Exception, expected: type[ServiceError]
) -> None:
    """Library and transport errors surface as service errors."""
    client = _StubClient()
    client.error = error

    with pytest.raises(expected) as excinfo:
        SpotifyService(client).next_track()

    assert excinfo.value.__cause__ is error


@pytest.mark.unit
def test_api_failure_message_uses_spotify_text() -> None:
    """API errors keep Spotify's message for display."""
    client = _StubClient()
    client.error = SpotifyException(403, -1, "Player command failed: Restriction")

    with pytest.raises(ServiceError, match="Player command failed: Restriction"):
        SpotifyService(client).pause_playback()


@pytest.mark.unit
def test_token_cache_selection(tmp_path: Path) -> None:
    """A configured path persists tokens on disk; otherwise they stay in memory."""
    assert isinstance(_build_cache_handler(None), MemoryCacheHandler)
    assert isinstance(_build_cache_handler(tmp_path / "token"), CacheFileHandler)


@pytest.mark.unit
def test_build_spotify_service_does_not_authenticate_eagerly() -> None:
    """Building the adapter performs no remote call."""
    credentials = Credentials(
        client_id="client",
        client_secret="secret",
        redirect_uri="http://localhost:8888/callback",
    )

    assert isinstance(build_spotify_service(credentials), SpotifyService)


@pytest.mark.unit
@pytest.mark.parametrize(
    ("responses", "call"),
    [
        ({"search": {"unexpected": {}}}, lambda s: s.search(SearchKind.TRACK, "x", 5)),
        ({"current_user": {}}, lambda s: s.current_user()),
        (
            {"current_playback": {"repeat_state": "sometimes"}},
            lambda s: s.current_playback(),
        ),
        (
            {"current_user_playlists": {"items": [{"name": "No id"}]}},
            lambda s: s.list_user_playlists(10),
        ),
        ({"playlist": {"tracks": None}}, lambda s: s.get_playlist("pl-1")),
        ({"devices": None}, lambda s: s.list_devices()),
    ],
)
def test_malformed_payloads_raise_service_error(
    responses: dict[str, Any], call: Any
) -> None:
    """Unparseable responses surface as service errors, not raw exceptions."""
    service = SpotifyService(_StubClient(**responses))

    with pytest.raises(ServiceError, match="malformed response"):
        call(service)


@pytest.mark.unit
def test_malformed_search_payload_keeps_session_alive() -> None:
    """A bad response is printed as an error and the loop keeps reading."""
    # Arrange - search answers without the expected key
    service = SpotifyService(_StubClient(search={"unexpected": {}}))
    harness = build_harness(
        service,  # type: ignore[arg-type]
        lines=["tracks foo", "prompt ~>"],
        session=SessionState(user_id="user-1"),
    )

    # Act - run until EOF
    Controller(harness.context).run()

    # Assert - error shown, next command still handled
    printed = harness.printed()
    assert "error: malformed response from search:track" in printed
    assert harness.session.prompt_text == "~>"
    assert "bye" in printed
