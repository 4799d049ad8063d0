"""Spotipy-backed implementation of the music-service contract."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import requests
import spotipy
from pydantic import ValidationError
from spotipy.cache_handler import CacheFileHandler, CacheHandler, MemoryCacheHandler
from spotipy.exceptions import SpotifyException
from spotipy.oauth2 import SpotifyOAuth, SpotifyOauthError

from libman.config.credentials import Credentials
from libman.service.base import AuthenticationError, SearchItem, ServiceError
from libman.service.models import (
    Album,
    Artist,
    Device,
    Episode,
    Playback,
    PlaylistDetail,
    PlaylistSummary,
    RepeatMode,
    SearchKind,
    Track,
    User,
)

_LOGGER = logging.getLogger(__name__)

SCOPES = (
    "user-read-recently-played user-read-playback-state user-top-read "
    "playlist-modify-public user-modify-playback-state playlist-modify-private "
    "user-follow-modify user-read-currently-playing user-follow-read "
    "user-library-modify user-read-playback-position playlist-read-private "
    "user-library-read playlist-read-collaborative"
)
_ADDITIONAL_TYPES = "track,episode"
_TOP_TRACKS_COUNTRY = "US"
_ALBUM_TRACKS_LIMIT = 50


@contextmanager
def _remote_call(operation: str) -> Iterator[None]:
    """Translate Spotipy and transport failures into `ServiceError`.

    Args:
        operation: Short operation label used in logs.

    Raises:
        AuthenticationError: If the OAuth layer fails.
        ServiceError: If the Web API or transport fails, or the response
            cannot be parsed.
    """
    _LOGGER.debug("spotify call: %s", operation)
    try:
        yield
    except SpotifyOauthError as exc:
        _LOGGER.warning("spotify auth failure during %s: %s", operation, exc)
        raise AuthenticationError(str(exc)) from exc
    except SpotifyException as exc:
        _LOGGER.warning("spotify api failure during %s: %s", operation, exc)
        raise ServiceError(exc.msg or str(exc)) from exc
    except requests.RequestException as exc:
        _LOGGER.warning("transport failure during %s: %s", operation, exc)
        raise ServiceError(str(exc)) from exc
    except (AttributeError, KeyError, TypeError, ValueError, ValidationError) as exc:
        _LOGGER.warning("malformed response during %s: %r", operation, exc)
        raise ServiceError(f"malformed response from {operation}: {exc}") from exc


def _parse_artist(payload: dict[str, Any]) -> Artist:
    return Artist(
        id=payload.get("id"),
        uri=payload.get("uri") or "",
        name=payload.get("name") or "",
    )


def _parse_artists(payloads: list[dict[str, Any]] | None) -> tuple[Artist, ...]:
    return tuple(_parse_artist(item) for item in payloads or [] if item)


def _parse_album(payload: dict[str, Any]) -> Album:
    return Album(
        id=payload.get("id"),
        uri=payload.get("uri"),
        name=payload.get("name") or "",
        artists=_parse_artists(payload.get("artists")),
    )


def _parse_track(payload: dict[str, Any], *, album_name: str | None = None) -> Track:
    album = payload.get("album") or {}
    return Track(
        id=payload.get("id"),
        uri=payload.get("uri") or "",
        name=payload.get("name") or "",
        album_name=album_name if album_name is not None else album.get("name", ""),
        artists=_parse_artists(payload.get("artists")),
    )


def _parse_episode(payload: dict[str, Any]) -> Episode:
    show = payload.get("show") or {}
    return Episode(
        name=payload.get("name") or "",
        show_name=show.get("name") or "",
        publisher=show.get("publisher") or "",
        description=payload.get("description") or "",
    )


def _parse_playing_item(payload: dict[str, Any] | None) -> Track | Episode | None:
    if not payload:
        return None
    if payload.get("type") == "episode":
        return _parse_episode(payload)
    return _parse_track(payload)


def _parse_playlist_summary(payload: dict[str, Any]) -> PlaylistSummary:
    owner = payload.get("owner") or {}
    tracks = payload.get("tracks") or {}
    return PlaylistSummary(
        id=payload["id"],
        uri=payload.get("uri") or "",
        name=payload.get("name") or "",
        owner_name=owner.get("display_name"),
        track_count=int(tracks.get("total") or 0),
    )


def _parse_device(payload: dict[str, Any]) -> Device:
    return Device(
        id=payload.get("id") or "",
        name=payload.get("name") or "",
        is_active=bool(payload.get("is_active")),
        volume_percent=payload.get("volume_percent"),
    )


class SpotifyService:
    """`MusicService` implementation over a `spotipy.Spotify` client."""

    def __init__(self, client: spotipy.Spotify) -> None:
        """Store the Spotipy client.

        Args:
            client: Authenticated (or lazily authenticating) Spotipy client.
        """
        self._client = client

    def current_user(self) -> User:
        with _remote_call("current_user"):
            payload = self._client.current_user()
            return User(id=payload["id"], display_name=payload.get("display_name"))

    def search(self, kind: SearchKind, query: str, limit: int) -> list[SearchItem]:
        with _remote_call(f"search:{kind.value}"):
            payload = self._client.search(q=query, limit=limit, type=kind.value)
            items = [item for item in payload[f"{kind.value}s"]["items"] if item]
            if kind == SearchKind.TRACK:
                return [_parse_track(item) for item in items]
            if kind == SearchKind.ALBUM:
                return [_parse_album(item) for item in items]
            if kind == SearchKind.ARTIST:
                return [_parse_artist(item) for item in items]
            return [_parse_playlist_summary(item) for item in items]

    def current_playback(self) -> Playback | None:
        with _remote_call("current_playback"):
            payload = self._client.current_playback(additional_types=_ADDITIONAL_TYPES)
            if not payload:
                return None
            device = payload.get("device")
            return Playback(
                device=_parse_device(device) if device else None,
                repeat=RepeatMode(payload.get("repeat_state") or RepeatMode.OFF.value),
                shuffle=bool(payload.get("shuffle_state")),
                is_playing=bool(payload.get("is_playing")),
                item=_parse_playing_item(payload.get("item")),
            )

    def currently_playing_track(self) -> Track | None:
        with _remote_call("currently_playing"):
            payload = self._client.current_user_playing_track()
            if not payload:
                return None
            item = _parse_playing_item(payload.get("item"))
            return item if isinstance(item, Track) else None

    def list_devices(self) -> list[Device]:
        with _remote_call("devices"):
            payload = self._client.devices()
            return [_parse_device(item) for item in payload.get("devices", [])]

    def set_volume(self, percent: int, device_id: str | None = None) -> None:
        with _remote_call("volume"):
            self._client.volume(percent, device_id=device_id)

    def set_shuffle(self, state: bool, device_id: str | None = None) -> None:
        with _remote_call("shuffle"):
            self._client.shuffle(state, device_id=device_id)

    def set_repeat(self, mode: RepeatMode, device_id: str | None = None) -> None:
        with _remote_call("repeat"):
            self._client.repeat(mode.value, device_id=device_id)

    def start_playback(
        self,
        device_id: str | None = None,
        context_uri: str | None = None,
        track_uris: Sequence[str] | None = None,
        offset: int | None = None,
    ) -> None:
        with _remote_call("start_playback"):
            self._client.start_playback(
                device_id=device_id,
                context_uri=context_uri,
                uris=list(track_uris) if track_uris is not None else None,
                offset={"position": offset} if offset is not None else None,
            )

    def pause_playback(self, device_id: str | None = None) -> None:
        with _remote_call("pause_playback"):
            self._client.pause_playback(device_id=device_id)

    def next_track(self, device_id: str | None = None) -> None:
        with _remote_call("next_track"):
            self._client.next_track(device_id=device_id)

    def previous_track(self, device_id: str | None = None) -> None:
        with _remote_call("previous_track"):
            self._client.previous_track(device_id=device_id)

    def transfer_playback(self, device_id: str) -> None:
        with _remote_call("transfer_playback"):
            self._client.transfer_playback(device_id, force_play=False)

    def list_user_playlists(self, limit: int) -> list[PlaylistSummary]:
        with _remote_call("current_user_playlists"):
            payload = self._client.current_user_playlists(limit=limit)
            return [_parse_playlist_summary(item) for item in payload["items"] if item]

    def get_playlist(self, playlist_id: str) -> PlaylistDetail:
        with _remote_call("playlist"):
            payload = self._client.playlist(playlist_id)
            tracks: list[Track] = []
            page: dict[str, Any] | None = payload.get("tracks")
            while page:
                for entry in page.get("items", []):
                    track = (entry or {}).get("track")
                    if track and track.get("type", "track") == "track":
                        tracks.append(_parse_track(track))
                page = self._client.next(page) if page.get("next") else None
            owner = payload.get("owner") or {}
            return PlaylistDetail(
                id=payload["id"],
                uri=payload.get("uri") or "",
                name=payload.get("name") or "",
                owner_name=owner.get("display_name"),
                tracks=tuple(tracks),
            )

    def create_playlist(
        self,
        user_id: str,
        name: str,
        public: bool | None = None,
        description: str = "",
    ) -> PlaylistSummary:
        with _remote_call("user_playlist_create"):
            payload = self._client.user_playlist_create(
                user_id,
                name,
                public=True if public is None else public,
                description=description,
            )
            return _parse_playlist_summary(payload)

    def edit_playlist_details(
        self,
        playlist_id: str,
        name: str | None = None,
        public: bool | None = None,
        description: str | None = None,
    ) -> None:
        with _remote_call("playlist_change_details"):
            self._client.playlist_change_details(
                playlist_id, name=name, public=public, description=description
            )

    def unfollow_playlist(self, playlist_id: str) -> None:
        with _remote_call("current_user_unfollow_playlist"):
            self._client.current_user_unfollow_playlist(playlist_id)

    def add_tracks_to_playlist(
        self, playlist_id: str, track_refs: Sequence[str], position: int | None = None
    ) -> None:
        with _remote_call("playlist_add_items"):
            self._client.playlist_add_items(
                playlist_id, list(track_refs), position=position
            )

    def remove_tracks_from_playlist(
        self, playlist_id: str, track_refs: Sequence[str]
    ) -> None:
        with _remote_call("playlist_remove_all_occurrences_of_items"):
            self._client.playlist_remove_all_occurrences_of_items(
                playlist_id, list(track_refs)
            )

    def add_to_queue(self, uri: str, device_id: str | None = None) -> None:
        with _remote_call("add_to_queue"):
            self._client.add_to_queue(uri, device_id=device_id)

    def save_track(self, track_id: str) -> None:
        with _remote_call("current_user_saved_tracks_add"):
            self._client.current_user_saved_tracks_add([track_id])

    def check_track_saved(self, track_id: str) -> bool:
        with _remote_call("current_user_saved_tracks_contains"):
            return bool(self._client.current_user_saved_tracks_contains([track_id])[0])

    def follow_artist(self, artist_id: str) -> None:
        with _remote_call("user_follow_artists"):
            self._client.user_follow_artists([artist_id])

    def check_artist_followed(self, artist_id: str) -> bool:
        with _remote_call("current_user_following_artists"):
            return bool(self._client.current_user_following_artists([artist_id])[0])

    def save_album(self, album_id: str) -> None:
        with _remote_call("current_user_saved_albums_add"):
            self._client.current_user_saved_albums_add([album_id])

    def check_album_saved(self, album_id: str) -> bool:
        with _remote_call("current_user_saved_albums_contains"):
            return bool(self._client.current_user_saved_albums_contains([album_id])[0])

    def follow_playlist(self, playlist_id: str) -> None:
        with _remote_call("current_user_follow_playlist"):
            self._client.current_user_follow_playlist(playlist_id)

    def check_playlist_followed(self, playlist_id: str, user_id: str) -> bool:
        with _remote_call("playlist_is_following"):
            return bool(self._client.playlist_is_following(playlist_id, [user_id])[0])

    def album_tracks(self, album: Album) -> list[Track]:
        album_id = album.id or album.uri
        if album_id is None:
            raise ServiceError(f"album {album.name} has neither id nor uri")
        with _remote_call("album_tracks"):
            payload = self._client.album_tracks(album_id, limit=_ALBUM_TRACKS_LIMIT)
            return [
                _parse_track(item, album_name=album.name)
                for item in payload.get("items", [])
                if item
            ]

    def artist_top_tracks(self, artist: Artist) -> list[Track]:
        with _remote_call("artist_top_tracks"):
            payload = self._client.artist_top_tracks(
                artist.id or artist.uri, country=_TOP_TRACKS_COUNTRY
            )
            return [_parse_track(item) for item in payload.get("tracks", []) if item]


def _build_cache_handler(token_cache_path: Path | None) -> CacheHandler:
    """Select token cache storage.

    Args:
        token_cache_path: Optional on-disk token cache path.

    Returns:
        File-backed handler when a path is configured, else in-memory handler.
    """
    if token_cache_path is None:
        return MemoryCacheHandler()
    return CacheFileHandler(cache_path=str(token_cache_path))


def build_spotify_service(
    credentials: Credentials,
    *,
    token_cache_path: Path | None = None,
) -> SpotifyService:
    """Build an OAuth-authenticated service adapter.

    Args:
        credentials: Client id, secret, and redirect URI.
        token_cache_path: Optional on-disk token cache path.

    Returns:
        Service adapter; the OAuth flow runs on the first remote call.
    """
    auth_manager = SpotifyOAuth(
        client_id=credentials.client_id,
        client_secret=credentials.client_secret,
        redirect_uri=credentials.redirect_uri,
        scope=SCOPES,
        cache_handler=_build_cache_handler(token_cache_path),
    )
    return SpotifyService(spotipy.Spotify(auth_manager=auth_manager))
