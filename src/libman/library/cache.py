"""Lazily fetched, in-place patched cache of the user's playlists."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from libman.library.playlists import name_matches
from libman.service.models import Playlist

_LOGGER = logging.getLogger(__name__)


class PlaylistCache:
    """Session snapshot of the user's library playlists.

    The list is fetched on first use and then kept coherent by targeted
    patches instead of refetching.
    """

    def __init__(self) -> None:
        """Start without a snapshot."""
        self._items: list[Playlist] | None = None

    @property
    def is_loaded(self) -> bool:
        """Return whether a snapshot has been fetched."""
        return self._items is not None

    def get_or_fetch(self, fetch: Callable[[], Iterable[Playlist]]) -> list[Playlist]:
        """Return the cached playlists, fetching them on first use.

        Args:
            fetch: Remote fetch used when no snapshot exists.

        Returns:
            Copy of the cached list in library order.
        """
        if self._items is None:
            self._items = list(fetch())
            _LOGGER.debug("playlist cache loaded with %d entries", len(self._items))
        return list(self._items)

    def invalidate(self) -> None:
        """Drop the snapshot so the next read refetches."""
        self._items = None

    def find(self, playlist_id: str) -> Playlist | None:
        """Return the cached entry for an id."""
        for item in self._items or ():
            if item.id == playlist_id:
                return item
        return None

    def find_by_name(self, name: str) -> Playlist | None:
        """Return the first cached entry whose name matches case-insensitively."""
        for item in self._items or ():
            if name_matches(item, name):
                return item
        return None

    def patch(self, playlist_id: str, update: Callable[[Playlist], Playlist]) -> bool:
        """Replace the entry for an id with `update(entry)`.

        Args:
            playlist_id: Target playlist id.
            update: Function producing the new entry.

        Returns:
            True when an entry was patched.
        """
        if self._items is None:
            return False
        for index, item in enumerate(self._items):
            if item.id == playlist_id:
                self._items[index] = update(item)
                return True
        return False

    def replace(self, playlist: Playlist) -> bool:
        """Store a newer representation of a cached playlist."""
        return self.patch(playlist.id, lambda _: playlist)

    def remove(self, playlist_id: str) -> bool:
        """Drop the entry for an id.

        Returns:
            True when an entry was removed.
        """
        if self._items is None:
            return False
        before = len(self._items)
        self._items = [item for item in self._items if item.id != playlist_id]
        return len(self._items) != before

    def prepend(self, playlist: Playlist) -> bool:
        """Insert a newly created playlist at the top of a loaded snapshot.

        Returns:
            True when the snapshot was loaded and updated.
        """
        if self._items is None:
            return False
        self._items.insert(0, playlist)
        return True
