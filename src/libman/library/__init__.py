"""User library helpers: playlist materialization and the playlist cache."""

from libman.library.cache import PlaylistCache
from libman.library.playlists import (
    contains_track,
    ensure_detailed,
    name_matches,
    renamed,
    with_track_added,
    with_track_removed,
)

__all__ = [
    "PlaylistCache",
    "contains_track",
    "ensure_detailed",
    "name_matches",
    "renamed",
    "with_track_added",
    "with_track_removed",
]
