"""Session models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from libman.config.global_config import DEFAULT_PROMPT
from libman.library.cache import PlaylistCache
from libman.service.models import Playlist


class SessionState(BaseModel):
    """Mutable state owned by the top-level shell for one session."""

    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True)

    user_id: str
    display_name: str = ""
    prompt_text: str = DEFAULT_PROMPT
    is_playing: bool = False
    last_playlist: Playlist | None = None
    playlist_cache: PlaylistCache = Field(default_factory=PlaylistCache)
    selected_device: str | None = None

    def forget_playlist(self, playlist_id: str) -> None:
        """Drop every reference to a deleted playlist.

        Args:
            playlist_id: Id of the deleted playlist.
        """
        self.playlist_cache.remove(playlist_id)
        if self.last_playlist is not None and self.last_playlist.id == playlist_id:
            self.last_playlist = None
