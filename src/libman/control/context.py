"""Collaborators shared by every shell in one session."""

from __future__ import annotations

from dataclasses import dataclass

from libman.cli.rendering import CliRenderer
from libman.cli.terminal import Terminal
from libman.config.global_config import LibmanConfig
from libman.service.base import MusicService
from libman.service.models import Playlist
from libman.session.models import SessionState


@dataclass(frozen=True)
class ShellContext:
    """Service, console, and session state handed to command handlers."""

    service: MusicService
    session: SessionState
    terminal: Terminal
    renderer: CliRenderer
    config: LibmanConfig

    @property
    def device_id(self) -> str | None:
        """Return the device targeted by player calls (None means active)."""
        return self.session.selected_device

    def user_playlists(self) -> list[Playlist]:
        """Return the user's playlists, fetching them on first use."""
        limit = self.config.playlists.fetch_limit
        return self.session.playlist_cache.get_or_fetch(
            lambda: self.service.list_user_playlists(limit)
        )
