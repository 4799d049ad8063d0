"""Handlers for commands that manage the user's playlists."""

from __future__ import annotations

import logging

from libman.commands.handlers._support import require_arg
from libman.commands.parser import CommandCall
from libman.commands.types import CommandResult
from libman.control import playback
from libman.control.context import ShellContext
from libman.control.selection import choose_user_playlist
from libman.library.playlists import renamed

_LOGGER = logging.getLogger(__name__)


class SavePlayingCommand:
    """`save` handler: add the playing track to a library playlist."""

    def execute(self, call: CommandCall, context: ShellContext) -> CommandResult:
        """Add the current track at the top of a playlist, skipping duplicates.

        Args:
            call: Tokenized command line; the argument names the playlist.
            context: Session collaborators.

        Returns:
            Library mutation result or a no-op result.
        """
        track = context.service.currently_playing_track()
        if track is None:
            return CommandResult.ok("not playing anything", code="not_playing")
        choice = choose_user_playlist(context, call.arg)
        if isinstance(choice, CommandResult):
            return choice
        return playback.add_track_to_playlist(context, choice, track)


class RemovePlayingCommand:
    """`remove` handler: drop the playing track from a library playlist."""

    def execute(self, call: CommandCall, context: ShellContext) -> CommandResult:
        """Remove every occurrence of the current track from a playlist.

        Args:
            call: Tokenized command line; the argument names the playlist.
            context: Session collaborators.

        Returns:
            Library mutation result or a no-op result.
        """
        track = context.service.currently_playing_track()
        if track is None:
            return CommandResult.ok("not playing anything", code="not_playing")
        choice = choose_user_playlist(context, call.arg)
        if isinstance(choice, CommandResult):
            return choice
        return playback.remove_track_from_playlist(context, choice, track)


class CreatePlaylistCommand:
    """`create` handler."""

    def execute(self, call: CommandCall, context: ShellContext) -> CommandResult:
        """Ask for playlist details, confirm, then create the playlist.

        Args:
            call: Tokenized command line; the argument is the playlist name.
            context: Session collaborators.

        Returns:
            `playlist_created`, or a cancellation.
        """
        terminal = context.terminal
        name = require_arg(call.arg)
        if name is None:
            name = terminal.read_input("playlist name")
            if not name:
                return CommandResult.cancelled()
        else:
            terminal.print(f"playlist name: {name}")
        description = terminal.read_input("playlist description")
        public = terminal.read_option_bool("should the playlist be public?")
        if not terminal.read_bool(f"create playlist {name}?"):
            return CommandResult.cancelled("aborted")
        created = context.service.create_playlist(
            context.session.user_id, name, public=public, description=description
        )
        context.session.playlist_cache.prepend(created)
        _LOGGER.info("created playlist %s", created.id)
        return CommandResult.ok(
            f"created new playlist {name}",
            code="playlist_created",
            data={"playlist_id": created.id},
        )


class EditPlaylistCommand:
    """`edit` handler."""

    def execute(self, call: CommandCall, context: ShellContext) -> CommandResult:
        """Change name, description, or visibility of a library playlist.

        Blank answers keep the current value.

        Args:
            call: Tokenized command line; the argument names the playlist.
            context: Session collaborators.

        Returns:
            `playlist_edited`, or a no-op result.
        """
        choice = choose_user_playlist(context, call.arg)
        if isinstance(choice, CommandResult):
            return choice
        terminal = context.terminal
        new_name = terminal.read_option(f"playlist name ({choice.name})")
        description = terminal.read_option("playlist description (skip to not change)")
        public = terminal.read_option_bool("public")
        if not terminal.read_bool(f"change details for {choice.name}?"):
            return CommandResult.cancelled()
        context.service.edit_playlist_details(
            choice.id, name=new_name, public=public, description=description
        )
        if new_name is not None:
            title: str = new_name
            session = context.session
            session.playlist_cache.patch(
                choice.id, lambda playlist: renamed(playlist, title)
            )
            last = session.last_playlist
            if last is not None and last.id == choice.id:
                session.last_playlist = renamed(last, title)
        return CommandResult.ok(
            f"edited {choice.name}",
            code="playlist_edited",
            data={"playlist_id": choice.id},
        )


class DeletePlaylistCommand:
    """`delete` handler."""

    def execute(self, call: CommandCall, context: ShellContext) -> CommandResult:
        """Remove a playlist from the library after confirmation.

        Args:
            call: Tokenized command line; the argument names the playlist.
            context: Session collaborators.

        Returns:
            `playlist_deleted`, or a no-op result.
        """
        choice = choose_user_playlist(context, call.arg)
        if isinstance(choice, CommandResult):
            return choice
        if not context.terminal.read_bool(f"delete {choice.name}?"):
            return CommandResult.cancelled()
        context.service.unfollow_playlist(choice.id)
        context.session.forget_playlist(choice.id)
        return CommandResult.ok(
            f"deleted {choice.name}",
            code="playlist_deleted",
            data={"playlist_id": choice.id},
        )


class PlayUserPlaylistCommand:
    """`lib` handler."""

    def execute(self, call: CommandCall, context: ShellContext) -> CommandResult:
        """Play a playlist chosen from the user's library."""
        choice = choose_user_playlist(context, call.arg)
        if isinstance(choice, CommandResult):
            return choice
        return playback.play_playlist(context, choice, from_library=True)
