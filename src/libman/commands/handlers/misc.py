"""Handlers for device, show, and prompt commands."""

from __future__ import annotations

from libman.commands.handlers._support import require_arg, usage_error
from libman.commands.parser import CommandCall
from libman.commands.types import CommandResult, GlobalCommand
from libman.control.context import ShellContext
from libman.control.playback import materialize_playlist
from libman.control.selection import choose_device, choose_user_playlist
from libman.control.shells import track_row
from libman.service.models import Episode, Playback, Track, join_artists

_SHOW_PLAYING = frozenset({"playing", "track"})
_SHOW_LIBRARY = frozenset({"lib", "pl"})


def _flag(value: bool) -> str:
    return "true" if value else "false"


def describe_item(item: Track | Episode) -> str:
    """Render the playing item on one or two lines."""
    if isinstance(item, Episode):
        return (
            f"{item.name} from {item.show_name} by {item.publisher}\n"
            f"{item.description}"
        )
    return f"{item.name} by {join_artists(item.artists)}"


class DeviceCommand:
    """`device` handler."""

    def execute(self, call: CommandCall, context: ShellContext) -> CommandResult:
        """Transfer playback to a device and target it from now on.

        Args:
            call: Tokenized command line; the argument is a device name.
            context: Session collaborators.

        Returns:
            `device_set`, or a no-op result.
        """
        choice = choose_device(context, call.arg)
        if isinstance(choice, CommandResult):
            return choice
        context.service.transfer_playback(choice.id)
        context.session.selected_device = choice.id
        return CommandResult.ok(
            f"playing on {choice.name}",
            code="device_set",
            data={"device_id": choice.id},
        )


class ShowCommand:
    """`show` handler."""

    def execute(self, call: CommandCall, context: ShellContext) -> CommandResult:
        """Show player status, the playing item, the library, or one playlist.

        Args:
            call: Tokenized command line.
            context: Session collaborators.

        Returns:
            Result carrying any text not rendered as a table.
        """
        topic = require_arg(call.arg)
        if topic is None:
            return self._show_playback(context)
        if topic in _SHOW_PLAYING:
            return self._show_playing(context)
        if topic in _SHOW_LIBRARY:
            return self._show_library(context)
        return self._show_playlist(context, topic)

    @staticmethod
    def _show_playback(context: ShellContext) -> CommandResult:
        status = context.service.current_playback()
        if status is None:
            return CommandResult.ok("not playing anything", code="not_playing")
        context.session.is_playing = status.is_playing
        fields = _playback_fields(context, status)
        context.renderer.render_fields(fields, title="player")
        return CommandResult.ok("", code="playback_shown")

    @staticmethod
    def _show_playing(context: ShellContext) -> CommandResult:
        status = context.service.current_playback()
        if status is None or status.item is None:
            return CommandResult.ok("not playing anything", code="not_playing")
        context.session.is_playing = status.is_playing
        return CommandResult.ok(
            f"{describe_item(status.item)}\nplaying = {_flag(status.is_playing)}",
            code="playing_shown",
        )

    @staticmethod
    def _show_library(context: ShellContext) -> CommandResult:
        playlists = context.user_playlists()
        if not playlists:
            return CommandResult.ok(
                "you don't seem to have any playlist", code="no_playlists"
            )
        context.renderer.render_indexed(
            [(playlist.name, str(playlist.track_count)) for playlist in playlists],
            columns=("playlist", "tracks"),
            title="library",
        )
        return CommandResult.ok("", code="library_shown")

    @staticmethod
    def _show_playlist(context: ShellContext, name: str) -> CommandResult:
        choice = choose_user_playlist(context, name)
        if isinstance(choice, CommandResult):
            return choice
        detail = materialize_playlist(context, choice)
        if not detail.tracks:
            return CommandResult.ok(f"{detail.name} is empty", code="playlist_empty")
        context.renderer.render_indexed(
            [track_row(track) for track in detail.tracks],
            columns=("track", "artists", "album"),
            title=detail.name,
        )
        return CommandResult.ok("", code="playlist_shown")


def _playback_fields(
    context: ShellContext, status: Playback
) -> list[tuple[str, str]]:
    fields = [
        ("device", status.device.name if status.device is not None else "unknown"),
        ("repeat", status.repeat.value),
        ("shuffle", _flag(status.shuffle)),
        ("playing", _flag(status.is_playing)),
    ]
    if status.item is not None:
        fields.append(("item", describe_item(status.item)))
    last = context.session.last_playlist
    if last is not None:
        fields.append(("last playlist", last.name))
    return fields


class PromptCommand:
    """`prompt` handler."""

    def execute(self, call: CommandCall, context: ShellContext) -> CommandResult:
        """Replace the top-level prompt text.

        Args:
            call: Tokenized command line; the trimmed argument becomes the prompt.
            context: Session collaborators.

        Returns:
            `prompt_set`, or usage.
        """
        text = require_arg(call.arg)
        if text is None:
            return usage_error(GlobalCommand.SET_PROMPT)
        context.session.prompt_text = text
        return CommandResult.ok("", code="prompt_set", data={"prompt": text})
