"""Top-level read-dispatch loop."""

from __future__ import annotations

import logging
from collections.abc import Mapping

import typer

from libman.commands.catalog import global_registry
from libman.commands.handlers.help import HelpCommand
from libman.commands.handlers.library import (
    CreatePlaylistCommand,
    DeletePlaylistCommand,
    EditPlaylistCommand,
    PlayUserPlaylistCommand,
    RemovePlayingCommand,
    SavePlayingCommand,
)
from libman.commands.handlers.misc import DeviceCommand, PromptCommand, ShowCommand
from libman.commands.handlers.player import (
    RepeatCommand,
    ShuffleCommand,
    SkipCommand,
    VolumeCommand,
    apply_volume_delta,
)
from libman.commands.handlers.search import (
    PlayFirstCommand,
    SearchCommand,
    SearchKindCommand,
)
from libman.commands.parser import parse_command, parse_volume_delta
from libman.commands.registry import CommandRegistry
from libman.commands.types import CommandHandler, CommandResult, GlobalCommand
from libman.control.context import ShellContext
from libman.control.playback import toggle_playback
from libman.service.base import ServiceError
from libman.service.models import SearchKind

_LOGGER = logging.getLogger(__name__)


def default_handlers(
    registry: CommandRegistry[GlobalCommand],
) -> dict[GlobalCommand, CommandHandler]:
    """Build the handler bound to every top-level command id.

    Args:
        registry: Top-level registry, described by `help`.

    Returns:
        Dispatch table keyed by command id.
    """
    return {
        GlobalCommand.SEARCH: SearchCommand(),
        GlobalCommand.SEARCH_TRACK: SearchKindCommand(
            SearchKind.TRACK, GlobalCommand.SEARCH_TRACK
        ),
        GlobalCommand.SEARCH_ALBUM: SearchKindCommand(
            SearchKind.ALBUM, GlobalCommand.SEARCH_ALBUM
        ),
        GlobalCommand.SEARCH_ARTIST: SearchKindCommand(
            SearchKind.ARTIST, GlobalCommand.SEARCH_ARTIST
        ),
        GlobalCommand.SEARCH_PLAYLIST: SearchKindCommand(
            SearchKind.PLAYLIST, GlobalCommand.SEARCH_PLAYLIST
        ),
        GlobalCommand.PLAY_TRACK: PlayFirstCommand(
            SearchKind.TRACK, GlobalCommand.PLAY_TRACK
        ),
        GlobalCommand.PLAY_ALBUM: PlayFirstCommand(
            SearchKind.ALBUM, GlobalCommand.PLAY_ALBUM
        ),
        GlobalCommand.PLAY_ARTIST: PlayFirstCommand(
            SearchKind.ARTIST, GlobalCommand.PLAY_ARTIST
        ),
        GlobalCommand.PLAY_PLAYLIST: PlayFirstCommand(
            SearchKind.PLAYLIST, GlobalCommand.PLAY_PLAYLIST
        ),
        GlobalCommand.SET_VOLUME: VolumeCommand(),
        GlobalCommand.SHUFFLE: ShuffleCommand(),
        GlobalCommand.REPEAT: RepeatCommand(),
        GlobalCommand.NEXT: SkipCommand(forward=True),
        GlobalCommand.PREV: SkipCommand(forward=False),
        GlobalCommand.SAVE_PLAYING: SavePlayingCommand(),
        GlobalCommand.REMOVE_PLAYING: RemovePlayingCommand(),
        GlobalCommand.CREATE_PLAYLIST: CreatePlaylistCommand(),
        GlobalCommand.EDIT_PLAYLIST: EditPlaylistCommand(),
        GlobalCommand.DELETE_PLAYLIST: DeletePlaylistCommand(),
        GlobalCommand.PLAY_USER_PLAYLIST: PlayUserPlaylistCommand(),
        GlobalCommand.SET_DEVICE: DeviceCommand(),
        GlobalCommand.SHOW: ShowCommand(),
        GlobalCommand.SET_PROMPT: PromptCommand(),
        GlobalCommand.HELP: HelpCommand(registry),
    }


class Controller:
    """Owner of the session and its top-level command loop."""

    def __init__(
        self,
        context: ShellContext,
        *,
        registry: CommandRegistry[GlobalCommand] | None = None,
        handlers: Mapping[GlobalCommand, CommandHandler] | None = None,
    ) -> None:
        """Build the dispatch table.

        Args:
            context: Session collaborators.
            registry: Optional top-level registry override.
            handlers: Optional handler overrides keyed by command id.

        Raises:
            ValueError: If a registered command id has no handler.
        """
        self._context = context
        self._registry = registry or global_registry()
        self._handlers = default_handlers(self._registry)
        if handlers:
            self._handlers.update(handlers)
        missing = self._registry.ids() - set(self._handlers)
        if missing:
            names = ", ".join(sorted(str(command_id) for command_id in missing))
            raise ValueError(f"unbound commands: {names}")

    @property
    def context(self) -> ShellContext:
        """Return the session collaborators."""
        return self._context

    def bound_ids(self) -> frozenset[GlobalCommand]:
        """Return every command id with a handler."""
        return frozenset(self._handlers)

    def run(self) -> None:
        """Read and dispatch lines until input is interrupted."""
        terminal = self._context.terminal
        while True:
            try:
                raw = terminal.prompt(self._context.session.prompt_text)
                self.handle_line(raw)
            except (EOFError, KeyboardInterrupt, typer.Abort):
                terminal.print()
                terminal.print("bye")
                return

    def handle_line(self, raw: str) -> CommandResult | None:
        """Process one top-level line.

        Args:
            raw: Line typed by the user.

        Returns:
            Result of the executed operation, or None when a remote failure was
            reported instead.
        """
        try:
            result = self._execute(raw)
        except ServiceError as exc:
            _LOGGER.debug("command failed: %s", exc)
            self._context.renderer.render_failure(exc)
            return None
        self._context.renderer.render(result)
        return result

    def _execute(self, raw: str) -> CommandResult:
        if not raw.strip():
            return toggle_playback(self._context)
        delta = parse_volume_delta(raw)
        if delta is not None:
            return apply_volume_delta(self._context, delta)
        call = parse_command(raw.lstrip())
        descriptor = self._registry.match(call.name)
        if descriptor is None:
            return CommandResult.error(
                f"{call.name} is not a known command",
                code="unknown_command",
                data={"command": call.name},
            )
        _LOGGER.debug("dispatching %s", descriptor.id)
        return self._handlers[descriptor.id].execute(call, self._context)
