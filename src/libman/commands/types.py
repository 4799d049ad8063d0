"""Shared command-domain types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any, Generic, Protocol, TypeVar

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from libman.commands.parser import CommandCall
    from libman.control.context import ShellContext


class CommandStatus(StrEnum):
    """Normalized command execution status."""

    OK = "ok"
    ERROR = "error"


class CommandResult(BaseModel):
    """Deterministic command execution result."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    status: CommandStatus
    code: str
    message: str
    data: dict[str, Any] | None = None

    @property
    def is_ok(self) -> bool:
        """Return whether the command completed successfully."""
        return self.status == CommandStatus.OK

    @classmethod
    def ok(
        cls,
        message: str,
        *,
        code: str = "ok",
        data: dict[str, Any] | None = None,
    ) -> CommandResult:
        """Construct a successful command result.

        Args:
            message: User-facing output payload.
            code: Stable machine-readable success code.
            data: Optional structured payload for downstream consumers.

        Returns:
            Successful command result.
        """
        return cls(status=CommandStatus.OK, code=code, message=message, data=data)

    @classmethod
    def error(
        cls,
        message: str,
        *,
        code: str = "error",
        data: dict[str, Any] | None = None,
    ) -> CommandResult:
        """Construct an error command result.

        Args:
            message: User-facing error payload.
            code: Stable machine-readable error code.
            data: Optional structured payload for downstream consumers.

        Returns:
            Error command result.
        """
        return cls(status=CommandStatus.ERROR, code=code, message=message, data=data)

    @classmethod
    def cancelled(cls, message: str = "cancelled") -> CommandResult:
        """Construct the no-op result for a declined or blank selection.

        Args:
            message: User-facing cancellation text.

        Returns:
            Successful result with `cancelled` code.
        """
        return cls.ok(message, code="cancelled")


class GlobalCommand(StrEnum):
    """Top-level shell command identifiers."""

    SEARCH = "search"
    SEARCH_TRACK = "search_track"
    SEARCH_ALBUM = "search_album"
    SEARCH_ARTIST = "search_artist"
    SEARCH_PLAYLIST = "search_playlist"
    PLAY_TRACK = "play_track"
    PLAY_ALBUM = "play_album"
    PLAY_ARTIST = "play_artist"
    PLAY_PLAYLIST = "play_playlist"
    SET_VOLUME = "set_volume"
    SHUFFLE = "shuffle"
    REPEAT = "repeat"
    NEXT = "next"
    PREV = "prev"
    SAVE_PLAYING = "save_playing"
    REMOVE_PLAYING = "remove_playing"
    CREATE_PLAYLIST = "create_playlist"
    EDIT_PLAYLIST = "edit_playlist"
    DELETE_PLAYLIST = "delete_playlist"
    PLAY_USER_PLAYLIST = "play_user_playlist"
    SET_DEVICE = "set_device"
    SHOW = "show"
    SET_PROMPT = "set_prompt"
    HELP = "help"


class TrackCommand(StrEnum):
    """Track result-shell command identifiers."""

    PLAY = "play"
    QUEUE = "queue"
    SAVE = "save"
    LIKE = "like"
    HELP = "help"


class AlbumCommand(StrEnum):
    """Album result-shell command identifiers."""

    PLAY = "play"
    QUEUE = "queue"
    SAVE = "save"
    HELP = "help"


class ArtistCommand(StrEnum):
    """Artist result-shell command identifiers."""

    PLAY = "play"
    QUEUE = "queue"
    FOLLOW = "follow"
    HELP = "help"


class PlaylistCommand(StrEnum):
    """Playlist result-shell command identifiers."""

    PLAY = "play"
    QUEUE = "queue"
    FOLLOW = "follow"
    HELP = "help"


CommandIdT = TypeVar("CommandIdT", bound=StrEnum)


class CommandHandler(Protocol):
    """Protocol implemented by top-level command handlers."""

    def execute(self, call: CommandCall, context: ShellContext) -> CommandResult:
        """Execute one tokenized command line.

        Args:
            call: Tokenized command line.
            context: Session collaborators.
        """


@dataclass(frozen=True)
class CommandDescriptor(Generic[CommandIdT]):
    """Static metadata for one invocable command."""

    id: CommandIdT
    name: str
    aliases: tuple[str, ...] = ()
    short_description: str = ""
    usage: str = ""
    help: str = ""
    exits_shell: bool = False

    def format_help(self) -> str:
        """Render full help for `help <command>`.

        Returns:
            Multi-line help text.
        """
        aliases = ", ".join(self.aliases) if self.aliases else "(none)"
        return (
            f"# {self.name}\n"
            f"aliases: {aliases}\n"
            f"usage:\n  {self.usage}\n\n"
            f"{self.help}"
        )

    def format_usage(self) -> str:
        """Render the usage block shown after malformed arguments.

        Returns:
            Usage text.
        """
        return f"usage:\n  {self.usage}"

    def format_short_help(self) -> str:
        """Render the one-line entry used by the help index.

        Returns:
            Name, aliases, and short description.
        """
        if self.aliases:
            return f"{self.name} ({', '.join(self.aliases)}): {self.short_description}"
        return f"{self.name}: {self.short_description}"
