"""Handlers for search and play-first commands."""

from __future__ import annotations

import re

from libman.commands.handlers._support import require_arg, usage_error
from libman.commands.parser import CommandCall
from libman.commands.types import CommandResult, GlobalCommand
from libman.control import playback
from libman.control.context import ShellContext
from libman.control.shells import result_shell_for
from libman.service.base import SearchItem
from libman.service.models import Album, Artist, SearchKind, Track, join_artists

_NAME_BY_ARTIST = re.compile(r"^(?P<name>.+?)\s+by\s+(?P<artist>.+)$", re.IGNORECASE)
_FIELD_PREFIX = {SearchKind.TRACK: "track", SearchKind.ALBUM: "album"}
_MIXED_ORDER = (
    SearchKind.TRACK,
    SearchKind.ARTIST,
    SearchKind.ALBUM,
    SearchKind.PLAYLIST,
)


def build_query(kind: SearchKind, text: str) -> str:
    """Turn `<name> by <artist>` into a field-filtered query.

    Only track and album searches support the filter; any other text is sent
    unchanged.

    Args:
        kind: Searched kind.
        text: Query typed by the user.

    Returns:
        Query string for the remote search.
    """
    prefix = _FIELD_PREFIX.get(kind)
    match = _NAME_BY_ARTIST.match(text)
    if prefix is None or match is None:
        return text
    return f"{prefix}:{match.group('name')} artist:{match.group('artist')}"


def _mixed_row(item: SearchItem) -> tuple[str, str, str]:
    if isinstance(item, Track):
        return ("track", item.name, join_artists(item.artists))
    if isinstance(item, Album):
        return ("album", item.name, join_artists(item.artists))
    if isinstance(item, Artist):
        return ("artist", item.name, "")
    return ("playlist", item.name, item.owner_name or "")


class SearchCommand:
    """`search` handler: every kind at once, pick one result to play."""

    def execute(self, call: CommandCall, context: ShellContext) -> CommandResult:
        """Search all kinds and play the chosen result.

        Args:
            call: Tokenized command line.
            context: Session collaborators.

        Returns:
            Play result, `cancelled`, or `no_result`.
        """
        query = require_arg(call.arg)
        if query is None:
            return usage_error(GlobalCommand.SEARCH)
        limit = context.config.search.mixed_limit
        items: list[SearchItem] = []
        for kind in _MIXED_ORDER:
            items.extend(context.service.search(kind, build_query(kind, query), limit))
        if not items:
            return CommandResult.ok(f"no result for {query}", code="no_result")
        context.renderer.render_indexed(
            [_mixed_row(item) for item in items],
            columns=("kind", "name", "by"),
        )
        index = context.terminal.read_number(0, len(items))
        if index is None:
            return CommandResult.cancelled()
        return playback.play_item(context, items[index])


class SearchKindCommand:
    """`tracks`/`albums`/`artists`/`playlists` handler opening a result shell."""

    def __init__(self, kind: SearchKind, command_id: GlobalCommand) -> None:
        """Bind the handler to one search kind.

        Args:
            kind: Kind to search.
            command_id: Command whose usage is shown on a missing query.
        """
        self._kind = kind
        self._command_id = command_id

    def execute(self, call: CommandCall, context: ShellContext) -> CommandResult:
        """Search one kind and browse the results.

        Args:
            call: Tokenized command line.
            context: Session collaborators.

        Returns:
            `results_closed` after the result shell exits, or `no_result`.
        """
        query = require_arg(call.arg)
        if query is None:
            return usage_error(self._command_id)
        items = context.service.search(
            self._kind, build_query(self._kind, query), context.config.search.limit
        )
        if not items:
            return CommandResult.ok(f"no result for {query}", code="no_result")
        result_shell_for(context, self._kind, items).run()
        return CommandResult.ok("", code="results_closed", data={"count": len(items)})


class PlayFirstCommand:
    """`play`/`album`/`artist`/`playlist` handler playing the best match."""

    def __init__(self, kind: SearchKind, command_id: GlobalCommand) -> None:
        """Bind the handler to one search kind.

        Args:
            kind: Kind to search.
            command_id: Command whose usage is shown on a missing query.
        """
        self._kind = kind
        self._command_id = command_id

    def execute(self, call: CommandCall, context: ShellContext) -> CommandResult:
        """Search one kind and play its first result.

        Args:
            call: Tokenized command line.
            context: Session collaborators.

        Returns:
            Play result, or `no_result`.
        """
        query = require_arg(call.arg)
        if query is None:
            return usage_error(self._command_id)
        items = context.service.search(
            self._kind, build_query(self._kind, query), context.config.search.limit
        )
        if not items:
            return CommandResult.ok(f"no result for {query}", code="no_result")
        return playback.play_item(context, items[0])
