"""Nested read-dispatch loop over one list of search results."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Generic, TypeVar

from libman.cli.rendering import CliRenderer
from libman.cli.terminal import Terminal
from libman.commands.handlers.help import describe_commands
from libman.commands.parser import (
    IndexParseError,
    IndexRangeError,
    is_digits,
    parse_index,
    split_command,
)
from libman.commands.registry import CommandRegistry
from libman.commands.types import CommandDescriptor, CommandIdT, CommandResult
from libman.service.base import ServiceError

_LOGGER = logging.getLogger(__name__)

ItemT = TypeVar("ItemT")

ItemAction = Callable[[ItemT, str | None], CommandResult]
"""Scoped action applied to one item plus any text after its index."""

SHELL_PROMPT = "command:"
SHELL_HINT = "type help for a list of available actions"


class ResultShell(Generic[ItemT, CommandIdT]):
    """Browse an ordered result list with a kind-scoped command vocabulary."""

    def __init__(
        self,
        *,
        terminal: Terminal,
        renderer: CliRenderer,
        registry: CommandRegistry[CommandIdT],
        items: Sequence[ItemT],
        columns: Sequence[str],
        row: Callable[[ItemT], Sequence[str]],
        actions: Mapping[CommandIdT, ItemAction[ItemT]],
        default_action: CommandIdT,
        help_id: CommandIdT,
        title: str | None = None,
    ) -> None:
        """Bind a result list to its scoped registry and actions.

        Args:
            terminal: Console input/output.
            renderer: Result renderer.
            registry: Kind-scoped command registry.
            items: Non-empty ordered results.
            columns: Column headers of the listing.
            row: Cell values shown for one item.
            actions: Operation bound to every non-help command id.
            default_action: Id run by the bare-index shortcut.
            help_id: Id of the scope's help command, bound by the shell itself.
            title: Optional listing title.

        Raises:
            ValueError: If the list is empty or a registered id has no action.
        """
        if not items:
            raise ValueError("a result shell needs at least one item")
        bound = set(actions) | {help_id}
        missing = registry.ids() - bound
        if missing:
            names = ", ".join(sorted(str(command_id) for command_id in missing))
            raise ValueError(f"unbound result-shell commands: {names}")
        if default_action not in actions:
            raise ValueError(f"default action {default_action!r} is not bound")
        self._terminal = terminal
        self._renderer = renderer
        self._registry = registry
        self._items = tuple(items)
        self._columns = tuple(columns)
        self._row = row
        self._actions = dict(actions)
        self._default_action = default_action
        self._help_id = help_id
        self._title = title

    @property
    def items(self) -> tuple[ItemT, ...]:
        """Return the browsed results."""
        return self._items

    def bound_ids(self) -> frozenset[CommandIdT]:
        """Return every command id this shell can execute."""
        return frozenset(self._actions) | {self._help_id}

    def run(self) -> None:
        """Show the results once, then dispatch lines until the shell exits.

        Interruptions (EOF, Ctrl-C) propagate to the caller.
        """
        self._renderer.render_indexed(
            [self._row(item) for item in self._items],
            columns=self._columns,
            title=self._title,
        )
        self._terminal.print(SHELL_HINT)
        while True:
            raw = self._terminal.prompt(SHELL_PROMPT)
            if self.handle_line(raw):
                return

    def handle_line(self, raw: str) -> bool:
        """Process one line.

        Args:
            raw: Line typed by the user.

        Returns:
            True when the shell should exit.
        """
        line = raw.strip()
        if not line:
            self._renderer.render(CommandResult.cancelled())
            return True
        if is_digits(line):
            return self._run_index_shortcut(line)
        name, arg = split_command(line)
        descriptor = self._registry.match(name)
        if descriptor is None:
            self._renderer.render(
                CommandResult.error(
                    f"{name} is not a known command",
                    code="unknown_command",
                    data={"command": name},
                )
            )
            return False
        if descriptor.id == self._help_id:
            self._renderer.render(describe_commands(self._registry, arg))
            return False
        return self._run_scoped(descriptor, arg)

    def _run_index_shortcut(self, token: str) -> bool:
        index = int(token)
        if index >= len(self._items):
            self._renderer.render(
                CommandResult.error(
                    str(IndexRangeError(index, len(self._items))),
                    code="index_out_of_range",
                )
            )
            return False
        result = self._invoke(self._default_action, self._items[index], None)
        return result is not None and result.is_ok

    def _run_scoped(
        self, descriptor: CommandDescriptor[CommandIdT], arg: str | None
    ) -> bool:
        if arg is None:
            self._renderer.render(_usage(descriptor))
            return False
        index_token, rest = split_command(arg.strip())
        try:
            index = parse_index(index_token, len(self._items))
        except IndexRangeError as exc:
            self._renderer.render(
                CommandResult.error(str(exc), code="index_out_of_range")
            )
            return False
        except IndexParseError:
            self._renderer.render(_usage(descriptor))
            return False
        result = self._invoke(descriptor.id, self._items[index], rest)
        if result is None:
            return False
        return descriptor.exits_shell and result.is_ok

    def _invoke(
        self, command_id: CommandIdT, item: ItemT, rest: str | None
    ) -> CommandResult | None:
        try:
            result = self._actions[command_id](item, rest)
        except ServiceError as exc:
            _LOGGER.debug("result-shell action %s failed: %s", command_id, exc)
            self._renderer.render_failure(exc)
            return None
        self._renderer.render(result)
        return result


def _usage(descriptor: CommandDescriptor[CommandIdT]) -> CommandResult:
    return CommandResult.error(
        descriptor.format_usage(),
        code="usage",
        data={"command": descriptor.name},
    )
