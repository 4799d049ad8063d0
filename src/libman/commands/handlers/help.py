"""Handler for `help` in every shell scope."""

from __future__ import annotations

from typing import Any

from libman.commands.parser import CommandCall
from libman.commands.registry import CommandRegistry
from libman.commands.types import CommandResult
from libman.control.context import ShellContext


def describe_commands(
    registry: CommandRegistry[Any], topic: str | None
) -> CommandResult:
    """Render the help index or the full help of one command.

    Args:
        registry: Registry of the current shell scope.
        topic: Optional command name or alias.

    Returns:
        Help text, or an error naming the unmatched topic.
    """
    if topic is None:
        lines = [descriptor.format_short_help() for descriptor in registry.list()]
        return CommandResult.ok("\n".join(lines), code="help_listed")
    wanted = topic.strip()
    descriptor = registry.match(wanted)
    if descriptor is None:
        return CommandResult.error(
            f"{wanted} did not match any command or alias\n"
            "run `help` for a list of the commands",
            code="unknown_command",
            data={"command": wanted},
        )
    return CommandResult.ok(
        descriptor.format_help(),
        code="help_shown",
        data={"command": descriptor.name},
    )


class HelpCommand:
    """Top-level `help` command handler."""

    def __init__(self, registry: CommandRegistry[Any]) -> None:
        """Store the registry whose commands are described.

        Args:
            registry: Top-level command registry.
        """
        self._registry = registry

    def execute(self, call: CommandCall, context: ShellContext) -> CommandResult:
        """List every command, or describe one.

        Args:
            call: Tokenized command line.
            context: Session collaborators (unused).

        Returns:
            Help result.
        """
        del context
        return describe_commands(self._registry, call.arg)
