"""Shared support helpers for top-level command handlers."""

from __future__ import annotations

from libman.commands.catalog import global_registry
from libman.commands.types import CommandResult, GlobalCommand

_GLOBAL_REGISTRY = global_registry()


def usage_error(command_id: GlobalCommand) -> CommandResult:
    """Build the result shown when a command is called with bad arguments.

    Args:
        command_id: Command whose usage is shown.

    Returns:
        Error result carrying the usage block.
    """
    descriptor = _GLOBAL_REGISTRY.describe(command_id)
    return CommandResult.error(
        descriptor.format_usage(),
        code="usage",
        data={"command": descriptor.name},
    )


def require_arg(arg: str | None) -> str | None:
    """Return a stripped argument, or None when it is missing."""
    if arg is None:
        return None
    return arg.strip() or None
