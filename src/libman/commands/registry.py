"""Ordered command registry with case-insensitive lookup."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Generic

from libman.commands.types import CommandDescriptor, CommandIdT


class CommandRegistry(Generic[CommandIdT]):
    """Deterministic registry of command descriptors for one shell scope."""

    def __init__(self, descriptors: Iterable[CommandDescriptor[CommandIdT]]) -> None:
        """Build lookup tables from a static descriptor table.

        Args:
            descriptors: Descriptors in display order. When two descriptors
                share a name or alias, the earlier one wins.

        Raises:
            ValueError: If one id is registered twice.
        """
        self._descriptors = tuple(descriptors)
        self._by_token: dict[str, CommandDescriptor[CommandIdT]] = {}
        self._by_id: dict[CommandIdT, CommandDescriptor[CommandIdT]] = {}
        for descriptor in self._descriptors:
            if descriptor.id in self._by_id:
                raise ValueError(f"command id {descriptor.id!r} registered twice")
            self._by_id[descriptor.id] = descriptor
            for token in (descriptor.name, *descriptor.aliases):
                self._by_token.setdefault(token.casefold(), descriptor)

    def match(self, token: str) -> CommandDescriptor[CommandIdT] | None:
        """Resolve a command word to its descriptor.

        Args:
            token: Command word typed by the user.

        Returns:
            First registered descriptor whose name or alias matches, or None.
        """
        if not token:
            return None
        return self._by_token.get(token.casefold())

    def describe(self, command_id: CommandIdT) -> CommandDescriptor[CommandIdT]:
        """Return the descriptor registered for an id.

        Args:
            command_id: Known command identifier.

        Returns:
            Matching descriptor.

        Raises:
            KeyError: If the id is not registered in this scope.
        """
        return self._by_id[command_id]

    def list(self) -> Iterator[CommandDescriptor[CommandIdT]]:
        """Iterate descriptors in registration order.

        Returns:
            Fresh iterator on every call.
        """
        return iter(self._descriptors)

    def ids(self) -> frozenset[CommandIdT]:
        """Return every registered id."""
        return frozenset(self._by_id)

    def __iter__(self) -> Iterator[CommandDescriptor[CommandIdT]]:
        return self.list()

    def __len__(self) -> int:
        return len(self._descriptors)
