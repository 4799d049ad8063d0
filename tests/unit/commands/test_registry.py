"""Unit tests for command registries and the static catalog."""

from __future__ import annotations

from collections.abc import Callable
from enum import StrEnum
from typing import Any

import pytest

from libman.commands.catalog import (
    album_registry,
    artist_registry,
    global_registry,
    playlist_registry,
    track_registry,
)
from libman.commands.registry import CommandRegistry
from libman.commands.types import (
    AlbumCommand,
    ArtistCommand,
    CommandDescriptor,
    GlobalCommand,
    PlaylistCommand,
    TrackCommand,
)

_SCOPES: list[tuple[Callable[[], CommandRegistry[Any]], type[StrEnum]]] = [
    (global_registry, GlobalCommand),
    (track_registry, TrackCommand),
    (album_registry, AlbumCommand),
    (artist_registry, ArtistCommand),
    (playlist_registry, PlaylistCommand),
]


class _Scope(StrEnum):
    FIRST = "first"
    SECOND = "second"


@pytest.mark.unit
@pytest.mark.parametrize(("factory", "enum"), _SCOPES)
def test_every_id_has_exactly_one_descriptor(
    factory: Callable[[], CommandRegistry[Any]], enum: type[StrEnum]
) -> None:
    """Each scope enum should be fully described by its registry."""
    registry = factory()

    assert registry.ids() == frozenset(enum)
    assert len(registry) == len(enum)


@pytest.mark.unit
@pytest.mark.parametrize(("factory", "enum"), _SCOPES)
def test_names_and_aliases_match_case_insensitively(
    factory: Callable[[], CommandRegistry[Any]], enum: type[StrEnum]
) -> None:
    """Names and aliases resolve in any letter case."""
    del enum
    registry = factory()

    for descriptor in registry.list():
        for token in (descriptor.name, *descriptor.aliases):
            assert registry.match(token) is descriptor
            assert registry.match(token.upper()) is descriptor
            assert registry.match(token.title()) is descriptor


@pytest.mark.unit
def test_match_returns_none_for_empty_and_unknown_tokens() -> None:
    """Blank and unknown words match nothing."""
    registry = global_registry()

    assert registry.match("") is None
    assert registry.match("no-such-command") is None


@pytest.mark.unit
def test_first_registration_wins_for_shared_alias() -> None:
    """When two descriptors share a token, the earlier one is returned."""
    # Arrange - two descriptors both claiming `x`
    first = CommandDescriptor(id=_Scope.FIRST, name="first", aliases=("x",))
    second = CommandDescriptor(id=_Scope.SECOND, name="second", aliases=("X",))

    # Act - build registry
    registry = CommandRegistry([first, second])

    # Assert - earlier registration wins, later name still resolves
    assert registry.match("x") is first
    assert registry.match("second") is second


@pytest.mark.unit
def test_duplicate_id_is_rejected() -> None:
    """An id may only be registered once per scope."""
    descriptor = CommandDescriptor(id=_Scope.FIRST, name="first")

    with pytest.raises(ValueError, match="registered twice"):
        CommandRegistry([descriptor, descriptor])


@pytest.mark.unit
def test_describe_unknown_id_raises_key_error() -> None:
    """Ids from another scope are not described."""
    registry = CommandRegistry([CommandDescriptor(id=_Scope.FIRST, name="first")])

    with pytest.raises(KeyError):
        registry.describe(_Scope.SECOND)


@pytest.mark.unit
def test_list_is_restartable_and_ordered() -> None:
    """Every `list()` call starts a fresh pass in registration order."""
    registry = track_registry()

    first_pass = [descriptor.id for descriptor in registry.list()]
    second_pass = [descriptor.id for descriptor in registry.list()]

    assert first_pass == second_pass
    assert first_pass[0] == TrackCommand.PLAY


@pytest.mark.unit
def test_only_play_actions_exit_result_shells() -> None:
    """Scoped `play` closes the shell; other actions keep it open."""
    for factory, _ in _SCOPES[1:]:
        exiting = {d.name for d in factory().list() if d.exits_shell}
        assert exiting == {"play"}


@pytest.mark.unit
def test_format_help_lists_aliases_and_usage() -> None:
    """Full help shows name, aliases, usage, and body."""
    descriptor = global_registry().describe(GlobalCommand.SET_PROMPT)

    text = descriptor.format_help()

    assert text.startswith("# prompt\naliases: ps1\nusage:\n  prompt <text>\n\n")
    assert text.endswith(descriptor.help)
