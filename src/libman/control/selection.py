"""Interactive resolution of library playlists and playback devices."""

from __future__ import annotations

from libman.commands.types import CommandResult
from libman.control.context import ShellContext
from libman.service.models import Device, Playlist


def choose_user_playlist(
    context: ShellContext, name: str | None
) -> Playlist | CommandResult:
    """Resolve a playlist of the user's library.

    An explicit name is matched case-insensitively and exactly against the
    cached library. Without a name the library is listed with indices and the
    user picks one.

    Args:
        context: Session collaborators.
        name: Optional playlist name argument.

    Returns:
        Chosen playlist, or the no-op result to report when nothing was chosen.
    """
    playlists = context.user_playlists()
    if not playlists:
        return CommandResult.ok(
            "you don't seem to have any playlist", code="no_playlists"
        )
    if name is not None:
        wanted = name.strip()
        playlist = context.session.playlist_cache.find_by_name(wanted)
        if playlist is None:
            return CommandResult.ok(
                f"you don't seem to have a playlist named {wanted}",
                code="playlist_not_found",
                data={"name": wanted},
            )
        return playlist
    context.renderer.render_indexed(
        [(playlist.name,) for playlist in playlists],
        columns=("playlist",),
    )
    index = context.terminal.read_number(0, len(playlists))
    if index is None:
        return CommandResult.cancelled()
    return playlists[index]


def choose_device(context: ShellContext, name: str | None) -> Device | CommandResult:
    """Resolve one of the user's playback devices.

    Device names are compared exactly and case-sensitively.

    Args:
        context: Session collaborators.
        name: Optional device name argument.

    Returns:
        Chosen device, or the no-op result to report when nothing was chosen.
    """
    devices = context.service.list_devices()
    if not devices:
        return CommandResult.ok("did not detect any device", code="no_devices")
    if name is not None:
        wanted = name.strip()
        for device in devices:
            if device.name == wanted:
                return device
        return CommandResult.ok(
            f"no device named {wanted}",
            code="device_not_found",
            data={"name": wanted},
        )
    context.renderer.render_indexed(
        [(device.name, "yes" if device.is_active else "") for device in devices],
        columns=("device", "active"),
    )
    index = context.terminal.read_number(0, len(devices))
    if index is None:
        return CommandResult.cancelled()
    return devices[index]
