"""Handlers for player commands."""

from __future__ import annotations

import logging

from libman.commands.handlers._support import require_arg, usage_error
from libman.commands.parser import CommandCall, is_digits
from libman.commands.types import CommandResult, GlobalCommand
from libman.control import playback
from libman.control.context import ShellContext
from libman.service.base import ServiceError
from libman.service.models import RepeatMode

_LOGGER = logging.getLogger(__name__)

MAX_VOLUME = 100

_SHUFFLE_WORDS = {
    "on": True,
    "true": True,
    "yes": True,
    "off": False,
    "false": False,
    "no": False,
}
_REPEAT_WORDS = {
    "off": RepeatMode.OFF,
    "false": RepeatMode.OFF,
    "no": RepeatMode.OFF,
    "context": RepeatMode.CONTEXT,
    "playlist": RepeatMode.CONTEXT,
    "album": RepeatMode.CONTEXT,
    "pl": RepeatMode.CONTEXT,
    "track": RepeatMode.TRACK,
    "on": RepeatMode.TRACK,
    "true": RepeatMode.TRACK,
    "yes": RepeatMode.TRACK,
}


def _flag(value: bool) -> str:
    return "true" if value else "false"


def clamp_volume(value: int) -> int:
    """Clamp a volume to `[0, 100]`."""
    return max(0, min(MAX_VOLUME, value))


def apply_volume_delta(context: ShellContext, delta: int) -> CommandResult:
    """Change the active device's volume by a signed amount.

    Args:
        context: Session collaborators.
        delta: Signed percentage change.

    Returns:
        Result naming the device and new volume, or `no_active_device`.
    """
    active = next(
        (device for device in context.service.list_devices() if device.is_active),
        None,
    )
    if active is None:
        return CommandResult.ok("no active device detected", code="no_active_device")
    target = clamp_volume((active.volume_percent or 0) + delta)
    context.service.set_volume(target, device_id=active.id)
    return CommandResult.ok(
        f"{active.name}: set to {target}%",
        code="volume_set",
        data={"device": active.name, "volume": target},
    )


class VolumeCommand:
    """`volume` handler."""

    def execute(self, call: CommandCall, context: ShellContext) -> CommandResult:
        """Set an absolute volume, clamping values above 100.

        Args:
            call: Tokenized command line.
            context: Session collaborators.

        Returns:
            Success result, usage, or `invalid_volume` error.
        """
        value = require_arg(call.arg)
        if value is None:
            return usage_error(GlobalCommand.SET_VOLUME)
        if not is_digits(value):
            return CommandResult.error(
                f"{value}: the value must be an integer between 0 and 100",
                code="invalid_volume",
                data={"value": value},
            )
        target = clamp_volume(int(value))
        context.service.set_volume(target, device_id=context.device_id)
        return CommandResult.ok(
            f"volume set to {target}%", code="volume_set", data={"volume": target}
        )


class ShuffleCommand:
    """`shuffle` handler."""

    def execute(self, call: CommandCall, context: ShellContext) -> CommandResult:
        """Toggle shuffle, or set it when it differs from the reported state.

        When the player state cannot be read, an explicit state is applied
        unconditionally and a bare toggle only informs the user.

        Args:
            call: Tokenized command line.
            context: Session collaborators.

        Returns:
            Result reporting the resulting shuffle state.
        """
        word = require_arg(call.arg)
        desired: bool | None = None
        if word is not None:
            if word.lower() not in _SHUFFLE_WORDS:
                return usage_error(GlobalCommand.SHUFFLE)
            desired = _SHUFFLE_WORDS[word.lower()]
        try:
            status = context.service.current_playback()
        except ServiceError as exc:
            _LOGGER.info("shuffle state unavailable: %s", exc)
            status = None
        if status is not None:
            if desired is not None and desired == status.shuffle:
                return CommandResult.ok(
                    f"shuffle = {_flag(status.shuffle)}", code="shuffle_unchanged"
                )
            desired = not status.shuffle
        elif desired is None:
            return CommandResult.ok(
                "could not determine shuffle state, "
                "try running `shuffle` with yes or no",
                code="shuffle_unknown",
            )
        context.service.set_shuffle(desired, device_id=context.device_id)
        return CommandResult.ok(
            f"shuffle = {_flag(desired)}", code="shuffle_set", data={"shuffle": desired}
        )


class RepeatCommand:
    """`repeat` handler."""

    def execute(self, call: CommandCall, context: ShellContext) -> CommandResult:
        """Set the repeat mode from an explicit target or synonym.

        Args:
            call: Tokenized command line.
            context: Session collaborators.

        Returns:
            Result reporting the mode, or usage.
        """
        word = require_arg(call.arg)
        mode = _REPEAT_WORDS.get(word.lower()) if word is not None else None
        if mode is None:
            return usage_error(GlobalCommand.REPEAT)
        context.service.set_repeat(mode, device_id=context.device_id)
        return CommandResult.ok(
            f"repeat = {mode.value}", code="repeat_set", data={"repeat": mode.value}
        )


class SkipCommand:
    """`next` and `prev` handler."""

    def __init__(self, *, forward: bool) -> None:
        """Choose the skip direction.

        Args:
            forward: True for next, False for previous.
        """
        self._forward = forward

    def execute(self, call: CommandCall, context: ShellContext) -> CommandResult:
        """Skip one track and mark the session as playing."""
        del call
        return playback.skip(context, forward=self._forward)
