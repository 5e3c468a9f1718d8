"""
Command encoder.

Maps a LogicalCommand onto its outgoing wire bytes:

    [request type][category][function][function arguments...]

The checksum is not part of the encoded command; append it with
append_checksum() right before transmission.

PowerToggle has no wire form. It is resolved by the client into a power
query followed by PowerOn or PowerOff.
"""

from __future__ import annotations

from typing import Final

from braviactl.models.commands import CommandKind, LogicalCommand
from braviactl.protocol.constants import Function, ProtocolConstants, RequestType

_C = ProtocolConstants

# Fixed (request type, function, arguments) per command kind
_FIXED_COMMANDS: Final[dict[CommandKind, tuple[RequestType, Function, bytes]]] = {
    CommandKind.POWER_ON: (
        RequestType.CONTROL,
        Function.POWER,
        bytes([_C.POWER_ARGS_LENGTH, _C.POWER_ON]),
    ),
    CommandKind.POWER_OFF: (
        RequestType.CONTROL,
        Function.POWER,
        bytes([_C.POWER_ARGS_LENGTH, _C.POWER_OFF]),
    ),
    CommandKind.VOLUME_UP: (
        RequestType.CONTROL,
        Function.VOLUME_CONTROL,
        bytes([_C.VOLUME_ARGS_LENGTH, _C.VOLUME_MODE_STEP, _C.VOLUME_STEP_UP]),
    ),
    CommandKind.VOLUME_DOWN: (
        RequestType.CONTROL,
        Function.VOLUME_CONTROL,
        bytes([_C.VOLUME_ARGS_LENGTH, _C.VOLUME_MODE_STEP, _C.VOLUME_STEP_DOWN]),
    ),
    CommandKind.MUTE_TOGGLE: (
        RequestType.CONTROL,
        Function.MUTING,
        bytes([_C.POWER_ARGS_LENGTH, _C.MUTING_TOGGLE]),
    ),
    CommandKind.QUERY_POWER: (
        RequestType.QUERY,
        Function.POWER,
        _C.QUERY_ARGS,
    ),
}


def request_type_of(command: LogicalCommand) -> RequestType:
    """
    Get the request type a command is sent with.

    Raises:
        ValueError: For PowerToggle, which is never sent as-is.
    """
    if command.kind is CommandKind.POWER_TOGGLE:
        raise ValueError("PowerToggle has no wire encoding")
    return RequestType.QUERY if command.is_query else RequestType.CONTROL


def encode_volume_level(level: int) -> bytes:
    """
    Encode the arguments for setting an absolute volume level.

    The volume function takes [length, mode, value]; mode 0x01 selects
    direct level setting and the level is sent as a single raw byte. The
    device rejects levels above its own maximum with a "limit over" answer.

    Raises:
        ValueError: If level is not in range 0-255.
    """
    if not 0 <= level <= _C.MAX_VOLUME_LEVEL:
        raise ValueError(f"Volume level must be 0-255, got {level}")
    return bytes([_C.VOLUME_ARGS_LENGTH, _C.VOLUME_MODE_DIRECT, level])


def encode(command: LogicalCommand) -> bytes:
    """
    Encode a logical command into wire bytes, without checksum.

    Args:
        command: Command to encode.

    Returns:
        Encoded command bytes.

    Raises:
        ValueError: For PowerToggle, which is never sent as-is.

    Example:
        >>> encode(LogicalCommand.power_on()).hex(" ")
        '8c 00 00 02 01'
    """
    if command.kind is CommandKind.POWER_TOGGLE:
        raise ValueError("PowerToggle has no wire encoding")

    if command.kind is CommandKind.VOLUME_SET:
        return (
            bytes([RequestType.CONTROL, _C.CATEGORY, Function.VOLUME_CONTROL])
            + encode_volume_level(command.level)
        )

    request_type, function, args = _FIXED_COMMANDS[command.kind]
    return bytes([request_type, _C.CATEGORY, function]) + args
