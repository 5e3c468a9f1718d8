"""
Pydantic models for logical commands and decoded device state.

A LogicalCommand is what the user asked for; the encoder turns it into
wire bytes. Commands are frozen and validated on construction, so a
VolumeSet level outside 0-255 can never reach the wire.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from braviactl.exceptions import InvalidVolumeLevelError, UnknownCommandError
from braviactl.protocol.constants import ProtocolConstants

VOLUME_TOKEN_PREFIX = "volume:"


class CommandKind(Enum):
    """Closed set of logical commands, valued by their command-line token."""

    POWER_ON = "on"
    POWER_OFF = "off"
    POWER_TOGGLE = "power"
    VOLUME_UP = "volume-up"
    VOLUME_DOWN = "volume-down"
    VOLUME_SET = "volume"
    MUTE_TOGGLE = "mute"
    QUERY_POWER = "status"


class LogicalCommand(BaseModel):
    """
    A single user-level command.

    Only VOLUME_SET carries a level; every other kind must leave it unset.

    Example:
        >>> LogicalCommand.from_token("volume:30")
        LogicalCommand(kind=<CommandKind.VOLUME_SET: 'volume'>, level=30)
        >>> LogicalCommand.power_on().is_query
        False
    """

    model_config = ConfigDict(frozen=True)

    kind: CommandKind
    level: int | None = Field(
        default=None,
        ge=0,
        le=ProtocolConstants.MAX_VOLUME_LEVEL,
        description="Absolute volume level for VOLUME_SET",
    )

    @model_validator(mode="after")
    def _check_level(self) -> LogicalCommand:
        if self.kind is CommandKind.VOLUME_SET and self.level is None:
            raise ValueError("VOLUME_SET requires a level")
        if self.kind is not CommandKind.VOLUME_SET and self.level is not None:
            raise ValueError(f"{self.kind.name} does not take a level")
        return self

    @property
    def is_query(self) -> bool:
        """True for commands whose response carries a payload."""
        return self.kind is CommandKind.QUERY_POWER

    def __str__(self) -> str:
        if self.kind is CommandKind.VOLUME_SET:
            return f"{VOLUME_TOKEN_PREFIX}{self.level}"
        return self.kind.value

    @classmethod
    def from_token(cls, token: str) -> LogicalCommand:
        """
        Parse a command-line token.

        Recognized tokens: on, off, power, volume-up, volume-down,
        volume:<0-255>, mute, status.

        Raises:
            InvalidVolumeLevelError: If a volume:<level> token has a level
                that is not an integer in 0-255.
            UnknownCommandError: For any other unrecognized token.
        """
        if token.startswith(VOLUME_TOKEN_PREFIX):
            level = token[len(VOLUME_TOKEN_PREFIX):]
            if not (level.isascii() and level.isdigit()):
                raise InvalidVolumeLevelError(level)
            value = int(level)
            if value > ProtocolConstants.MAX_VOLUME_LEVEL:
                raise InvalidVolumeLevelError(level)
            return cls.volume_set(value)

        try:
            kind = CommandKind(token)
        except ValueError:
            raise UnknownCommandError(token) from None
        if kind is CommandKind.VOLUME_SET:
            # bare "volume" without a level
            raise UnknownCommandError(token)
        return cls(kind=kind)

    @classmethod
    def power_on(cls) -> LogicalCommand:
        return cls(kind=CommandKind.POWER_ON)

    @classmethod
    def power_off(cls) -> LogicalCommand:
        return cls(kind=CommandKind.POWER_OFF)

    @classmethod
    def power_toggle(cls) -> LogicalCommand:
        return cls(kind=CommandKind.POWER_TOGGLE)

    @classmethod
    def volume_up(cls) -> LogicalCommand:
        return cls(kind=CommandKind.VOLUME_UP)

    @classmethod
    def volume_down(cls) -> LogicalCommand:
        return cls(kind=CommandKind.VOLUME_DOWN)

    @classmethod
    def volume_set(cls, level: int) -> LogicalCommand:
        return cls(kind=CommandKind.VOLUME_SET, level=level)

    @classmethod
    def mute_toggle(cls) -> LogicalCommand:
        return cls(kind=CommandKind.MUTE_TOGGLE)

    @classmethod
    def query_power(cls) -> LogicalCommand:
        return cls(kind=CommandKind.QUERY_POWER)


class PowerState(BaseModel):
    """
    Decoded answer to a power query.

    Example:
        >>> PowerState.from_payload(b"\\x01").is_on
        True
        >>> PowerState.from_payload(b"").is_on
        False
    """

    model_config = ConfigDict(frozen=True)

    is_on: bool

    def __str__(self) -> str:
        return "on" if self.is_on else "off"

    @classmethod
    def from_payload(cls, payload: bytes | None) -> PowerState:
        """
        Decode a power query payload.

        The device is on only when the payload starts with 0x01; an empty
        payload or any other first byte means off.
        """
        return cls(is_on=bool(payload) and payload[0] == ProtocolConstants.POWERED_ON)
