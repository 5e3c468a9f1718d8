"""
Serial control protocol byte codes and constants.

Every byte value that appears on the wire is defined here, so the wire
format can be audited in one place.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Final


class RequestType(IntEnum):
    """First byte of every outgoing frame."""

    CONTROL = 0x8C
    """Change device state; the response is an acknowledgment only."""

    QUERY = 0x83
    """Read device state; the response carries a payload."""


class Function(IntEnum):
    """Third byte of every outgoing frame, selecting the device function."""

    POWER = 0x00
    VOLUME_CONTROL = 0x05
    MUTING = 0x06


class ResponseAnswer(IntEnum):
    """Second byte of a response header."""

    COMPLETED = 0x00
    LIMIT_OVER_MAXIMUM = 0x01
    LIMIT_OVER_MINIMUM = 0x02
    COMMAND_CANCELLED = 0x03
    PARSE_ERROR = 0x04


class ProtocolConstants:
    """
    Protocol constants.

    Contains the fixed frame bytes, argument values, and serial port
    defaults used throughout the protocol implementation.
    """

    # ===== Outgoing Frame =====

    CATEGORY: Final[int] = 0x00
    """Category byte shared by every supported command."""

    POWER_ARGS_LENGTH: Final[int] = 0x02
    """Argument length marker for power and muting commands."""

    POWER_ON: Final[int] = 0x01
    POWER_OFF: Final[int] = 0x00

    MUTING_TOGGLE: Final[int] = 0x00

    VOLUME_ARGS_LENGTH: Final[int] = 0x03
    """Argument length marker for volume commands."""

    VOLUME_MODE_STEP: Final[int] = 0x00
    """Volume sub-mode: step up or down by one."""

    VOLUME_MODE_DIRECT: Final[int] = 0x01
    """Volume sub-mode: set an absolute level."""

    VOLUME_STEP_UP: Final[int] = 0x00
    VOLUME_STEP_DOWN: Final[int] = 0x01

    QUERY_ARGS: Final[bytes] = b"\xFF\xFF"
    """Argument bytes sent with every query."""

    MAX_VOLUME_LEVEL: Final[int] = 0xFF

    # ===== Response Frame =====

    RESPONSE_HEADER: Final[int] = 0x70
    """First byte of every response."""

    RESPONSE_HEADER_LENGTH: Final[int] = 3
    """[header, answer, data length or checksum]."""

    POWERED_ON: Final[int] = 0x01
    """First payload byte of a power query response when the device is on."""

    # ===== Serial Port Configuration =====

    DEFAULT_BAUD_RATE: Final[int] = 9600
    """Default baud rate for serial communication."""

    DEFAULT_DATA_BITS: Final[int] = 8
    """Default data bits."""

    DEFAULT_STOP_BITS: Final[int] = 1
    """Default stop bits."""

    DEFAULT_RECEIVE_TIMEOUT: Final[float] = 0.5
    """Default read timeout in seconds."""
