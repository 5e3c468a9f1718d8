"""
braviactl - Python library for controlling displays over RS-232.

This library sends power, volume and mute commands to a display's serial
control port and validates the checksummed responses. Each call performs a
single blocking request/response exchange.

Example:
    >>> from braviactl import DeviceClient, LogicalCommand
    >>> from braviactl.transport import SerialTransport
    >>>
    >>> with DeviceClient(SerialTransport("/dev/ttyUSB0")) as client:
    ...     client.execute(LogicalCommand.mute_toggle())
    ...     print(client.power_status())
"""

from braviactl.client import DeviceClient, TransactionState
from braviactl.exceptions import (
    BraviaError,
    ChecksumError,
    EmptyResponseError,
    InvalidCommandError,
    InvalidVolumeLevelError,
    ProtocolError,
    ReadResponseDataError,
    ReadResponseError,
    TimeoutError,
    TransportError,
    UnexpectedResponseAnswerError,
    UnexpectedResponseHeaderError,
    UnknownCommandError,
    WriteCommandError,
)
from braviactl.models.commands import CommandKind, LogicalCommand, PowerState
from braviactl.transport import AbstractTransport, SerialTransport

__version__ = "0.1.0"
__all__ = [
    # Client
    "DeviceClient",
    "TransactionState",
    # Models
    "CommandKind",
    "LogicalCommand",
    "PowerState",
    # Exceptions
    "BraviaError",
    "InvalidCommandError",
    "UnknownCommandError",
    "InvalidVolumeLevelError",
    "ProtocolError",
    "WriteCommandError",
    "ReadResponseError",
    "ReadResponseDataError",
    "UnexpectedResponseHeaderError",
    "UnexpectedResponseAnswerError",
    "EmptyResponseError",
    "ChecksumError",
    "TimeoutError",
    "TransportError",
    # Transport
    "AbstractTransport",
    "SerialTransport",
    # Version
    "__version__",
]
