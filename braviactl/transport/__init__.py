"""
Transport layer for serial display control.

This package provides transport implementations for talking to the display
over its control port.

Available transports:
- SerialTransport: Blocking serial port using pyserial
- MockTransport: Mock transport for testing without hardware

Example:
    >>> from braviactl.transport import SerialTransport
    >>> with SerialTransport("/dev/ttyUSB0") as transport:
    ...     transport.write(frame)
    ...     header = transport.read(3)

Testing Example:
    >>> from braviactl.transport import MockTransport
    >>> mock = MockTransport()
    >>> mock.add_response(bytes([0x70, 0x00, 0x70]))  # control ack
"""

from braviactl.transport.abc import AbstractTransport
from braviactl.transport.mock import MockTransport, ScriptedMockTransport
from braviactl.transport.serial_port import SerialTransport

__all__ = [
    "AbstractTransport",
    "MockTransport",
    "ScriptedMockTransport",
    "SerialTransport",
]
