"""
Exception hierarchy for braviactl.

All exceptions inherit from BraviaError. Two families matter to callers:

1. Input errors (InvalidCommandError) are raised while turning a user token
   into a LogicalCommand, before any I/O takes place.
2. Protocol errors (ProtocolError) are raised during a transaction and are
   always fatal to it. Nothing is retried.

Transport-level failures (TransportError, TimeoutError) are raised by the
transports themselves; the client wraps them into the matching ProtocolError.
"""

from __future__ import annotations

from typing import Final


class BraviaError(Exception):
    """
    Base exception for all braviactl errors.

    Catching BraviaError covers every failure the library raises on purpose.
    """

    pass


class InvalidCommandError(BraviaError, ValueError):
    """User input could not be mapped onto a command."""

    pass


class UnknownCommandError(InvalidCommandError):
    """The command token is not one of the recognized tokens."""

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"Unknown command '{token}'")


class InvalidVolumeLevelError(InvalidCommandError):
    """A `volume:<level>` token carried a level outside 0-255."""

    def __init__(self, level: str) -> None:
        self.level = level
        super().__init__(f"Invalid volume level '{level}'; must be an integer [0-255]")


class ProtocolError(BraviaError):
    """
    Protocol-level error.

    Raised when a request/response exchange fails, such as:
    - The command could not be written
    - The response could not be read
    - The response header, answer or checksum is wrong
    """

    pass


class WriteCommandError(ProtocolError):
    """The command frame could not be sent across the serial port."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Failed to send command across serial port: {reason}")


class ReadResponseError(ProtocolError):
    """The 3-byte response header could not be read."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Failed to read response from serial port: {reason}")


class ReadResponseDataError(ProtocolError):
    """The bytes following a query response header could not be read."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Failed to read response data from serial port: {reason}")


class UnexpectedResponseHeaderError(ProtocolError):
    """The first response byte was not the response header marker."""

    def __init__(self, header: int) -> None:
        self.header = header
        super().__init__(f"Unexpected response header: 0x{header:02X}")


class UnexpectedResponseAnswerError(ProtocolError):
    """
    The device answered with something other than "completed".

    The answer attribute keeps the raw answer code for debugging.
    """

    def __init__(self, answer: int) -> None:
        self.answer = answer
        self.message = ANSWER_MESSAGES.get(answer, "Unknown answer")
        super().__init__(f"Unexpected response answer: 0x{answer:02X} ({self.message})")


class EmptyResponseError(ProtocolError):
    """A query response announced no data, not even a checksum byte."""

    def __init__(self) -> None:
        super().__init__("Empty response")


class ChecksumError(ProtocolError):
    """
    Checksum validation failure.

    Raised when a received frame's checksum doesn't match the calculated value.
    This typically indicates data corruption during transmission.
    """

    def __init__(
        self,
        message: str = "Response checksum was not correct",
        *,
        expected: int | None = None,
        received: int | None = None,
    ) -> None:
        super().__init__(message)
        self.expected = expected
        self.received = received

    def __str__(self) -> str:
        base = super().__str__()
        if self.expected is not None and self.received is not None:
            return f"{base} (expected 0x{self.expected:02X}, got 0x{self.received:02X})"
        return base


class TimeoutError(BraviaError):  # noqa: A001 - intentionally shadows builtin
    """
    Communication timeout.

    Raised by transports when fewer bytes than requested arrive before the
    read timeout expires.
    """

    def __init__(
        self,
        message: str = "Communication timeout",
        *,
        timeout_seconds: float | None = None,
    ) -> None:
        super().__init__(message)
        self.timeout_seconds = timeout_seconds

    def __str__(self) -> str:
        base = super().__str__()
        if self.timeout_seconds is not None:
            return f"{base} (after {self.timeout_seconds:.1f}s)"
        return base


class TransportError(BraviaError):
    """
    Transport-level error.

    Raised for low-level transport issues:
    - Serial port cannot be opened
    - I/O on a closed port
    - Hardware communication failures
    """

    pass


# Answer codes reported in the second byte of a response header
ANSWER_MESSAGES: Final[dict[int, str]] = {
    0x00: "Completed",
    0x01: "Limit over (above maximum)",
    0x02: "Limit over (below minimum)",
    0x03: "Command cancelled",
    0x04: "Parse error",
}
