"""
Display control client.

This module provides the transaction executor: it sends one encoded command,
reads and validates the response, and hands back any payload.

Each transaction runs through a small state machine:
    IDLE -> AWAITING_HEADER -> AWAITING_PAYLOAD (query only) -> DONE
                            \\-> FAILED on the first error

Nothing is retried; any failure ends the transaction with a specific
ProtocolError.

Example:
    >>> from braviactl import DeviceClient, LogicalCommand
    >>> from braviactl.transport import SerialTransport
    >>>
    >>> with DeviceClient(SerialTransport("/dev/ttyUSB0")) as client:
    ...     client.execute(LogicalCommand.volume_up())
    ...     print(client.power_status())
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import TYPE_CHECKING, Callable

from braviactl.exceptions import (
    ProtocolError,
    ReadResponseDataError,
    ReadResponseError,
    TimeoutError,
    TransportError,
    WriteCommandError,
)
from braviactl.models.commands import CommandKind, LogicalCommand, PowerState
from braviactl.protocol.checksums import append_checksum
from braviactl.protocol.constants import ProtocolConstants
from braviactl.protocol.encoding import encode, request_type_of
from braviactl.protocol.frame_reader import (
    ParsedResponse,
    check_response_header,
    parse_response,
    trailing_length,
)

if TYPE_CHECKING:
    from braviactl.transport.abc import AbstractTransport

# Module logger
logger = logging.getLogger(__name__)


class TransactionState(Enum):
    """States of a single request/response exchange."""

    IDLE = auto()
    """No transaction has run yet."""

    AWAITING_HEADER = auto()
    """Command sent, waiting for the 3-byte response header."""

    AWAITING_PAYLOAD = auto()
    """Header accepted, waiting for the query payload and checksum."""

    DONE = auto()
    """Response validated."""

    FAILED = auto()
    """Transaction ended with an error."""


class DeviceClient:
    """
    Client for controlling a display over its serial control port.

    The client owns the transport for the duration of a transaction; only
    one transaction is ever in flight.

    Attributes:
        state: State of the most recent transaction.
        transport: The underlying transport layer.
        last_response: The last validated response frame, if any.

    Example:
        >>> client = DeviceClient(transport, status_callback=print)
        >>> client.execute(LogicalCommand.power_toggle())
        is off - turning on
    """

    def __init__(
        self,
        transport: AbstractTransport,
        status_callback: Callable[[str], None] | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            transport: Transport layer for communication.
            status_callback: Receives human-readable status lines such as
                "is on - turning off". Lines are always logged as well.
        """
        self._transport = transport
        self._status_callback = status_callback
        self._state = TransactionState.IDLE
        self._last_response: ParsedResponse | None = None

    @property
    def state(self) -> TransactionState:
        """Get the state of the most recent transaction."""
        return self._state

    @property
    def transport(self) -> AbstractTransport:
        """Get the underlying transport."""
        return self._transport

    @property
    def last_response(self) -> ParsedResponse | None:
        """Get the last validated response frame."""
        return self._last_response

    def execute(self, command: LogicalCommand) -> bytes | None:
        """
        Execute a logical command.

        PowerToggle is resolved first: the power state is queried and
        PowerOff or PowerOn is sent depending on the answer.

        Args:
            command: Command to execute.

        Returns:
            The response payload for query commands, None for control
            commands.

        Raises:
            TransportError: If the transport cannot be opened.
            ProtocolError: If any step of the exchange fails.
        """
        if command.kind is CommandKind.POWER_TOGGLE:
            command = self._resolve_power_toggle()
        return self._transact(command)

    def power_status(self) -> PowerState:
        """
        Query and decode the current power state.

        Raises:
            ProtocolError: If the query fails.
        """
        return PowerState.from_payload(self._transact(LogicalCommand.query_power()))

    def run(self, command: LogicalCommand) -> PowerState | None:
        """
        Execute a command and report its outcome.

        For QueryPower the decoded state is reported as "Power: on" or
        "Power: off" and returned; other commands return None.

        Raises:
            ProtocolError: If any step of the exchange fails.
        """
        if command.kind is CommandKind.QUERY_POWER:
            power = self.power_status()
            self._report(f"Power: {power}")
            return power

        self.execute(command)
        return None

    def _resolve_power_toggle(self) -> LogicalCommand:
        """Pick PowerOn or PowerOff from the current power state."""
        if self.power_status().is_on:
            self._report("is on - turning off")
            return LogicalCommand.power_off()
        self._report("is off - turning on")
        return LogicalCommand.power_on()

    def _transact(self, command: LogicalCommand) -> bytes | None:
        """
        Run one request/response exchange.

        Returns:
            Response payload for queries, None for control commands.
        """
        if not self._transport.is_open:
            logger.debug("Opening transport %s", self._transport.port_name)
            self._transport.open()

        request_type = request_type_of(command)
        frame = append_checksum(encode(command))

        try:
            logger.debug("Sending %s: %s", command, frame.hex(" "))
            try:
                self._transport.write(frame)
            except (TransportError, TimeoutError) as e:
                raise WriteCommandError(str(e)) from e

            self._state = TransactionState.AWAITING_HEADER
            header = self._read(ProtocolConstants.RESPONSE_HEADER_LENGTH, ReadResponseError)
            check_response_header(header)

            data = b""
            remaining = trailing_length(header, request_type)
            if remaining:
                self._state = TransactionState.AWAITING_PAYLOAD
                data = self._read(remaining, ReadResponseDataError)

            response = parse_response(header, data, request_type)

        except ProtocolError as e:
            self._state = TransactionState.FAILED
            logger.error("%s failed: %s", command, e)
            raise

        self._state = TransactionState.DONE
        self._last_response = response
        logger.debug("Received %s", response.raw.hex(" "))
        logger.info("%s completed", command)
        return response.payload

    def _read(self, size: int, error: type[ProtocolError]) -> bytes:
        """Read exactly size bytes, wrapping transport failures in error."""
        try:
            return self._transport.read(size)
        except (TransportError, TimeoutError) as e:
            raise error(str(e)) from e

    def _report(self, line: str) -> None:
        logger.info("%s", line)
        if self._status_callback is not None:
            self._status_callback(line)

    def __enter__(self) -> DeviceClient:
        """Context manager entry - opens the transport."""
        if not self._transport.is_open:
            self._transport.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit - closes the transport."""
        if self._transport.is_open:
            self._transport.close()

    def __repr__(self) -> str:
        return f"DeviceClient(state={self._state.name}, port={self._transport.port_name})"
