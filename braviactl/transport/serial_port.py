"""
Serial transport using pyserial.

This module provides the transport implementation for talking to a display
over its RS-232 control port.

Serial Configuration:
- Baud rate: 9600 (default)
- Data bits: 8
- Parity: None
- Stop bits: 1
- Flow control: None
- Read timeout: 0.5 s (default)

Example:
    >>> transport = SerialTransport("/dev/ttyUSB0")
    >>> with transport:
    ...     transport.write(frame)
    ...     header = transport.read(3)
"""

from __future__ import annotations

import logging

import serial

from braviactl.exceptions import TimeoutError, TransportError
from braviactl.protocol.constants import ProtocolConstants
from braviactl.transport.abc import AbstractTransport

logger = logging.getLogger(__name__)


class SerialTransport(AbstractTransport):
    """
    Blocking serial transport using pyserial.

    Reads are bounded by the configured timeout; a short read is reported
    as TimeoutError.

    Attributes:
        port_name: Serial port path (e.g., "/dev/ttyUSB0", "COM3").
        is_open: Whether the port is currently open.

    Example:
        >>> transport = SerialTransport("/dev/ttyUSB0", baudrate=9600)
        >>> transport.open()
        >>> try:
        ...     transport.write(b"\\x83\\x00\\x00\\xff\\xff\\x81")
        ...     header = transport.read(3)
        ... finally:
        ...     transport.close()
    """

    def __init__(
        self,
        port: str,
        baudrate: int = ProtocolConstants.DEFAULT_BAUD_RATE,
        default_timeout: float = ProtocolConstants.DEFAULT_RECEIVE_TIMEOUT,
    ) -> None:
        """
        Initialize the serial transport.

        Args:
            port: Serial port path (e.g., "/dev/ttyUSB0", "COM3").
            baudrate: Baud rate (default: 9600).
            default_timeout: Read timeout in seconds (default: 0.5).
        """
        self._port = port
        self._baudrate = baudrate
        self._default_timeout = default_timeout
        self._serial: serial.Serial | None = None

    @property
    def is_open(self) -> bool:
        """Check if the serial port is currently open."""
        return self._serial is not None and self._serial.is_open

    @property
    def port_name(self) -> str:
        """Get the serial port path."""
        return self._port

    @property
    def baudrate(self) -> int:
        """Get the configured baud rate."""
        return self._baudrate

    @property
    def timeout(self) -> float:
        """Get the configured read timeout in seconds."""
        return self._default_timeout

    def open(self) -> None:
        """
        Open the serial port connection.

        Raises:
            TransportError: If the port cannot be opened.
        """
        if self.is_open:
            return

        try:
            self._serial = serial.Serial(
                port=self._port,
                baudrate=self._baudrate,
                bytesize=serial.EIGHTBITS,
                parity=serial.PARITY_NONE,
                stopbits=serial.STOPBITS_ONE,
                timeout=self._default_timeout,
                write_timeout=self._default_timeout,
                xonxoff=False,
                rtscts=False,
                dsrdtr=False,
            )
        except serial.SerialException as e:
            raise TransportError(f"Failed to open serial port {self._port}: {e}") from e
        except (OSError, ValueError) as e:
            raise TransportError(f"Error opening {self._port}: {e}") from e

        logger.debug("Opened %s at %d baud", self._port, self._baudrate)

    def close(self) -> None:
        """
        Close the serial port connection.

        Safe to call multiple times.
        """
        if self._serial is not None:
            try:
                self._serial.close()
            except (serial.SerialException, OSError) as e:
                logger.debug("Error closing %s: %s", self._port, e)
            logger.debug("Closed %s", self._port)

        self._serial = None

    def write(self, data: bytes) -> None:
        """
        Write data to the serial port and wait until it is sent.

        Args:
            data: Bytes to transmit.

        Raises:
            TimeoutError: If the write does not complete within the timeout.
            TransportError: If the port is not open or write fails.
        """
        if not self.is_open:
            raise TransportError("Serial port is not open")

        try:
            self._serial.write(data)
            self._serial.flush()
        except serial.SerialTimeoutException:
            raise TimeoutError(
                f"Timeout writing {len(data)} bytes",
                timeout_seconds=self._default_timeout,
            ) from None
        except (serial.SerialException, OSError) as e:
            raise TransportError(f"Write failed: {e}") from e

    def read(self, size: int) -> bytes:
        """
        Read an exact number of bytes from the serial port.

        Args:
            size: Number of bytes to read.

        Returns:
            Exactly `size` bytes.

        Raises:
            TimeoutError: If the timeout expires before all bytes are received.
            TransportError: If the port is not open or read fails.
        """
        if not self.is_open:
            raise TransportError("Serial port is not open")

        if size <= 0:
            return b""

        try:
            data = self._serial.read(size)
        except (serial.SerialException, OSError) as e:
            raise TransportError(f"Read failed: {e}") from e

        if len(data) < size:
            raise TimeoutError(
                f"Timeout waiting for {size} bytes, got {len(data)}",
                timeout_seconds=self._default_timeout,
            )
        return data

    def discard_buffers(self) -> None:
        """
        Discard any pending data in input and output buffers.

        Ignored when the port is closed.
        """
        if self._serial is not None:
            try:
                self._serial.reset_input_buffer()
                self._serial.reset_output_buffer()
            except (serial.SerialException, OSError) as e:
                logger.debug("Could not discard buffers on %s: %s", self._port, e)

    def __repr__(self) -> str:
        status = "open" if self.is_open else "closed"
        return f"SerialTransport({self._port!r}, baudrate={self._baudrate}, {status})"
