"""
Abstract transport interface for serial display control.

This module defines the abstract base class for all transport implementations.
Transports handle the low-level communication with the display over a
serial port or an in-memory stand-in.

The transport layer is responsible for:
- Opening/closing the physical connection
- Reading and writing raw bytes
- Timeout handling
- Buffer management

Implementations:
- SerialTransport: pyserial based serial port
- MockTransport: For testing without hardware
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from types import TracebackType


class AbstractTransport(ABC):
    """
    Abstract base class for display control transports.

    Transports provide blocking read/write operations bounded by a read
    timeout. All transport implementations must inherit from this class and
    implement all abstract methods.

    Transports support the context manager protocol for safe resource
    management:

        with SerialTransport("/dev/ttyUSB0") as transport:
            transport.write(frame)
            header = transport.read(3)

    Attributes:
        is_open: Whether the transport connection is currently open.
        port_name: Identifier for the transport (e.g., serial port name).
    """

    @property
    @abstractmethod
    def is_open(self) -> bool:
        """
        Check if the transport connection is currently open.

        Returns:
            True if connected and ready for I/O, False otherwise.
        """
        ...

    @property
    @abstractmethod
    def port_name(self) -> str:
        """
        Get the transport identifier.

        Returns:
            Port name or identifier string (e.g., "/dev/ttyUSB0", "COM3").
        """
        ...

    @abstractmethod
    def open(self) -> None:
        """
        Open the transport connection.

        Raises:
            TransportError: If the connection cannot be established.
        """
        ...

    @abstractmethod
    def close(self) -> None:
        """
        Close the transport connection.

        Releases the physical connection and any associated resources.
        Safe to call multiple times (idempotent).
        """
        ...

    @abstractmethod
    def write(self, data: bytes) -> None:
        """
        Write data to the transport.

        The data should be a complete frame including its checksum, so it
        goes out in a single call.

        Args:
            data: Bytes to send.

        Raises:
            TransportError: If the transport is not open or write fails.
        """
        ...

    @abstractmethod
    def read(self, size: int) -> bytes:
        """
        Read an exact number of bytes from the transport.

        Blocks until exactly `size` bytes have been received or the read
        timeout expires.

        Args:
            size: Number of bytes to read.

        Returns:
            Exactly `size` bytes.

        Raises:
            TimeoutError: If the timeout expires before all bytes are received.
            TransportError: If the transport is not open or read fails.
        """
        ...

    @abstractmethod
    def discard_buffers(self) -> None:
        """
        Discard any pending data in input and output buffers.

        Useful to drop stale bytes before starting a new exchange.
        """
        ...

    def __enter__(self) -> AbstractTransport:
        """Context manager entry - opens the transport."""
        self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Context manager exit - closes the transport."""
        self.close()
