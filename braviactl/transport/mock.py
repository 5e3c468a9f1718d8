"""
Mock transport for testing.

This module provides a mock transport implementation that allows testing
the client without actual hardware. Responses can be pre-configured or
dynamically generated using callback functions.

Example:
    >>> from braviactl.transport import MockTransport
    >>> from braviactl import DeviceClient, LogicalCommand
    >>>
    >>> mock = MockTransport()
    >>> mock.add_response(bytes([0x70, 0x00, 0x70]))  # control ack
    >>>
    >>> with mock:
    ...     DeviceClient(mock).execute(LogicalCommand.power_on())
"""

from __future__ import annotations

from collections import deque
from typing import Callable

from braviactl.exceptions import TimeoutError, TransportError
from braviactl.transport.abc import AbstractTransport


class MockTransport(AbstractTransport):
    """
    Mock transport for testing without hardware.

    This transport simulates serial communication by providing pre-configured
    responses. It records all written data and every read request for
    verification in tests.

    Attributes:
        written_data: List of all bytes written to the transport.
        read_sizes: Size of every read request, in order.

    Example:
        >>> mock = MockTransport()
        >>> mock.add_response(b"\\x70\\x00\\x70")
        >>>
        >>> with mock:
        ...     mock.write(b"test")
        ...     assert mock.read(3) == b"\\x70\\x00\\x70"
        ...     assert mock.written_data == [b"test"]
    """

    def __init__(
        self,
        port_name: str = "mock://test",
        default_timeout: float = 0.5,
    ) -> None:
        """
        Initialize the mock transport.

        Args:
            port_name: Identifier for the mock transport.
            default_timeout: Reported in TimeoutError when data runs out.
        """
        self._port_name = port_name
        self._default_timeout = default_timeout
        self._is_open = False
        self._responses: deque[bytes] = deque()
        self._written_data: list[bytes] = []
        self._read_sizes: list[int] = []
        self._read_buffer = bytearray()
        self._response_callback: Callable[[bytes], bytes | None] | None = None
        self._write_error: Exception | None = None

    @property
    def is_open(self) -> bool:
        """Check if the mock transport is open."""
        return self._is_open

    @property
    def port_name(self) -> str:
        """Get the mock port name."""
        return self._port_name

    @property
    def written_data(self) -> list[bytes]:
        """Get all data written to the transport."""
        return self._written_data.copy()

    @property
    def last_written(self) -> bytes | None:
        """Get the most recently written data."""
        return self._written_data[-1] if self._written_data else None

    @property
    def read_sizes(self) -> list[int]:
        """Get the size of every read request made so far."""
        return self._read_sizes.copy()

    @property
    def pending(self) -> int:
        """Number of response bytes not yet consumed."""
        return len(self._read_buffer) + sum(len(r) for r in self._responses)

    def add_response(self, response: bytes) -> None:
        """
        Add a response to the queue.

        Responses are returned in FIFO order on read operations.

        Args:
            response: Bytes to return on next read.
        """
        self._responses.append(response)

    def add_responses(self, *responses: bytes) -> None:
        """
        Add multiple responses to the queue.

        Args:
            *responses: Multiple byte responses to add.
        """
        for response in responses:
            self._responses.append(response)

    def set_response_callback(
        self,
        callback: Callable[[bytes], bytes | None] | None,
    ) -> None:
        """
        Set a callback to dynamically generate responses.

        The callback receives the written data and should return the response
        bytes. If it returns None, the next queued response is used instead.

        Args:
            callback: Function that takes written bytes and returns response.
        """
        self._response_callback = callback

    def fail_next_write(self, error: Exception) -> None:
        """Make the next write raise the given error instead of recording data."""
        self._write_error = error

    def clear(self) -> None:
        """Clear all written data, read history and pending responses."""
        self._written_data.clear()
        self._read_sizes.clear()
        self._responses.clear()
        self._read_buffer.clear()

    def open(self) -> None:
        """Open the mock transport."""
        if self._is_open:
            raise TransportError("Mock transport already open")
        self._is_open = True

    def close(self) -> None:
        """Close the mock transport."""
        self._is_open = False

    def write(self, data: bytes) -> None:
        """
        Write data to the mock transport.

        Records the written data and optionally triggers response callback.

        Raises:
            TransportError: If transport is not open.
        """
        if not self._is_open:
            raise TransportError("Mock transport not open")

        if self._write_error is not None:
            error, self._write_error = self._write_error, None
            raise error

        self._written_data.append(bytes(data))

        if self._response_callback:
            response = self._response_callback(bytes(data))
            if response is not None:
                self._read_buffer.extend(response)

    def read(self, size: int) -> bytes:
        """
        Read exact number of bytes.

        Raises:
            TimeoutError: If not enough data available.
            TransportError: If transport is not open.
        """
        if not self._is_open:
            raise TransportError("Mock transport not open")

        self._read_sizes.append(size)

        # Load responses into buffer until we have enough
        while len(self._read_buffer) < size and self._responses:
            self._read_buffer.extend(self._responses.popleft())

        if len(self._read_buffer) < size:
            raise TimeoutError(
                f"Not enough mock data: need {size}, have {len(self._read_buffer)}",
                timeout_seconds=self._default_timeout,
            )

        result = bytes(self._read_buffer[:size])
        del self._read_buffer[:size]
        return result

    def discard_buffers(self) -> None:
        """Discard pending data in buffers."""
        self._read_buffer.clear()

    def assert_written(self, expected: bytes, index: int = -1) -> None:
        """
        Assert that specific data was written.

        Args:
            expected: Expected bytes.
            index: Index in written_data list (-1 for last).

        Raises:
            AssertionError: If data doesn't match.
        """
        if not self._written_data:
            raise AssertionError("No data written to mock transport")

        actual = self._written_data[index]
        if actual != expected:
            raise AssertionError(
                f"Written data mismatch: expected {expected.hex(' ')}, got {actual.hex(' ')}"
            )

    def assert_write_count(self, expected: int) -> None:
        """
        Assert number of write operations.

        Raises:
            AssertionError: If count doesn't match.
        """
        actual = len(self._written_data)
        if actual != expected:
            raise AssertionError(f"Write count mismatch: expected {expected}, got {actual}")


class ScriptedMockTransport(MockTransport):
    """
    Mock transport with scripted request/response pairs.

    Each write consumes the next step of the script: the written bytes are
    checked against the expected request (if given) and the scripted
    response becomes readable.

    Example:
        >>> mock = ScriptedMockTransport()
        >>> mock.expect(request=b"\\x83\\x00\\x00\\xff\\xff\\x81", response=b"\\x70\\x00\\x02\\x01\\x73")
        >>> mock.expect(request=b"\\x8c\\x00\\x00\\x02\\x00\\x8e", response=b"\\x70\\x00\\x70")
    """

    def __init__(self, port_name: str = "mock://scripted") -> None:
        super().__init__(port_name)
        self._script: list[tuple[bytes | None, bytes]] = []
        self._script_index = 0

    @property
    def remaining_steps(self) -> int:
        """Number of scripted steps not yet consumed."""
        return len(self._script) - self._script_index

    def expect(
        self,
        response: bytes,
        request: bytes | None = None,
    ) -> None:
        """
        Add an expected request/response pair.

        Args:
            response: Response to return.
            request: Expected request (None to match any).
        """
        self._script.append((request, response))

    def write(self, data: bytes) -> None:
        """Write with script validation."""
        if not self._is_open:
            raise TransportError("Mock transport not open")

        self._written_data.append(bytes(data))

        if self._script_index < len(self._script):
            expected_request, response = self._script[self._script_index]

            if expected_request is not None and data != expected_request:
                raise AssertionError(
                    f"Script mismatch at step {self._script_index}: "
                    f"expected {expected_request.hex(' ')}, got {bytes(data).hex(' ')}"
                )

            self._read_buffer.extend(response)
            self._script_index += 1

    def reset_script(self) -> None:
        """Reset script to beginning."""
        self._script_index = 0
        self._read_buffer.clear()

    def clear_script(self) -> None:
        """Clear all scripted expectations."""
        self._script.clear()
        self._script_index = 0
