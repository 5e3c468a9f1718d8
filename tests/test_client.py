"""Tests for DeviceClient."""

import pytest

from braviactl import DeviceClient, TransactionState
from braviactl.exceptions import (
    ChecksumError,
    EmptyResponseError,
    ReadResponseDataError,
    ReadResponseError,
    TransportError,
    UnexpectedResponseAnswerError,
    UnexpectedResponseHeaderError,
    WriteCommandError,
)
from braviactl.models.commands import LogicalCommand, PowerState
from braviactl.transport.mock import MockTransport, ScriptedMockTransport

CONTROL_ACK = bytes([0x70, 0x00, 0x70])
POWERED_ON = bytes([0x70, 0x00, 0x02, 0x01, 0x73])
POWERED_OFF = bytes([0x70, 0x00, 0x02, 0x00, 0x72])

QUERY_POWER_FRAME = bytes.fromhex("83 00 00 ff ff 81")
POWER_ON_FRAME = bytes.fromhex("8c 00 00 02 01 8f")
POWER_OFF_FRAME = bytes.fromhex("8c 00 00 02 00 8e")


class TestDeviceClient:
    """Tests for DeviceClient class."""

    @pytest.fixture
    def mock_transport(self):
        """Create an open MockTransport instance."""
        transport = MockTransport()
        transport.open()
        return transport

    @pytest.fixture
    def status_lines(self):
        """Collect status lines reported by the client."""
        return []

    @pytest.fixture
    def client(self, mock_transport, status_lines):
        """Create a DeviceClient with mock transport."""
        return DeviceClient(mock_transport, status_callback=status_lines.append)

    def test_initial_state(self, client):
        """Test client starts idle."""
        assert client.state == TransactionState.IDLE
        assert client.last_response is None

    def test_control_command(self, client, mock_transport):
        """Test a control command writes one checksummed frame."""
        mock_transport.add_response(CONTROL_ACK)

        result = client.execute(LogicalCommand.power_on())

        assert result is None
        mock_transport.assert_write_count(1)
        mock_transport.assert_written(POWER_ON_FRAME)
        assert mock_transport.read_sizes == [3]
        assert client.state == TransactionState.DONE
        assert client.last_response.raw == CONTROL_ACK

    def test_volume_set_frame(self, client, mock_transport):
        """Test the absolute volume frame on the wire."""
        mock_transport.add_response(CONTROL_ACK)
        client.execute(LogicalCommand.volume_set(20))
        mock_transport.assert_written(bytes.fromhex("8c 00 05 03 01 14 a9"))

    def test_query_command(self, client, mock_transport):
        """Test a query returns its payload without the checksum."""
        mock_transport.add_response(POWERED_ON)

        result = client.execute(LogicalCommand.query_power())

        assert result == b"\x01"
        mock_transport.assert_written(QUERY_POWER_FRAME)
        assert mock_transport.read_sizes == [3, 2]
        assert client.state == TransactionState.DONE

    def test_power_status_on(self, client, mock_transport):
        """Test decoded power state when on."""
        mock_transport.add_response(POWERED_ON)
        assert client.power_status() == PowerState(is_on=True)

    @pytest.mark.parametrize(
        "response",
        [POWERED_OFF, bytes([0x70, 0x00, 0x01, 0x71])],
        ids=["zero", "empty-payload"],
    )
    def test_power_status_off(self, client, mock_transport, response):
        """Test decoded power state when off or payload empty."""
        mock_transport.add_response(response)
        assert client.power_status().is_on is False

    def test_toggle_when_on_turns_off(self, client, mock_transport, status_lines):
        """Test PowerToggle sends PowerOff after an 'on' answer."""
        mock_transport.add_responses(POWERED_ON, CONTROL_ACK)

        result = client.execute(LogicalCommand.power_toggle())

        assert result is None
        assert mock_transport.written_data == [QUERY_POWER_FRAME, POWER_OFF_FRAME]
        assert status_lines == ["is on - turning off"]

    def test_toggle_when_off_turns_on(self, client, mock_transport, status_lines):
        """Test PowerToggle sends PowerOn after an 'off' answer."""
        mock_transport.add_responses(POWERED_OFF, CONTROL_ACK)

        client.execute(LogicalCommand.power_toggle())

        assert mock_transport.written_data == [QUERY_POWER_FRAME, POWER_ON_FRAME]
        assert status_lines == ["is off - turning on"]

    def test_toggle_query_failure_sends_nothing_else(self, client, mock_transport):
        """Test that a failed power query stops the toggle."""
        mock_transport.add_response(bytes([0x70, 0x00, 0x02, 0x01, 0x00]))

        with pytest.raises(ChecksumError):
            client.execute(LogicalCommand.power_toggle())

        mock_transport.assert_write_count(1)

    def test_run_status_reports(self, client, mock_transport, status_lines):
        """Test run() reports power state for status queries."""
        mock_transport.add_response(POWERED_OFF)

        result = client.run(LogicalCommand.query_power())

        assert result == PowerState(is_on=False)
        assert status_lines == ["Power: off"]

    def test_run_control_returns_none(self, client, mock_transport, status_lines):
        """Test run() for control commands."""
        mock_transport.add_response(CONTROL_ACK)
        assert client.run(LogicalCommand.mute_toggle()) is None
        assert status_lines == []

    def test_opens_transport_if_closed(self):
        """Test that the transport is opened on demand."""
        transport = MockTransport()
        transport.add_response(CONTROL_ACK)
        DeviceClient(transport).execute(LogicalCommand.volume_up())
        assert transport.is_open

    def test_context_manager(self):
        """Test context manager opens and closes the transport."""
        transport = MockTransport()
        transport.add_response(CONTROL_ACK)

        with DeviceClient(transport) as client:
            assert transport.is_open
            client.execute(LogicalCommand.volume_down())

        assert not transport.is_open

    def test_repr(self, client):
        """Test string representation."""
        assert "IDLE" in repr(client)
        assert "mock://test" in repr(client)


class TestTransactionFailures:
    """Tests for fatal transaction errors."""

    @pytest.fixture
    def mock_transport(self):
        """Create an open MockTransport instance."""
        transport = MockTransport()
        transport.open()
        return transport

    @pytest.fixture
    def client(self, mock_transport):
        """Create a DeviceClient with mock transport."""
        return DeviceClient(mock_transport)

    def test_write_failure(self, client, mock_transport):
        """Test write failure is fatal and nothing is read."""
        mock_transport.fail_next_write(TransportError("port gone"))

        with pytest.raises(WriteCommandError) as exc_info:
            client.execute(LogicalCommand.power_on())

        assert "port gone" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, TransportError)
        assert mock_transport.read_sizes == []
        assert client.state == TransactionState.FAILED

    def test_no_response(self, client, mock_transport):
        """Test a timeout reading the header."""
        with pytest.raises(ReadResponseError):
            client.execute(LogicalCommand.power_on())
        assert client.state == TransactionState.FAILED

    def test_unexpected_header_stops_reading(self, client, mock_transport):
        """Test a bad header byte fails before any payload is read."""
        mock_transport.add_response(bytes([0x71, 0x00, 0x02, 0x01, 0x74]))

        with pytest.raises(UnexpectedResponseHeaderError):
            client.execute(LogicalCommand.query_power())

        assert mock_transport.read_sizes == [3]
        assert mock_transport.pending == 2

    def test_unexpected_answer(self, client, mock_transport):
        """Test a non-completed answer byte."""
        mock_transport.add_response(bytes([0x70, 0x01, 0x71]))

        with pytest.raises(UnexpectedResponseAnswerError) as exc_info:
            client.execute(LogicalCommand.volume_set(255))

        assert exc_info.value.answer == 0x01

    def test_short_payload(self, client, mock_transport):
        """Test a timeout while reading query data."""
        mock_transport.add_response(bytes([0x70, 0x00, 0x02, 0x01]))

        with pytest.raises(ReadResponseDataError):
            client.execute(LogicalCommand.query_power())

        assert client.state == TransactionState.FAILED

    def test_empty_query_response(self, client, mock_transport):
        """Test a query response announcing zero bytes."""
        mock_transport.add_response(bytes([0x70, 0x00, 0x00]))

        with pytest.raises(EmptyResponseError):
            client.execute(LogicalCommand.query_power())

        assert mock_transport.read_sizes == [3]

    def test_tampered_query_checksum(self, client, mock_transport):
        """Test a tampered query checksum returns no payload."""
        mock_transport.add_response(bytes([0x70, 0x00, 0x02, 0x01, 0x74]))

        with pytest.raises(ChecksumError):
            client.execute(LogicalCommand.query_power())

        assert client.last_response is None
        assert client.state == TransactionState.FAILED

    def test_tampered_control_checksum(self, client, mock_transport):
        """Test a tampered control acknowledgment."""
        mock_transport.add_response(bytes([0x70, 0x00, 0x71]))

        with pytest.raises(ChecksumError):
            client.execute(LogicalCommand.mute_toggle())

    def test_no_retry(self, client, mock_transport):
        """Test failures are not retried."""
        mock_transport.add_response(bytes([0x70, 0x00, 0x71]))

        with pytest.raises(ChecksumError):
            client.execute(LogicalCommand.power_off())

        mock_transport.assert_write_count(1)


class TestScriptedExchange:
    """End-to-end exchanges against a scripted device."""

    def test_toggle_script(self):
        """Test the exact toggle exchange on the wire."""
        transport = ScriptedMockTransport()
        transport.expect(request=QUERY_POWER_FRAME, response=POWERED_ON)
        transport.expect(request=POWER_OFF_FRAME, response=CONTROL_ACK)

        with DeviceClient(transport) as client:
            client.execute(LogicalCommand.power_toggle())

        assert transport.remaining_steps == 0
