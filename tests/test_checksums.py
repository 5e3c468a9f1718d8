"""Tests for checksum functions."""

import pytest

from braviactl.models.commands import LogicalCommand
from braviactl.protocol.checksums import (
    append_checksum,
    calculate_checksum,
    validate_checksum,
)
from braviactl.protocol.encoding import encode


class TestChecksums:
    """Tests for checksum calculation and validation."""

    def test_calculate_checksum_power_on(self):
        """Test checksum of the power-on command."""
        data = bytes([0x8C, 0x00, 0x00, 0x02, 0x01])
        assert calculate_checksum(data) == 0x8F

    def test_calculate_checksum_single_byte(self):
        """Test checksum of single byte."""
        assert calculate_checksum(bytes([0x42])) == 0x42

    def test_calculate_checksum_wraps(self):
        """Test that the sum wraps at 8 bits."""
        # 0x83 + 0xFF + 0xFF = 0x281 -> 0x81
        assert calculate_checksum(bytes([0x83, 0x00, 0x00, 0xFF, 0xFF])) == 0x81

    def test_calculate_checksum_empty(self):
        """Test checksum of empty data."""
        assert calculate_checksum(b"") == 0x00

    def test_calculate_checksum_deterministic(self):
        """Test that repeated calculation gives the same result."""
        data = bytes(range(256))
        assert calculate_checksum(data) == calculate_checksum(data)

    def test_append_checksum(self):
        """Test appending checksum to data."""
        data = bytes([0x70, 0x00])
        result = append_checksum(data)
        assert result == bytes([0x70, 0x00, 0x70])

    def test_validate_checksum_valid(self):
        """Test validation of correct checksum."""
        assert validate_checksum(bytes([0x70, 0x00, 0x02, 0x01, 0x73])) is True

    def test_validate_checksum_invalid(self):
        """Test validation of incorrect checksum."""
        assert validate_checksum(bytes([0x70, 0x00, 0x02, 0x01, 0x74])) is False

    def test_validate_checksum_empty(self):
        """Test validation of empty frame."""
        assert validate_checksum(b"") is False

    @pytest.mark.parametrize(
        "command",
        [
            LogicalCommand.power_on(),
            LogicalCommand.power_off(),
            LogicalCommand.volume_up(),
            LogicalCommand.volume_down(),
            LogicalCommand.volume_set(42),
            LogicalCommand.mute_toggle(),
            LogicalCommand.query_power(),
        ],
        ids=str,
    )
    def test_encoded_frames_validate(self, command):
        """Test that every encoded command validates once checksummed."""
        assert validate_checksum(append_checksum(encode(command))) is True

    def test_single_bit_flip_detected(self):
        """Test that flipping any single bit of a frame fails validation."""
        frame = append_checksum(encode(LogicalCommand.query_power()))
        for index in range(len(frame)):
            for bit in range(8):
                corrupted = bytearray(frame)
                corrupted[index] ^= 1 << bit
                assert validate_checksum(corrupted) is False, (index, bit)

    def test_compensating_errors_not_detected(self):
        """Test the known weakness: errors that cancel out go unnoticed."""
        frame = bytearray(append_checksum(bytes([0x10, 0x20])))
        frame[0] += 1
        frame[1] -= 1
        assert validate_checksum(frame) is True
