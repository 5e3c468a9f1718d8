"""
8-bit additive checksum calculation and validation.

The serial control protocol uses a simple additive checksum:
- Sum all bytes preceding the checksum
- Keep only the lower 8 bits (modulo 256)
- Append the result as one raw byte

The same checksum protects outgoing commands and incoming responses.
An additive sum catches every single-bit error but not errors that cancel
out across bytes (e.g. +1 in one byte and -1 in another).
"""

from __future__ import annotations


def calculate_checksum(data: bytes | bytearray | memoryview) -> int:
    """
    Calculate 8-bit additive checksum over the specified data.

    Args:
        data: Bytes preceding the checksum.

    Returns:
        8-bit checksum value (0-255).

    Example:
        >>> hex(calculate_checksum(b"\\x8c\\x00\\x00\\x02\\x01"))
        '0x8f'
    """
    return sum(data) & 0xFF


def append_checksum(data: bytes | bytearray) -> bytes:
    """
    Calculate checksum and append it as a single byte.

    Example:
        >>> append_checksum(b"\\x8c\\x00\\x00\\x02\\x01").hex()
        '8c000002018f'
    """
    return bytes(data) + bytes([calculate_checksum(data)])


def validate_checksum(frame: bytes | bytearray | memoryview) -> bool:
    """
    Validate that the last byte of frame is the checksum of the rest.

    Args:
        frame: Complete frame including the trailing checksum byte.

    Returns:
        True if checksum is valid, False otherwise (including empty frames).
    """
    if len(frame) < 1:
        return False
    return calculate_checksum(frame[:-1]) == frame[-1]
