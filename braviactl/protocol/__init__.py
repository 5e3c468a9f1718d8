"""
Protocol layer for serial display control.

This module contains the low-level protocol handling:
- Byte codes and protocol constants
- Checksum calculation and validation
- Response frame parsing

The command encoder lives in braviactl.protocol.encoding and is not
re-exported here, since it depends on braviactl.models.
"""

from braviactl.protocol.checksums import append_checksum, calculate_checksum, validate_checksum
from braviactl.protocol.constants import Function, ProtocolConstants, RequestType, ResponseAnswer
from braviactl.protocol.frame_reader import (
    ParsedResponse,
    check_response_header,
    parse_response,
    trailing_length,
    verify_checksum,
)

__all__ = [
    # Constants
    "Function",
    "ProtocolConstants",
    "RequestType",
    "ResponseAnswer",
    # Checksums
    "calculate_checksum",
    "validate_checksum",
    "append_checksum",
    # Frame Parsing
    "ParsedResponse",
    "check_response_header",
    "parse_response",
    "trailing_length",
    "verify_checksum",
]
