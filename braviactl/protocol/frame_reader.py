"""
Response frame parsing.

Every response starts with a 3-byte header:

    [RESPONSE_HEADER 0x70][ANSWER][LENGTH or CHECKSUM]

1. **Control responses**: the header is the whole frame and its third byte
   is the checksum of the first two.
   - Format: [0x70][ANSWER][CS]

2. **Query responses**: the third byte counts the bytes that follow, which
   are the payload plus one trailing checksum over header and payload.
   - Format: [0x70][ANSWER][LEN][PAYLOAD...][CS]

Both kinds are verified by the same routine once all bytes are in hand;
they differ only in how many bytes follow the header.
"""

from __future__ import annotations

from dataclasses import dataclass

from braviactl.exceptions import (
    ChecksumError,
    EmptyResponseError,
    ProtocolError,
    UnexpectedResponseAnswerError,
    UnexpectedResponseHeaderError,
)
from braviactl.protocol.checksums import calculate_checksum
from braviactl.protocol.constants import ProtocolConstants, RequestType, ResponseAnswer


@dataclass(frozen=True)
class ParsedResponse:
    """
    A validated response frame.

    Attributes:
        raw: Complete frame as received, including the checksum.
        payload: Query payload without the checksum, or None for control
            responses.
    """

    raw: bytes
    payload: bytes | None

    def __repr__(self) -> str:
        payload = "None" if self.payload is None else (self.payload.hex(" ") or "(empty)")
        return f"ParsedResponse(raw={self.raw.hex(' ')}, payload={payload})"


def check_response_header(header: bytes) -> None:
    """
    Validate the marker and answer bytes of a response header.

    Raises:
        ProtocolError: If fewer than 3 header bytes were given.
        UnexpectedResponseHeaderError: If byte 0 is not 0x70.
        UnexpectedResponseAnswerError: If byte 1 is not "completed".
    """
    if len(header) != ProtocolConstants.RESPONSE_HEADER_LENGTH:
        raise ProtocolError(
            f"Response header must be {ProtocolConstants.RESPONSE_HEADER_LENGTH} bytes, "
            f"got {len(header)}"
        )
    if header[0] != ProtocolConstants.RESPONSE_HEADER:
        raise UnexpectedResponseHeaderError(header[0])
    if header[1] != ResponseAnswer.COMPLETED:
        raise UnexpectedResponseAnswerError(header[1])


def trailing_length(header: bytes, request_type: RequestType) -> int:
    """
    Number of bytes that follow the header for this request type.

    Query responses announce it in the third header byte; control responses
    end with the header.
    """
    if request_type is RequestType.QUERY:
        return header[2]
    return 0


def verify_checksum(frame: bytes) -> bytes:
    """
    Check the trailing checksum byte of a frame.

    Args:
        frame: Frame whose last byte is the checksum of all preceding bytes.

    Returns:
        The frame without its checksum byte.

    Raises:
        EmptyResponseError: If the frame is empty.
        ChecksumError: If the checksum does not match.
    """
    if not frame:
        raise EmptyResponseError()
    body, received = frame[:-1], frame[-1]
    expected = calculate_checksum(body)
    if expected != received:
        raise ChecksumError(expected=expected, received=received)
    return body


def parse_response(header: bytes, data: bytes, request_type: RequestType) -> ParsedResponse:
    """
    Validate a complete response and extract its payload.

    Args:
        header: The 3 header bytes (already checked by check_response_header).
        data: The trailing_length() bytes read after the header.
        request_type: Request type of the command being answered.

    Returns:
        ParsedResponse with the payload for queries, None for control.

    Raises:
        EmptyResponseError: If a query response has no trailing bytes.
        ChecksumError: If the checksum does not match.
    """
    if request_type is RequestType.QUERY and not data:
        raise EmptyResponseError()

    raw = bytes(header) + bytes(data)
    body = verify_checksum(raw)

    if request_type is RequestType.QUERY:
        return ParsedResponse(raw=raw, payload=body[len(header):])
    return ParsedResponse(raw=raw, payload=None)
