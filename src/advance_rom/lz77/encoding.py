"""
Encoding utilities for the GBA LZ77 format.

This module provides the low-level packing primitives shared by the
compressor and decompressor:

1. **Header**: the tag byte plus a 24-bit little-endian length.

2. **Back-reference**: count and distance packed into two bytes.

Literals need no packing: they are copied verbatim.
"""

from __future__ import annotations

from .constants import (
    HEADER_SIZE,
    LENGTH_FIELD_SIZE,
    MAX_MATCH_LENGTH,
    MAX_UNCOMPRESSED_LENGTH,
    MIN_MATCH_LENGTH,
    TAG,
    WINDOW_SIZE,
)
from .exceptions import FormatError, InputTooLargeError, TruncatedStreamError

# Header
#
#   [0x10][len & 0xFF][(len >> 8) & 0xFF][(len >> 16) & 0xFF]
#
# Read as a little-endian uint32, the header is (length << 8) | 0x10.
# That is how the BIOS reads it: one word, tag in the low byte.
#
# Example: length = 6
#
#   [0x10, 0x06, 0x00, 0x00]


def encode_header(length: int) -> bytes:
    """Encode the stream header for a raw buffer of the given length.

    Args:
        length: Size of the raw buffer in bytes.

    Returns:
        The 4-byte header.

    Raises:
        ValueError: If length is negative.
        InputTooLargeError: If length does not fit the 24-bit field.
    """
    if length < 0:
        raise ValueError(f"Length must be non-negative, got {length}")
    if length > MAX_UNCOMPRESSED_LENGTH:
        raise InputTooLargeError(length, MAX_UNCOMPRESSED_LENGTH)

    return bytes([TAG]) + length.to_bytes(LENGTH_FIELD_SIZE, "little")


def decode_header(source: bytes, offset: int = 0) -> int:
    """Validate the header at offset and return the declared length.

    Args:
        source: Bytes containing the stream.
        offset: Position of the tag byte.

    Returns:
        The declared uncompressed length.

    Raises:
        ValueError: If offset is negative.
        TruncatedStreamError: If fewer than 4 bytes are available.
        FormatError: If the tag byte is wrong.
    """
    if offset < 0:
        raise ValueError(f"Offset must be non-negative, got {offset}")
    if offset >= len(source):
        raise TruncatedStreamError("No header: offset is past the end of input", offset=offset)

    # The tag is checked before the length so that a wrong tag is always a
    # format error, however short the input is.
    if source[offset] != TAG:
        raise FormatError(
            f"Invalid tag byte {source[offset]:#04x}, expected {TAG:#04x}", offset=offset
        )

    if offset + HEADER_SIZE > len(source):
        raise TruncatedStreamError(
            f"Header needs {HEADER_SIZE} bytes but only {len(source) - offset} available",
            offset=offset,
        )

    return int.from_bytes(source[offset + 1 : offset + HEADER_SIZE], "little")


# Back-reference
#
# Both fields are stored minus their minimum, high nibble first:
#
#   byte 0 = ((count - 3) << 4) | ((distance - 1) >> 8)
#   byte 1 = (distance - 1) & 0xFF
#
# Example: count = 4, distance = 2
#
#   count - 3    = 1  -> high nibble 0x1
#   distance - 1 = 1  -> low nibble 0x0, byte 1 = 0x01
#
#   Encoded: [0x10, 0x01]


def encode_reference(count: int, distance: int) -> bytes:
    """Encode a back-reference token.

    Args:
        count: Number of bytes to copy (3-18).
        distance: How far back the copy starts (1-4096).

    Returns:
        The 2-byte token.

    Raises:
        ValueError: If count or distance is out of range.
    """
    if not MIN_MATCH_LENGTH <= count <= MAX_MATCH_LENGTH:
        raise ValueError(
            f"Copy length must be in [{MIN_MATCH_LENGTH}, {MAX_MATCH_LENGTH}], got {count}"
        )
    if not 1 <= distance <= WINDOW_SIZE:
        raise ValueError(f"Copy distance must be in [1, {WINDOW_SIZE}], got {distance}")

    packed = ((count - MIN_MATCH_LENGTH) << 12) | (distance - 1)
    return packed.to_bytes(2, "big")


def decode_reference(first: int, second: int) -> tuple[int, int]:
    """Decode a back-reference token.

    Args:
        first: The first token byte (count nibble, distance high nibble).
        second: The second token byte (distance low byte).

    Returns:
        Tuple of (count, distance).
    """
    count = (first >> 4) + MIN_MATCH_LENGTH
    distance = (((first & 0x0F) << 8) | second) + 1
    return count, distance
