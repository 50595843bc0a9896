"""
LZ77 decompression implementation.

This module implements the decompression (decoding) side of the GBA LZ77 codec.


HOW DECOMPRESSION WORKS
-----------------------
The stream starts with a 4-byte header: the 0x10 tag and the output length.
The output buffer is allocated up front at exactly that size.

The rest of the stream is a sequence of blocks. Each block is a flags byte
followed by up to eight tokens. Flag bits are read most-significant first:

  0 = LITERAL: "copy the next source byte to the output."
      Input:  [byte]

  1 = BACK-REFERENCE: "go back D bytes in the output, copy N bytes."
      Input:  [count - 3 | (distance - 1) >> 8] [(distance - 1) & 0xFF]

Decoding stops the moment the output is full, even in the middle of a block.
Whatever follows (unused flag bits, alignment padding) is never read.


Example:
-------
Compressed: 10 06 00 00 | 20 | 41 42 10 01

Step 1: Header says 6 output bytes.
Step 2: Flags 0x20 = 0b00100000.
    bit 7 = 0: literal 'A'                  -> "A"
    bit 6 = 0: literal 'B'                  -> "AB"
    bit 5 = 1: [0x10, 0x01] = count 4, distance 2
               copy from 2 bytes back       -> "ABABAB"
Step 3: Output is 6 bytes. Done!


OVERLAPPING COPIES
------------------
The distance may be shorter than the count. The copy then reads bytes it has
just written, repeating the last `distance` bytes cyclically:

    output[p0 + j] = output[p0 - distance + (j mod distance)]

This is what lets "ABABAB" become two literals and one 2-byte token.
"""

from __future__ import annotations

import logging

from .constants import BLOCK_TOKENS, HEADER_SIZE, REFERENCE_SIZE
from .encoding import decode_header, decode_reference
from .exceptions import CorruptReferenceError, FormatError, TruncatedStreamError

logger = logging.getLogger(__name__)


def decompress(source: bytes, offset: int = 0) -> bytes:
    """Decompress the LZ77 stream starting at offset.

    Args:
        source: Bytes containing the compressed stream (e.g. a whole ROM).
        offset: Position of the stream's tag byte in source.

    Returns:
        Original uncompressed data.

    Raises:
        ValueError: If offset is negative.
        FormatError: If the tag byte is not 0x10.
        CorruptReferenceError: If a back-reference cannot be satisfied.
        TruncatedStreamError: If the stream runs past the end of source.
    """
    output, consumed = _decode(source, offset)
    logger.debug("Decompressed %d bytes from %d bytes at %#x", len(output), consumed, offset)
    return output


# Public codec surface used by image and palette callers.
decode = decompress


def compressed_size(source: bytes, offset: int = 0) -> int:
    """Measure how many source bytes the stream at offset occupies.

    Args:
        source: Bytes containing the compressed stream.
        offset: Position of the stream's tag byte in source.

    Returns:
        Header plus block bytes, alignment padding excluded.

    Raises:
        The same errors as decompress(); the stream is fully validated.

    Callers rewriting a stream in place use this to know how much room the
    old stream had.
    """
    _, consumed = _decode(source, offset)
    return consumed


def get_uncompressed_length(source: bytes, offset: int = 0) -> int:
    """Read the declared uncompressed length without decompressing.

    Args:
        source: Bytes containing the compressed stream.
        offset: Position of the stream's tag byte in source.

    Returns:
        The declared uncompressed length.

    Raises:
        FormatError: If the tag byte is not 0x10.
        TruncatedStreamError: If the header is incomplete.
    """
    return decode_header(source, offset)


def is_valid_compressed_data(source: bytes, offset: int = 0) -> bool:
    """Check if the bytes at offset look like an LZ77 stream.

    Args:
        source: Data to check.
        offset: Position of the candidate tag byte.

    Returns:
        True if the header is well formed.

    Note:
        This does NOT guarantee the data will decompress successfully.
        It only checks the header. Useful for scanning a ROM for streams.
    """
    try:
        length = decode_header(source, offset)
    except (ValueError, FormatError, TruncatedStreamError):
        return False

    # A non-empty stream needs at least one flags byte after the header.
    return length == 0 or offset + HEADER_SIZE < len(source)


def _decode(source: bytes, offset: int) -> tuple[bytes, int]:
    """Decode the stream at offset.

    Args:
        source: Bytes containing the compressed stream.
        offset: Position of the stream's tag byte.

    Returns:
        Tuple of (decoded_bytes, source_bytes_consumed).
    """
    # Step 1: Validate the header and read the output length.
    length = decode_header(source, offset)

    # Step 2: Allocate the output buffer at its final size.
    output = bytearray(length)
    position = 0
    cursor = offset + HEADER_SIZE

    # Step 3: Process blocks until the output is full.
    while position < length:
        flags = _read_byte(source, cursor, "flags byte")
        cursor += 1

        for bit in range(BLOCK_TOKENS):
            if flags & (0x80 >> bit):
                if cursor + REFERENCE_SIZE > len(source):
                    raise TruncatedStreamError(
                        f"Back-reference needs {REFERENCE_SIZE} bytes "
                        f"but only {len(source) - cursor} available",
                        offset=cursor,
                    )

                count, distance = decode_reference(source[cursor], source[cursor + 1])
                _check_reference(position, count, distance, length, cursor)
                _execute_copy(output, position, count, distance)

                position += count
                cursor += REFERENCE_SIZE
            else:
                output[position] = _read_byte(source, cursor, "literal")
                position += 1
                cursor += 1

            # Stop mid-block once the output is full.
            #
            # Remaining flag bits are don't-care.
            if position >= length:
                break

    return bytes(output), cursor - offset


def _read_byte(source: bytes, cursor: int, what: str) -> int:
    """Read one source byte, surfacing truncation instead of an IndexError."""
    if cursor >= len(source):
        raise TruncatedStreamError(f"Unexpected end of input reading {what}", offset=cursor)
    return source[cursor]


def _check_reference(position: int, count: int, distance: int, length: int, cursor: int) -> None:
    """Validate a back-reference before copying.

    Args:
        position: Current output position.
        count: Bytes to copy.
        distance: How far back the copy starts.
        length: Declared output length.
        cursor: Source offset of the token (for error reporting).

    Raises:
        CorruptReferenceError: If the copy cannot be performed within the output.
    """
    # Coarse check against the declared total length.
    if distance > length:
        raise CorruptReferenceError(
            f"Copy distance {distance} exceeds declared length {length}", offset=cursor
        )

    # The window must start inside what has been produced so far.
    if distance > position:
        raise CorruptReferenceError(
            f"Copy distance {distance} reaches before the start of output "
            f"(only {position} bytes produced)",
            offset=cursor,
        )

    # The copy must not produce more output than declared.
    if position + count > length:
        raise CorruptReferenceError(
            f"Copy would overflow: {position} + {count} > {length}", offset=cursor
        )


def _execute_copy(output: bytearray, position: int, count: int, distance: int) -> None:
    """Copy count bytes from distance bytes back, one byte at a time.

    Args:
        output: The output buffer (modified in place).
        position: Where the copy writes its first byte.
        count: How many bytes to copy.
        distance: How far back the window starts.

    Example: overlapping copy (run-length encoding)
        output = [A, B, _, _, _, _], position = 2, count = 4, distance = 2

        j = 0: output[2] = output[0 + 0] = 'A'
        j = 1: output[3] = output[0 + 1] = 'B'
        j = 2: output[4] = output[0 + 0] = 'A'
        j = 3: output[5] = output[0 + 1] = 'B'

        Result: [A, B, A, B, A, B]
    """
    start = position - distance
    for j in range(count):
        output[position + j] = output[start + j % distance]
