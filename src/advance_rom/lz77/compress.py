"""
LZ77 compression implementation.

This module implements the compression (encoding) side of the GBA LZ77 codec.


HOW COMPRESSION WORKS
---------------------
The compressor walks the input once, front to back.

At every position it asks the match finder for an earlier occurrence of the
upcoming bytes:

  - A match of 3 or more bytes becomes a back-reference:
    "go back D bytes and copy N bytes from there."
  - Anything shorter is stored as a literal byte.

Tokens are grouped eight at a time behind a flags byte that tells the
decoder which tokens are back-references.


Example:
-------
Input:  "ABABAB" (6 bytes)

  Position 0: 'A', nothing behind it       -> literal 'A'
  Position 1: 'B', nothing behind it       -> literal 'B'
  Position 2: "ABAB" matches 2 bytes back  -> copy distance 2, count 4

Output:
  Header:   10 06 00 00
  Flags:    20              (0b00100000: third token is a reference)
  Tokens:   41 42 10 01
  Padding:  00 00 00        (to a multiple of 4)


GREEDY, NOT OPTIMAL
-------------------
The first workable match is taken as-is. A better parse might exist, but the
exact byte output is part of the contract: existing ROM assets are compared
against it.
"""

from __future__ import annotations

import logging

from .constants import (
    ALIGNMENT,
    BLOCK_TOKENS,
    HEADER_SIZE,
    MAX_UNCOMPRESSED_LENGTH,
    MIN_MATCH_LENGTH,
)
from .encoding import encode_header, encode_reference
from .exceptions import InputTooLargeError
from .match import find_match

logger = logging.getLogger(__name__)


def compress(data: bytes) -> bytes:
    """Compress data into a GBA LZ77 stream.

    Args:
        data: Uncompressed input bytes.

    Returns:
        LZ77-compressed bytes, zero-padded to a multiple of 4.

    Raises:
        InputTooLargeError: If data does not fit the 24-bit length field.

    Output format:
        [0x10] [length: 3 bytes LE] [flags] [token]* [flags] [token]* ... [padding]
    """
    # Fail before doing any work.
    #
    # A truncated length field would produce a stream that decodes to the
    # wrong size.
    if len(data) > MAX_UNCOMPRESSED_LENGTH:
        raise InputTooLargeError(len(data), MAX_UNCOMPRESSED_LENGTH)

    # The match finder relies on bytes.rfind.
    data = bytes(data)

    # The header carries the real length of the input.
    output = bytearray(encode_header(len(data)))

    position = 0
    while position < len(data):
        position = _compress_block(data, position, output)

    # Pad to word alignment.
    output.extend(bytes(-len(output) % ALIGNMENT))

    logger.debug("Compressed %d bytes into %d bytes", len(data), len(output))
    return bytes(output)


# Public codec surface used by image and palette callers.
encode = compress


def max_compressed_length(source_bytes: int) -> int:
    """Calculate the maximum possible compressed length for a given input size.

    Args:
        source_bytes: Uncompressed data size.

    Returns:
        Maximum possible compressed size, padding included.

    The worst case is input with no repeats: every byte is a literal, and
    every 8 literals cost one extra flags byte.
    """
    flags_bytes = -(-source_bytes // BLOCK_TOKENS)
    unpadded = HEADER_SIZE + source_bytes + flags_bytes
    return unpadded + (-unpadded % ALIGNMENT)


def _compress_block(data: bytes, position: int, output: bytearray) -> int:
    """Compress one block (flags byte plus up to 8 tokens).

    Args:
        data: The complete raw input.
        position: Where this block starts in data.
        output: Compressed output (modified in place).

    Returns:
        The position after the last byte this block covers.
    """
    flags = 0
    tokens = bytearray()

    for slot in range(BLOCK_TOKENS):
        # Input exhausted mid-block.
        #
        # The remaining flag bits stay zero and no extra tokens are emitted.
        if position >= len(data):
            break

        match = find_match(data, position)

        if match is not None and match.length >= MIN_MATCH_LENGTH:
            # Back-reference. Flag bits are filled most-significant first.
            tokens.extend(encode_reference(match.length, match.distance))
            flags |= 0x80 >> slot
            position += match.length
        else:
            # Literal.
            tokens.append(data[position])
            position += 1

    output.append(flags)
    output.extend(tokens)
    return position
