"""
Constants for the GBA LZ77 compression format.

Reference: https://problemkaputt.de/gbatek.htm#biosdecompressionfunctions
"""

from __future__ import annotations

# ===========================================================================
# Stream Header
# ===========================================================================
#
# Every stream opens with a 4-byte header:
#
#   [tag: 1 byte][length: 3 bytes, little-endian]
#
# The tag identifies the compression type to the BIOS decompression calls.

TAG: int = 0x10
"""Tag byte identifying an LZ77 stream.

The BIOS uses the upper nibble as the compression type (1 = LZ77).
Any other value makes the stream invalid.
"""

HEADER_SIZE: int = 4
"""Size of the stream header in bytes (tag + 24-bit length)."""

LENGTH_FIELD_SIZE: int = 3
"""Size of the little-endian length field following the tag."""

MAX_UNCOMPRESSED_LENGTH: int = (1 << 24) - 1
"""Largest raw buffer the 24-bit length field can describe."""

# ===========================================================================
# Blocks
# ===========================================================================
#
# After the header, the stream is a sequence of blocks:
#
#   [flags: 1 byte][token]*  (up to 8 tokens)
#
# Flag bit 7 describes the first token, bit 0 the last.
#   0 = literal (1 byte)
#   1 = back-reference (2 bytes)

BLOCK_TOKENS: int = 8
"""Number of tokens described by one flags byte."""

# ===========================================================================
# Back-references
# ===========================================================================
#
# A back-reference packs count and distance into 2 bytes:
#
#   byte 0: [count - 3 : 4 bits][(distance - 1) >> 8 : 4 bits]
#   byte 1: [(distance - 1) & 0xFF : 8 bits]

REFERENCE_SIZE: int = 2
"""Size of a back-reference token in bytes."""

WINDOW_SIZE: int = 0x1000
"""Maximum backward distance of a back-reference (12-bit field, plus one)."""

MIN_MATCH_LENGTH: int = 3
"""Shortest run worth a back-reference. Anything shorter is emitted as literals."""

MAX_MATCH_LENGTH: int = 0x12
"""Longest run a single back-reference can copy (4-bit field, plus three)."""

MIN_MATCH_DISTANCE: int = 2
"""Smallest distance the match finder proposes.

The format allows distance 1, but the BIOS VRAM variant writes 16 bits at a
time and cannot read the byte it is still assembling. The encoder never emits
distance 1, so its output is safe for both destinations.
"""

# ===========================================================================
# Output Alignment
# ===========================================================================

ALIGNMENT: int = 4
"""Compressed streams are zero-padded to a multiple of this many bytes.

ROM data is word-aligned. The padding is never parsed: the decoder stops as
soon as the declared length is produced.
"""
