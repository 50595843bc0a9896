"""Pure Python GBA LZ77 compression library.

The Game Boy Advance BIOS decompresses a narrow LZ77/LZSS variant: a 0x10
tag, a 24-bit length, and blocks of eight literal or back-reference tokens
over a 4096-byte window. Graphics, tilemaps and palettes in ROM images are
commonly stored this way.

Usage::

    from advance_rom.lz77 import compress, decompress

    # Decompress an asset stored at an offset inside a ROM
    raw = decompress(rom_bytes, 0x1A2B3C)

    # Recompress edited data
    stream = compress(raw)

The compressor is greedy and reproduces the byte output of existing tools;
it does not search for the smallest possible stream.
"""

from __future__ import annotations

from .compress import compress, encode, max_compressed_length
from .decompress import (
    compressed_size,
    decode,
    decompress,
    get_uncompressed_length,
    is_valid_compressed_data,
)
from .exceptions import (
    CorruptReferenceError,
    FormatError,
    InputTooLargeError,
    Lz77DecodeError,
    Lz77Error,
    TruncatedStreamError,
)
from .match import Match, find_match

__all__ = [
    # Core API
    "compress",
    "decompress",
    "encode",
    "decode",
    # Match search
    "find_match",
    "Match",
    # Utilities
    "compressed_size",
    "get_uncompressed_length",
    "is_valid_compressed_data",
    "max_compressed_length",
    # Exceptions
    "Lz77Error",
    "Lz77DecodeError",
    "FormatError",
    "CorruptReferenceError",
    "TruncatedStreamError",
    "InputTooLargeError",
]
