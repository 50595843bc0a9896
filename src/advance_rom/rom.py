"""
ROM Image
=========

An in-memory cartridge image that hands out byte regions to the codec and
accepts edited regions back.

The codec itself knows nothing about ROMs. It decodes from a byte sequence at
an offset and encodes a raw buffer into a fresh stream. This module supplies
the offsets: it reads assets out of the image and writes recompressed assets
back in.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .lz77 import compress, compressed_size, decompress

logger = logging.getLogger(__name__)

ERASED_BYTE: int = 0xFF
"""Value of unprogrammed flash. Used when a write grows the image."""


class RomError(Exception):
    """Raised when a region does not fit inside the ROM image."""


class RomImage:
    """
    A mutable ROM image.

    Regions are addressed by file offset, not by the 0x08000000-based bus
    address the game code uses.
    """

    def __init__(self, data: bytes | bytearray = b"") -> None:
        """Wrap a copy of data."""
        self._data = bytearray(data)

    @classmethod
    def from_path(cls, path: Path) -> RomImage:
        """Load an image from disk."""
        rom = cls(Path(path).read_bytes())
        logger.info("Loaded ROM %s (%d bytes)", path, len(rom))
        return rom

    def save(self, path: Path) -> None:
        """Write the image to disk."""
        Path(path).write_bytes(self._data)
        logger.info("Saved ROM %s (%d bytes)", path, len(self))

    def __len__(self) -> int:
        """Return the image size in bytes."""
        return len(self._data)

    @property
    def data(self) -> bytes:
        """Immutable snapshot of the whole image."""
        return bytes(self._data)

    def read(self, offset: int, length: int) -> bytes:
        """
        Read a region of the image.

        Args:
            offset: First byte of the region.
            length: Number of bytes to read.

        Returns:
            A copy of the region.

        Raises:
            RomError: If the region is not fully inside the image.
        """
        self._check_region(offset, length)
        return bytes(self._data[offset : offset + length])

    def write(self, offset: int, data: bytes, *, grow: bool = False) -> None:
        """
        Overwrite a region of the image.

        Args:
            offset: First byte of the region.
            data: Replacement bytes.
            grow: Allow the write to extend the image. The gap, if any, is
                filled with erased flash bytes.

        Raises:
            RomError: If the region is outside the image and grow is False.
        """
        end = offset + len(data)
        if grow and offset >= 0 and end > len(self._data):
            self._data.extend(bytes([ERASED_BYTE]) * (end - len(self._data)))

        self._check_region(offset, len(data))
        self._data[offset:end] = data
        logger.debug("Wrote %d bytes at %#x", len(data), offset)

    def read_compressed(self, offset: int) -> bytes:
        """Decompress the LZ77 stream at offset."""
        return decompress(self._data, offset)

    def compressed_size(self, offset: int) -> int:
        """Return the size of the LZ77 stream at offset, padding excluded."""
        return compressed_size(self._data, offset)

    def write_compressed(self, offset: int, raw: bytes, *, max_size: int | None = None) -> int:
        """
        Compress raw and write the stream at offset.

        Args:
            offset: Where the stream's tag byte goes.
            raw: Uncompressed data.
            max_size: Room available at offset. The image is left untouched
                when the stream does not fit.

        Returns:
            The number of bytes written, padding included.

        Raises:
            RomError: If the stream exceeds max_size or the image.
        """
        stream = compress(raw)

        if max_size is not None and len(stream) > max_size:
            raise RomError(
                f"Compressed stream of {len(stream)} bytes does not fit "
                f"in {max_size} bytes at {offset:#x}"
            )

        self.write(offset, stream)
        logger.info(
            "Wrote %d raw bytes as %d compressed bytes at %#x", len(raw), len(stream), offset
        )
        return len(stream)

    def _check_region(self, offset: int, length: int) -> None:
        """Raise RomError unless [offset, offset + length) is inside the image."""
        if offset < 0 or length < 0 or offset + length > len(self._data):
            raise RomError(
                f"Region {offset:#x}+{length:#x} is outside the image (size {len(self._data):#x})"
            )
