"""Tests for the in-memory ROM image."""

from __future__ import annotations

from pathlib import Path

import pytest

from advance_rom.lz77 import FormatError, compress
from advance_rom.rom import ERASED_BYTE, RomError, RomImage


@pytest.fixture
def rom() -> RomImage:
    """A 64-byte image holding one compressed asset at 0x10."""
    image = RomImage(bytes(64))
    image.write(0x10, compress(b"ABABAB"))
    return image


class TestRegions:
    """Tests for plain reads and writes."""

    def test_read_write(self) -> None:
        """Written bytes read back unchanged."""
        image = RomImage(bytes(16))
        image.write(4, b"\x01\x02\x03")
        assert image.read(4, 3) == b"\x01\x02\x03"
        assert len(image) == 16

    def test_constructor_copies(self) -> None:
        """The image does not alias the caller's buffer."""
        source = bytearray(8)
        image = RomImage(source)
        source[0] = 0xAA
        assert image.read(0, 1) == b"\x00"

    @pytest.mark.parametrize("offset,length", [(-1, 1), (15, 2), (16, 1), (0, -1)])
    def test_read_outside_image(self, offset: int, length: int) -> None:
        """Regions not fully inside the image are rejected."""
        with pytest.raises(RomError, match="outside the image"):
            RomImage(bytes(16)).read(offset, length)

    def test_write_outside_image(self) -> None:
        """Writes past the end are rejected unless growing is allowed."""
        image = RomImage(bytes(4))
        with pytest.raises(RomError):
            image.write(3, b"\x01\x02")
        assert image.data == bytes(4)

    def test_write_grow(self) -> None:
        """Growing writes pad the gap with erased flash."""
        image = RomImage(bytes(4))
        image.write(6, b"\x01", grow=True)
        assert image.data == bytes(4) + bytes([ERASED_BYTE, ERASED_BYTE]) + b"\x01"

    def test_load_and_save(self, tmp_path: Path) -> None:
        """Images survive a trip through the filesystem."""
        path = tmp_path / "game.gba"
        path.write_bytes(b"\x01\x02\x03\x04")

        image = RomImage.from_path(path)
        image.write(0, b"\xff")
        image.save(tmp_path / "out.gba")

        assert (tmp_path / "out.gba").read_bytes() == b"\xff\x02\x03\x04"


class TestCompressedAssets:
    """Tests for the codec-facing helpers."""

    def test_read_compressed(self, rom: RomImage) -> None:
        """Assets decode from their offset."""
        assert rom.read_compressed(0x10) == b"ABABAB"

    def test_read_compressed_wrong_offset(self, rom: RomImage) -> None:
        """Decoding at a non-stream offset surfaces the codec error."""
        with pytest.raises(FormatError):
            rom.read_compressed(0x00)

    def test_compressed_size(self, rom: RomImage) -> None:
        """The stored stream size excludes padding."""
        assert rom.compressed_size(0x10) == 9

    def test_write_compressed(self, rom: RomImage) -> None:
        """Replacing an asset writes a new stream in place."""
        written = rom.write_compressed(0x10, b"hello hello")
        assert written % 4 == 0
        assert rom.read_compressed(0x10) == b"hello hello"

    def test_write_compressed_too_large(self, rom: RomImage) -> None:
        """A stream that exceeds max_size leaves the image untouched."""
        before = rom.data
        with pytest.raises(RomError, match="does not fit"):
            rom.write_compressed(0x10, bytes(range(40)), max_size=12)
        assert rom.data == before

    def test_write_compressed_past_end(self, rom: RomImage) -> None:
        """A stream running off the end of the image is rejected."""
        with pytest.raises(RomError):
            rom.write_compressed(60, b"ABABAB")
