"""
Command line entry point for GBA LZ77 assets.

Usage::

    python -m advance_rom decompress game.gba --offset 0x1A2B3C -o tiles.bin
    python -m advance_rom compress tiles.bin -o tiles.lz
    python -m advance_rom info game.gba --offset 0x1A2B3C
    python -m advance_rom inject game.gba tiles.bin --offset 0x1A2B3C --max-size 0x800

Commands:
    decompress   Decode the stream at --offset of INPUT into OUTPUT
    compress     Encode INPUT into OUTPUT
    info         Show the declared length and compressed size of a stream
    inject       Compress RAW and write it into ROM at --offset
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .config import LOG_LEVEL
from .lz77 import Lz77Error, compress, compressed_size, decompress, get_uncompressed_length
from .rom import RomError, RomImage

logger = logging.getLogger(__name__)


class ColoredFormatter(logging.Formatter):
    """Logging formatter with ANSI colors for better readability."""

    # ANSI color codes
    GREY = "\x1b[38;5;244m"
    BLUE = "\x1b[38;5;39m"
    GREEN = "\x1b[38;5;40m"
    YELLOW = "\x1b[38;5;220m"
    RED = "\x1b[38;5;196m"
    BOLD_RED = "\x1b[38;5;196;1m"
    CYAN = "\x1b[38;5;51m"
    RESET = "\x1b[0m"

    LEVEL_COLORS = {
        logging.DEBUG: GREY,
        logging.INFO: GREEN,
        logging.WARNING: YELLOW,
        logging.ERROR: RED,
        logging.CRITICAL: BOLD_RED,
    }

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors."""
        color = self.LEVEL_COLORS.get(record.levelno, self.RESET)

        timestamp = f"{self.CYAN}{self.formatTime(record, self.datefmt)}{self.RESET}"
        levelname = f"{color}{record.levelname:8}{self.RESET}"
        name = f"{self.BLUE}{record.name}{self.RESET}"

        return f"{timestamp} {levelname} {name}: {record.getMessage()}"


def setup_logging(verbose: bool = False, no_color: bool = False) -> None:
    """Configure logging for the CLI with optional colors."""
    level = logging.DEBUG if verbose else getattr(logging, LOG_LEVEL)

    handler = logging.StreamHandler()
    handler.setLevel(level)

    if no_color:
        formatter = logging.Formatter(
            "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    else:
        formatter = ColoredFormatter(datefmt="%Y-%m-%d %H:%M:%S")

    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)


def parse_offset(value: str) -> int:
    """Parse a decimal or 0x-prefixed hexadecimal offset."""
    try:
        offset = int(value, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid offset: {value!r}") from None
    if offset < 0:
        raise argparse.ArgumentTypeError(f"offset must be non-negative: {value!r}")
    return offset


def cmd_decompress(args: argparse.Namespace) -> None:
    """Decode a stream and write the raw bytes."""
    source = args.input.read_bytes()
    raw = decompress(source, args.offset)
    args.output.write_bytes(raw)
    logger.info(
        "Decompressed %s@%#x -> %s (%d bytes)", args.input, args.offset, args.output, len(raw)
    )


def cmd_compress(args: argparse.Namespace) -> None:
    """Encode a raw file."""
    raw = args.input.read_bytes()
    stream = compress(raw)
    args.output.write_bytes(stream)
    logger.info(
        "Compressed %s -> %s (%d -> %d bytes)", args.input, args.output, len(raw), len(stream)
    )


def cmd_info(args: argparse.Namespace) -> None:
    """Print header and size information for a stream."""
    source = args.input.read_bytes()
    length = get_uncompressed_length(source, args.offset)
    size = compressed_size(source, args.offset)
    ratio = size / length if length else 0.0

    print(f"offset:            {args.offset:#x}")
    print(f"uncompressed size: {length}")
    print(f"compressed size:   {size}")
    print(f"ratio:             {ratio:.2%}")


def cmd_inject(args: argparse.Namespace) -> None:
    """Compress a raw file into a ROM at an offset."""
    rom = RomImage.from_path(args.rom)
    written = rom.write_compressed(args.offset, args.raw.read_bytes(), max_size=args.max_size)
    rom.save(args.output or args.rom)
    logger.info("Injected %d bytes at %#x", written, args.offset)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="advance-rom",
        description="GBA LZ77 compression tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored logging output",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    p = commands.add_parser("decompress", help="Decode a stream into a raw file")
    p.add_argument("input", type=Path, help="File containing the stream (e.g. a ROM)")
    p.add_argument("--offset", type=parse_offset, default=0, help="Stream offset (default: 0)")
    p.add_argument("-o", "--output", type=Path, required=True, help="Raw output file")
    p.set_defaults(func=cmd_decompress)

    p = commands.add_parser("compress", help="Encode a raw file")
    p.add_argument("input", type=Path, help="Raw input file")
    p.add_argument("-o", "--output", type=Path, required=True, help="Compressed output file")
    p.set_defaults(func=cmd_compress)

    p = commands.add_parser("info", help="Show stream sizes")
    p.add_argument("input", type=Path, help="File containing the stream")
    p.add_argument("--offset", type=parse_offset, default=0, help="Stream offset (default: 0)")
    p.set_defaults(func=cmd_info)

    p = commands.add_parser("inject", help="Compress a raw file into a ROM")
    p.add_argument("rom", type=Path, help="ROM image to modify")
    p.add_argument("raw", type=Path, help="Raw data to compress")
    p.add_argument("--offset", type=parse_offset, required=True, help="Destination offset")
    p.add_argument(
        "--max-size",
        type=parse_offset,
        default=None,
        help="Room available at the offset; refuse to write a larger stream",
    )
    p.add_argument("-o", "--output", type=Path, default=None, help="Write to a new ROM file")
    p.set_defaults(func=cmd_inject)

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    setup_logging(args.verbose, args.no_color)

    try:
        args.func(args)
    except (Lz77Error, RomError, OSError) as e:
        logger.error("%s failed: %s", args.command, e)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
