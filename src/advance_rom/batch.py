"""
Batch Codec
===========

Compress or decompress many independent buffers at once.

Every buffer is its own unit of work and the codec holds no shared state, so
a batch spreads across worker processes with no coordination at all. Results
come back in input order.
"""

from __future__ import annotations

import logging
from concurrent.futures import ProcessPoolExecutor
from typing import Annotated, Callable, Iterable

from pydantic import Field

from .config import WORKERS
from .lz77 import compress, decompress
from .types import StrictBaseModel

logger = logging.getLogger(__name__)


class BatchConfig(StrictBaseModel):
    """Configuration for batch jobs."""

    max_workers: Annotated[int, Field(ge=1)] | None = WORKERS
    """Worker processes. None lets the executor use one per CPU."""

    parallel: bool = True
    """Run in worker processes. When False, items are processed in-process."""

    chunksize: int = Field(default=1, ge=1)
    """Items handed to a worker at a time."""


def compress_many(buffers: Iterable[bytes], config: BatchConfig | None = None) -> list[bytes]:
    """
    Compress each buffer independently.

    Args:
        buffers: Raw buffers.
        config: Batch settings. Defaults to BatchConfig().

    Returns:
        Compressed streams, in input order.

    Raises:
        InputTooLargeError: If any buffer exceeds the 24-bit length limit.
    """
    return _run(compress, list(buffers), config or BatchConfig())


def decompress_many(streams: Iterable[bytes], config: BatchConfig | None = None) -> list[bytes]:
    """
    Decompress each stream independently (each starting at offset 0).

    Args:
        streams: Compressed streams.
        config: Batch settings. Defaults to BatchConfig().

    Returns:
        Decompressed buffers, in input order.

    Raises:
        Lz77DecodeError: If any stream is malformed.
    """
    return _run(_decompress_stream, list(streams), config or BatchConfig())


def _decompress_stream(stream: bytes) -> bytes:
    """Decompress a stream at offset 0 (module-level for pickling in ProcessPoolExecutor)."""
    return decompress(stream)


def _run(func: Callable[[bytes], bytes], items: list[bytes], config: BatchConfig) -> list[bytes]:
    """Apply func to every item, in worker processes when worthwhile."""
    # A pool costs more than it saves for a single item.
    if not config.parallel or len(items) <= 1:
        return [func(item) for item in items]

    logger.debug(
        "Running %s on %d items across %s workers",
        func.__name__,
        len(items),
        config.max_workers,
    )
    with ProcessPoolExecutor(max_workers=config.max_workers) as executor:
        return list(executor.map(func, items, chunksize=config.chunksize))
