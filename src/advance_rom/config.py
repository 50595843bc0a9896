"""
Global configuration for the ROM tooling.

This module contains environment-specific settings read once at import time.
"""

import os

_SUPPORTED_LOG_LEVELS: list[str] = ["DEBUG", "INFO", "WARNING", "ERROR"]

LOG_LEVEL = os.environ.get("ADVANCE_ROM_LOG_LEVEL", "INFO").upper()
"""Default log level for the command line ('DEBUG', 'INFO', 'WARNING' or 'ERROR')."""

if LOG_LEVEL not in _SUPPORTED_LOG_LEVELS:
    raise ValueError(
        f"Invalid ADVANCE_ROM_LOG_LEVEL environment variable: '{LOG_LEVEL}'. "
        f"Supported values: {_SUPPORTED_LOG_LEVELS}"
    )

_workers = os.environ.get("ADVANCE_ROM_WORKERS")

WORKERS: int | None = int(_workers) if _workers else None
"""Worker processes for batch jobs. None lets the executor pick (one per CPU)."""

if WORKERS is not None and WORKERS < 1:
    raise ValueError(f"Invalid ADVANCE_ROM_WORKERS environment variable: {WORKERS}. Must be >= 1")
