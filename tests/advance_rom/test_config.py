"""Tests for environment configuration."""

from __future__ import annotations

import importlib

import pytest

from advance_rom import config


@pytest.fixture(autouse=True)
def restore_config(monkeypatch: pytest.MonkeyPatch):
    """Reload the module from a clean environment after each test."""
    yield
    monkeypatch.delenv("ADVANCE_ROM_LOG_LEVEL", raising=False)
    monkeypatch.delenv("ADVANCE_ROM_WORKERS", raising=False)
    importlib.reload(config)


def test_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Settings come from the environment, case-insensitively for levels."""
    monkeypatch.setenv("ADVANCE_ROM_LOG_LEVEL", "debug")
    monkeypatch.setenv("ADVANCE_ROM_WORKERS", "3")
    importlib.reload(config)

    assert config.LOG_LEVEL == "DEBUG"
    assert config.WORKERS == 3


def test_invalid_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    """Unknown log levels fail at import."""
    monkeypatch.setenv("ADVANCE_ROM_LOG_LEVEL", "LOUD")
    with pytest.raises(ValueError, match="ADVANCE_ROM_LOG_LEVEL"):
        importlib.reload(config)


def test_invalid_workers(monkeypatch: pytest.MonkeyPatch) -> None:
    """Worker counts must be positive."""
    monkeypatch.setenv("ADVANCE_ROM_WORKERS", "0")
    with pytest.raises(ValueError, match="ADVANCE_ROM_WORKERS"):
        importlib.reload(config)
