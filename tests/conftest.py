"""Pytest configuration and shared fixtures for klaw-strlist tests."""

from __future__ import annotations

import logging

import pytest

import klaw_strlist._config as config_module
from klaw_strlist import StrListBuf
from klaw_strlist._logging import PACKAGE_LOGGER


@pytest.fixture
def fresh_config(monkeypatch: pytest.MonkeyPatch) -> None:
    """Start from an uninitialized config with no environment overrides.

    monkeypatch restores whatever config was active once the test ends.
    """
    monkeypatch.delenv('KLAW_STRLIST_LOG_JSON', raising=False)
    monkeypatch.delenv('KLAW_STRLIST_LOG_LEVEL', raising=False)
    monkeypatch.setattr(config_module, '_config', None)


@pytest.fixture
def abc_buf() -> StrListBuf:
    """Buffer holding ['a', 'bb', 'c']."""
    buf = StrListBuf()
    buf.push('a')
    buf.push('bb')
    buf.push('c')
    return buf


@pytest.fixture
def empty_buf() -> StrListBuf:
    return StrListBuf()


@pytest.fixture
def restore_package_logger() -> None:
    """configure_logging() replaces the package logger's handler; put it back."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    handlers, level = logger.handlers[:], logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
