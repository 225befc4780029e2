"""Process-wide configuration: StrListConfig and initialization."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from klaw_strlist._logging import configure_logging, get_logger, log_enabled

__all__ = [
    'StrListConfig',
    'get_config',
    'init',
]

log = get_logger(__name__)

_TRUE_VALUES = frozenset({'1', 'true', 'yes', 'on'})
_FALSE_VALUES = frozenset({'0', 'false', 'no', 'off'})


@dataclass(frozen=True)
class StrListConfig:
    """Configuration for klaw-strlist.

    Attributes:
        log_level: Logging level (e.g., "DEBUG", "INFO"). None = leave logging
            unconfigured.
        json_logs: Render log events as JSON lines rather than console output.
            Only used when log_level is set.
    """

    log_level: str | None = None
    json_logs: bool = True


# Global configuration (set by init())
_config: StrListConfig | None = None


def _env_flag(name: str, default: bool) -> bool:
    """Read a boolean flag from the environment."""
    raw = os.environ.get(name, '').strip().lower()
    if not raw:
        return default
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    logging.warning("Unknown %s value '%s', defaulting to %s", name, raw, default)
    return default


def init(
    log_level: str | None = None,
    json_logs: bool | None = None,
) -> StrListConfig:
    """Initialize klaw-strlist with the given configuration.

    Unset arguments fall back to the environment, then to defaults:

    - ``KLAW_STRLIST_LOG_LEVEL``: a logging level name
    - ``KLAW_STRLIST_LOG_JSON``: "1"/"true"/"yes"/"on" or "0"/"false"/"no"/"off"

    Args:
        log_level: Logging level. Configures logging when set.
        json_logs: JSON (True) or console (False) log rendering.

    Returns:
        The StrListConfig that was set.

    Example:
        ```python
        from klaw_strlist import init

        init(log_level='DEBUG', json_logs=False)
        ```
    """
    global _config  # noqa: PLW0603

    if log_level is None:
        log_level = os.environ.get('KLAW_STRLIST_LOG_LEVEL') or None
    if json_logs is None:
        json_logs = _env_flag('KLAW_STRLIST_LOG_JSON', True)

    _config = StrListConfig(log_level=log_level, json_logs=json_logs)

    if log_level is not None:
        configure_logging(log_level, json_output=json_logs)

    if log_enabled(logging.INFO, __name__):
        log.info('strlist.configured', log_level=log_level, json_logs=json_logs)
    return _config


def get_config() -> StrListConfig:
    """Get the current configuration, initializing from the environment if needed."""
    if _config is None:
        return init()
    return _config
