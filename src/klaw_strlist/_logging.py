"""Logging for klaw-strlist.

Events are structlog events routed through the stdlib ``klaw_strlist``
logger hierarchy. Importing the package configures nothing, and call sites
guard on ``log_enabled`` so an application that never turns logging on pays
nothing and sees nothing.

``configure_logging`` attaches one stderr handler to the package logger,
rendering JSON lines or console output through structlog's
ProcessorFormatter.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

__all__ = [
    'PACKAGE_LOGGER',
    'configure_logging',
    'get_logger',
    'log_enabled',
]

PACKAGE_LOGGER = 'klaw_strlist'


def _pre_chain() -> list[Any]:
    import structlog

    return [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt='iso'),
    ]


def configure_logging(level: str = 'INFO', *, json_output: bool = True) -> None:
    """Send klaw-strlist events to stderr at ``level``.

    Calling it again replaces the handler installed by the previous call.
    Records still propagate to the root logger.

    Args:
        level: Logging level name ("DEBUG", "INFO", ...).
        json_output: Render JSON lines instead of console output.
    """
    import structlog

    structlog.configure(
        processors=[
            *_pre_chain(),
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    if json_output:
        renderer: Any = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_pre_chain(),
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))


def get_logger(name: str | None = None) -> Any:
    """Lazily bound structlog logger for module ``name``."""
    import structlog

    return structlog.get_logger(name)


def log_enabled(level: int, name: str | None = None) -> bool:
    """Whether the stdlib logger ``name`` would emit records at ``level``."""
    return logging.getLogger(name).isEnabledFor(level)
