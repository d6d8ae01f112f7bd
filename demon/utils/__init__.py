"""Logging for demon — structlog, on stderr.

stdout belongs to the live table, so every log line goes to stderr. Level
and format come from ``settings`` unless the caller overrides them.
"""

import logging
import sys
from typing import TextIO

import structlog
from demon.config import settings


def level_for(name: str) -> int:
    """Numeric level for a level name; unknown names fall back to WARNING."""
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.WARNING


def renderer_for(log_format: str, stream: TextIO) -> structlog.types.Processor:
    """JSON lines for 'json', coloured console output when ``stream`` is a tty."""
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=stream.isatty())


def setup_logging(
    log_level: str | None = None,
    log_format: str | None = None,
    stream: TextIO | None = None,
) -> None:
    """Configure structlog once for the whole process."""
    stream = stream or sys.stderr
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer_for(log_format or settings.log_format, stream),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            level_for(log_level or settings.log_level)
        ),
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """A structlog logger, bound to ``component=name`` when given."""
    log = structlog.get_logger()
    return log.bind(component=name) if name else log
