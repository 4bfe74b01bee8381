"""
Diagnostic logging for xcexport.

The workflow talks to the user through leveled ``[INFO]``/``[WARN]`` lines on
stdout (see :mod:`xcexport.ui.console`). This module configures the separate
diagnostic channel: structlog events on stderr, quiet (WARNING) unless
``--verbose`` or ``XCEXPORT_LOG_LEVEL`` asks for more. Events are rendered for
humans on a terminal and as JSON lines when stderr is redirected.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, TextIO

import structlog
from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from .config import Config

DEFAULT_LEVEL = "WARNING"


def _renderer(stream: TextIO) -> list[structlog.types.Processor]:
    if stream.isatty():
        return [structlog.dev.ConsoleRenderer(colors=True)]
    return [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]


def setup_logging(config: Config | None = None, stream: TextIO | None = None) -> None:
    """Configure diagnostic logging.

    Args:
        config: Resolved configuration; only ``log_level`` is used. If None,
            WARNING is used.
        stream: Destination for structlog events (stderr by default)
    """
    level_name = config.log_level if config else DEFAULT_LEVEL
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.WARNING
    stream = stream or sys.stderr

    # Third-party stdlib loggers share the same destination and level.
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[
            RichHandler(
                console=Console(file=stream),
                show_path=False,
                rich_tracebacks=True,
                tracebacks_show_locals=level <= logging.DEBUG,
            )
        ],
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            *_renderer(stream),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)
    """
    return structlog.get_logger(name)


def bind_context(**kwargs: object) -> None:
    """Attach key-value pairs (e.g. the current workflow step) to later events."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Drop everything bound with :func:`bind_context`."""
    structlog.contextvars.clear_contextvars()
