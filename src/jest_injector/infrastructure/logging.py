"""Structured logging configuration.

Domain services log through the standard library under the
``jest_injector`` logger; the facade logs through structlog. Both end up
in one handler rendered by structlog, so a resolution failure and the
binding events around it share a format.

structlog loggers are wrapped around stdlib loggers rather than taken
from the global structlog configuration, so nothing is emitted until the
application (or ``setup_logging``) attaches a handler and a level.
"""

from __future__ import annotations

import logging
import sys
from typing import IO, Any

import structlog
from structlog.types import Processor

LOGGER_NAME = "jest_injector"


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def setup_logging(
    level: str = "INFO",
    log_format: str = "json",
    stream: IO[str] | None = None,
) -> logging.Handler:
    """
    Route injector logs through a single structlog-rendered handler.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Log format ('json' or 'console')
        stream: Output stream, stdout by default

    Returns:
        The handler installed on the ``jest_injector`` logger
    """
    numeric_level = getattr(logging, level.upper())

    renderer: Processor
    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_shared_processors(),
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    root = logging.getLogger(LOGGER_NAME)
    for existing in list(root.handlers):
        if getattr(existing, "_jest_injector", False):
            root.removeHandler(existing)
    handler._jest_injector = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    root.setLevel(numeric_level)
    root.propagate = False
    return handler


def get_logger(name: str | None = None, **initial_context: Any) -> structlog.stdlib.BoundLogger:
    """
    Get a bound logger under the ``jest_injector`` hierarchy.

    Args:
        name: Logger name (module name typically)
        **initial_context: Initial context to bind to the logger

    Returns:
        A bound structlog logger
    """
    if name is None:
        name = LOGGER_NAME
    elif not name.startswith(LOGGER_NAME):
        name = f"{LOGGER_NAME}.{name}"
    logger = structlog.wrap_logger(
        logging.getLogger(name),
        processors=[
            structlog.stdlib.filter_by_level,
            *_shared_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
    )
    if initial_context:
        logger = logger.bind(**initial_context)
    return logger
