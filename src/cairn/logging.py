"""Structured logging configuration for Cairn.

Provides JSON-formatted structured logging using structlog.
Supports both development (colored console) and production (JSON) modes.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from structlog.typing import Processor

_configured = False


def configure_logging(
    level: str | None = None,
    format: str | None = None,
) -> None:
    """Configure structured logging for Cairn.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Defaults to CAIRN_LOG_LEVEL.
        format: Output format - "json" for production, "text" for development.
            Defaults to CAIRN_LOG_FORMAT.

    Example:
        ```python
        from cairn.logging import configure_logging, get_logger

        configure_logging(level="DEBUG", format="text")
        logger = get_logger()
        logger.info("Solving pyramid", rows=4)
        ```
    """
    global _configured

    if level is None or format is None:
        from cairn.config import settings

        level = level or settings.log_level
        format = format or settings.log_format

    log_level = getattr(logging, level.upper(), logging.INFO)

    # stdlib records from the engine modules go through the same stream
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )
    logging.getLogger("cairn").setLevel(log_level)

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if format.lower() == "json":
        processors: list[Processor] = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=True),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    _configured = True


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name. Uses calling module name if None.

    Returns:
        A bound structlog logger.
    """
    if not _configured:
        configure_logging()

    return structlog.get_logger(name)  # type: ignore[no-any-return]


def bind_context(**kwargs: object) -> None:
    """Bind context variables to all subsequent log messages.

    Args:
        **kwargs: Key-value pairs to bind to the logging context.
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    """Remove specific keys from the logging context.

    Args:
        *keys: Keys to remove from context.
    """
    structlog.contextvars.unbind_contextvars(*keys)


@contextmanager
def propagation_context(**kwargs: object) -> Iterator[None]:
    """Tag every log record inside the block with the given values.

    Keys bound here are removed on exit, even when the block raises, so one
    solve run never leaks its tags into the next.

    Example:
        ```python
        from cairn.logging import get_logger, propagation_context

        with propagation_context(puzzle="four_row", rows=4):
            get_logger(__name__).info("Solving")  # Includes puzzle and rows
        ```
    """
    bind_context(**kwargs)
    try:
        yield
    finally:
        unbind_context(*kwargs)
