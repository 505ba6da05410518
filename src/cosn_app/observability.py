"""Logging configuration for the command-line application."""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager

import structlog
from structlog.typing import Processor


def configure_logging(log_level: str = "INFO", *, dev_mode: bool = False) -> None:
    """Configure structlog on top of the standard library logging module.

    Args:
        log_level: Name of the minimum level to emit (e.g. "DEBUG", "INFO").
        dev_mode: Render human-readable console output instead of JSON lines.
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")  # noqa: TRY003

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)

    renderer: Processor = (
        structlog.dev.ConsoleRenderer()
        if dev_mode
        else structlog.processors.JSONRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


@contextmanager
def log_bind(**kwargs: object) -> Iterator[None]:
    """Bind context variables to every log line emitted inside the block."""
    with structlog.contextvars.bound_contextvars(**kwargs):
        yield
