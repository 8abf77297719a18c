"""Logging configuration for shopsim.

Modules log through ``structlog.get_logger(__name__)`` with key-value
context. structlog renders each event and hands it to the standard
library logger of the same name, so handlers and levels are managed in
one place. Log lines go to stderr so they never interleave with the
menu, which the CLI writes to stdout.
"""

from __future__ import annotations

import logging
import sys

import structlog

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def setup_stdlib_logging(level: int) -> None:
    """Send records to stderr unless the host already installed handlers."""
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)
    logging.getLogger("shopsim").setLevel(level)


def setup_structlog() -> None:
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def configure_logging(level: str = "WARNING") -> None:
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level!r}")

    setup_stdlib_logging(numeric)
    setup_structlog()
