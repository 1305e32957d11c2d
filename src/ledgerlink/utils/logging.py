"""Structured logging with structlog.

Usage:
    import structlog
    logger = structlog.get_logger(__name__)
    logger.info("statement_imported", imported=3, skipped=1)
"""

import logging
import sys

import structlog


def setup_logging(log_level: str = "WARNING", json_output: bool = False) -> None:
    """Configure structured logging for the application.

    Logs go to stderr so command output on stdout stays parseable.

    Args:
        log_level: Python log level string (DEBUG, INFO, WARNING, ERROR).
        json_output: If True, render JSON lines. If False, use the console renderer.
    """
    processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, log_level.upper(), logging.WARNING),
        force=True,
    )
