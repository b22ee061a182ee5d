"""Structured logging configuration for bookstyle.

Provides structlog setup and a context manager that binds the document being
worked on to every log message emitted inside it.
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from collections.abc import Iterator


def configure_logging(*, debug: bool = False, json_logs: bool = False) -> None:
    """Configure structured logging for the application.

    Logs are written to stderr so command output on stdout stays clean.

    Args:
        debug: Enable debug level logging.
        json_logs: Output logs as JSON (for production).
    """
    processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if json_logs:
        processors.extend(
            [
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer(),
            ]
        )
    else:
        processors.extend(
            [
                structlog.processors.ExceptionPrettyPrinter(),
                structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
            ]
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG if debug else logging.INFO),
        context_class=dict,
        # sys.stderr is looked up per logger so redirected streams are honored.
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=False,
    )


def _stderr_logger(*args: object) -> structlog.PrintLogger:
    return structlog.PrintLogger(file=sys.stderr)


@contextmanager
def bound_document(book_id: str, **context: object) -> Iterator[None]:
    """Bind a book id (and extra context) to all log messages in the block.

    Args:
        book_id: The book being worked on.
        **context: Additional key-value pairs to bind.
    """
    structlog.contextvars.bind_contextvars(book_id=book_id, **context)
    try:
        yield
    finally:
        structlog.contextvars.unbind_contextvars("book_id", *context)
