"""
Logging configuration.

Sets up the standard library logging tree for the API and the worker.
Call sites keep using plain ``logging`` loggers with ``extra={...}``;
structlog's ``ProcessorFormatter`` renders those records, either as
readable console lines or as one JSON object per line.
"""

import logging
import sys

import structlog
from structlog.typing import Processor

# Runs on every stdlib record before the final renderer
_PRE_CHAIN: list[Processor] = [
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.ExtraAdder(),
    structlog.processors.TimeStamper(fmt="iso", utc=True),
]


def _build_formatter(json_format: bool) -> structlog.stdlib.ProcessorFormatter:
    if json_format:
        processors: list[Processor] = [
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False, default=str),
        ]
    else:
        processors = [
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()),
        ]
    return structlog.stdlib.ProcessorFormatter(
        processors=processors,
        foreign_pre_chain=_PRE_CHAIN,
    )


def init_logging(level: str = "INFO", json_format: bool = False) -> None:
    """
    Configure the root logger.

    Calling it again replaces the previous handlers.

    Args:
        level: Log level name.
        json_format: Emit JSON lines instead of console output.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(_build_formatter(json_format))

    root = logging.getLogger()
    if root.hasHandlers():
        root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level.upper())

    # Third-party libraries are noisy at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a module logger.

    Args:
        name: Logger name, usually ``__name__``.

    Returns:
        Logger instance.
    """
    return logging.getLogger(name)
