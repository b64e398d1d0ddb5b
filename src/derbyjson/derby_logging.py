"""Structured logging for derbyjson."""

import logging
import sys
from typing import Optional

import structlog
from structlog.stdlib import LoggerFactory

from .config import LogFormat, get_settings


def configure_logging(level: Optional[str] = None, log_format: Optional[LogFormat] = None) -> None:
    """Configure structlog on top of stdlib logging.

    The package never calls this itself; applications that want derbyjson's
    debug output call it once at startup. Arguments override settings.
    """
    settings = get_settings()
    level = (level or settings.LOG_LEVEL).upper()
    log_format = LogFormat(log_format or settings.LOG_FORMAT)

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if log_format == LogFormat.JSON:
        processors.append(structlog.processors.JSONRenderer())
    elif log_format == LogFormat.STRUCTURED:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:  # text format
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        logger_factory=LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level),
    )
    logging.getLogger("derbyjson").setLevel(getattr(logging, level))


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger bound to the stdlib logger ``name``.

    Wrapping the stdlib logger keeps output subject to stdlib levels and
    handlers even when structlog has not been configured.
    """
    return structlog.wrap_logger(logging.getLogger(name))
