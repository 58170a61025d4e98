"""Structured logging configuration.

Outputs either JSON or console format through structlog on top of the standard
library logging module. Configuration is passed explicitly or read from
``classforge.config.Settings``.

Usage:
    from classforge.logging_config import get_logger, setup_logging

    setup_logging()  # Uses settings defaults for format/level
    logger = get_logger(__name__)
    logger.info("class_saved", class_name="python", class_id=1)
"""

import logging
import sys
from typing import Literal

import structlog
from structlog.types import Processor

from classforge.config import get_settings


def setup_logging(
    log_format: Literal["json", "console"] | None = None,
    log_level: str | None = None,
) -> None:
    """Configure structured logging with structlog.

    Args:
        log_format: Output format - "json" for machine consumption, "console" for humans.
                   Falls back to ``Settings.log_format``.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
                  Falls back to ``Settings.log_level``.
    """
    settings = get_settings()
    log_format = log_format or settings.log_format
    log_level = log_level or settings.log_level

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=numeric_level,
        force=True,
    )

    processors: list[Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=False),
        structlog.contextvars.merge_contextvars,
        structlog.processors.CallsiteParameterAdder(
            {
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            }
        ),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer(sort_keys=False))
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.plain_traceback,
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger()
    logger.debug("logging_initialized", log_format=log_format, log_level=log_level)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger instance.

    Args:
        name: Optional logger name, usually the caller's ``__name__``.

    Returns:
        Configured structlog logger instance.
    """
    return structlog.get_logger(name)
