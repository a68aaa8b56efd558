"""
Logging configuration for fitcoach.
"""

import sys
import logging
from typing import Optional

import structlog

from ..exceptions import ConfigurationError
from .settings import DecoderSettings, LOG_FORMATS, get_settings


def configure_structured_logging(
    log_level: str = "INFO",
    log_format: str = "json",
    stream=None,
) -> None:
    """
    Configure structured logging for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_format: Format type ('json' or 'console')
        stream: Output stream (defaults to stdout)
    """
    if log_format not in LOG_FORMATS:
        raise ConfigurationError(
            f"Unsupported log format: {log_format}", {"supported": list(LOG_FORMATS)}
        )

    logging.basicConfig(
        format="%(message)s",
        stream=stream or sys.stdout,
        level=getattr(logging, log_level.upper(), logging.INFO),
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if log_format == "console":
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    """
    Get a configured logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


def setup_logging(settings: Optional[DecoderSettings] = None) -> structlog.stdlib.BoundLogger:
    """
    Setup logging from decoder settings.

    Returns:
        Main fitcoach logger
    """
    settings = settings or get_settings()
    configure_structured_logging(
        log_level=settings.log_level,
        log_format=settings.resolved_log_format,
    )
    return get_logger("fitcoach")
