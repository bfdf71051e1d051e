"""
Structured logging configuration.

This module provides utilities for configuring and using structured logging.
Library code logs through the standard ``logging`` module; the runtime's own
voice (nano-command output, listener failures) goes through structlog, which
is routed into the same stdlib handlers.
"""

from __future__ import annotations

import logging

import structlog

from xpell_runtime.core.config.app_config import LogFormat, LoggingConfig

DEFAULT_LOG_FORMAT = "%(asctime)s [%(levelname)-8s] %(name)s:%(lineno)d %(message)s"


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger.

    Args:
        name: Optional logger name

    Returns:
        A structured logger
    """
    return structlog.get_logger(name)  # type: ignore


def configure_logging(config: LoggingConfig | None = None) -> None:
    """Configure stdlib logging and structlog from a LoggingConfig.

    Args:
        config: Logging configuration; defaults are used when omitted
    """
    config = config or LoggingConfig()
    level = getattr(logging, config.level.value, logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if config.log_file:
        handlers.append(logging.FileHandler(config.log_file))

    formatter = logging.Formatter(DEFAULT_LOG_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)

    logging.basicConfig(level=level, handlers=handlers, force=True)

    renderer: structlog.types.Processor
    if config.format == LogFormat.JSON:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
