"""Logging configuration.

Structured logs go to stderr through structlog on top of stdlib logging.

Usage:
    from readthrough_cache.log_config import configure_logging, get_logger

    configure_logging(level="DEBUG", log_format="json")
    log = get_logger("readthrough_cache.demo")
    log.info("demo.started", files=2)
"""

import logging
import sys

import structlog


def configure_logging(level: str = "INFO", log_format: str = "console") -> None:
    """Configure stdlib logging and structlog.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_format: "console" for human-readable lines, "json" for JSON lines
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.handlers = []

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(stderr_handler)
    root_logger.setLevel(log_level)

    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


def get_logger(name: str = "readthrough_cache") -> structlog.stdlib.BoundLogger:
    """Get a logger instance.

    Args:
        name: Logger name

    Returns:
        BoundLogger instance
    """
    return structlog.get_logger(name)


__all__ = ["configure_logging", "get_logger"]
