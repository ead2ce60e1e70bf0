"""
structlog setup shared by the CLI and the codec.

The core modules only ever call get_logger(); configure_logging() is
invoked once at the process edge.
"""
import logging
import os
import sys
from typing import Optional

import structlog


def configure_logging(level: Optional[str] = None, format_json: Optional[bool] = None) -> None:
    """
    Configure structlog through the standard library logging bridge.

    Args:
        level: Logging level name; defaults to $ORDER_UID_LOG_LEVEL or WARNING
        format_json: Render JSON lines; defaults to $ORDER_UID_LOG_JSON
    """
    if level is None:
        level = os.getenv("ORDER_UID_LOG_LEVEL", "WARNING")
    if format_json is None:
        format_json = os.getenv("ORDER_UID_LOG_JSON", "false").lower() == "true"

    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        stream=sys.stderr,
        format="%(message)s",
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def _configure_defaults() -> None:
    # Until configure_logging() runs, route through stdlib logging so an
    # unconfigured process inherits its WARNING threshold and stays quiet.
    if structlog.is_configured():
        return
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.KeyValueRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.stdlib.get_logger(name)


_configure_defaults()
