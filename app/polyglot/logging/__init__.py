"""Structured logging infrastructure.

Centralized logging configuration and utilities using structlog.

Public API:
    - configure_logging(): Initialize logging
    - get_logger(): Get a logger instance with a specific name
    - get_module_logger(): Get a logger for the calling module
    - get_null_logger(): Get a logger that discards everything

Example:
    from polyglot.logging import get_module_logger

    logger = get_module_logger()
    logger.info("module_initialized")
"""

from polyglot.logging.setup import (
    configure_logging,
    get_logger,
    get_module_logger,
    get_null_logger,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "get_module_logger",
    "get_null_logger",
]
