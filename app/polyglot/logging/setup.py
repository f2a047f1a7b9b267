"""Structlog configuration and logger setup.

Every polyglot logger writes through the standard library logger named
"polyglot", so applications control the library's verbosity with the
usual logging tools. Rendering is console output in development and JSON
in production.

Usage:
    from polyglot.logging import configure_logging, get_module_logger

    # Reconfigure with explicit values (done once on import otherwise)
    configure_logging(log_level="DEBUG")

    logger = get_module_logger()
    logger.info("translations_loaded", locale="fr", count=42)

Dependencies:
    - polyglot.configuration.Settings
"""

import inspect
import logging
import sys
from typing import Any, List, Optional

import structlog
from structlog.stdlib import BoundLogger

from polyglot.configuration import settings

LIBRARY_LOGGER_NAME = "polyglot"


def _is_test_environment() -> bool:
    """Detect if running in a test environment.

    Returns:
        True if pytest is in sys.modules, False otherwise
    """
    return "pytest" in sys.modules


def _build_processors(prod_mode: bool) -> List[Any]:
    processors: List[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.LINENO,
                structlog.processors.CallsiteParameter.FUNC_NAME,
            ]
        ),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if prod_mode:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())
    return processors


def _resolve_level(log_level: Optional[str]) -> int:
    name = (log_level or settings.LOG_LEVEL).upper()
    return getattr(logging, name, logging.INFO)


def configure_logging(
    log_level: Optional[str] = None,
    is_production: Optional[bool] = None,
) -> BoundLogger:
    """Configure structured logging for the library.

    Args:
        log_level: Level name for the "polyglot" logger (DEBUG, INFO, ...).
            Defaults to settings.LOG_LEVEL.
        is_production: JSON output when True, console output otherwise.
            Defaults to settings.is_production.

    Returns:
        Logger bound to the "polyglot" standard library logger.
    """
    library_logger = logging.getLogger(LIBRARY_LOGGER_NAME)

    if _is_test_environment():
        # Silent under pytest; processors stay minimal
        library_logger.setLevel(logging.CRITICAL + 1)
        processors: List[Any] = [
            structlog.stdlib.add_log_level,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ]
    else:
        prod_mode = is_production if is_production is not None else settings.is_production
        processors = _build_processors(prod_mode)
        # No-op when the host application already configured logging
        logging.basicConfig(format="%(message)s")
        library_logger.setLevel(_resolve_level(log_level))

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    return structlog.stdlib.get_logger(LIBRARY_LOGGER_NAME)


# Module-level logger (auto-configured on import)
logger: BoundLogger = configure_logging()


def _caller_module_name() -> Optional[str]:
    """Module name of the code calling a public logger factory."""
    frame = inspect.currentframe()
    factory_frame = frame.f_back if frame is not None else None
    caller = factory_frame.f_back if factory_frame is not None else None
    if caller is None:
        return None
    return caller.f_globals.get("__name__")


def get_logger(name: Optional[str] = None) -> BoundLogger:
    """Get a logger bound to a name.

    Args:
        name: Logger name (default: the calling module's name).

    Returns:
        Logger with a ``logger_name`` context key.
    """
    return logger.bind(logger_name=name or _caller_module_name() or "unknown")


def get_module_logger() -> BoundLogger:
    """Get a logger for the calling module with full path context.

    Example:
        # In polyglot/i18n/translator.py
        logger = get_module_logger()
        # context: {"component": "translator", "module_path": "polyglot.i18n.translator"}
    """
    module_name = _caller_module_name()
    if module_name is None:
        return logger.bind(component="unknown")
    return logger.bind(
        component=module_name.rsplit(".", 1)[-1],
        module_path=module_name,
    )


def get_null_logger() -> BoundLogger:
    """Get a logger that discards every event.

    Used as the default sink for components whose diagnostics are only
    wanted in debug mode.
    """
    return structlog.wrap_logger(
        structlog.ReturnLogger(),
        processors=[],
        wrapper_class=structlog.stdlib.BoundLogger,
    )
