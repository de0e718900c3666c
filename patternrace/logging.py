"""Centralized logging configuration for patternrace.

All modules obtain loggers through :func:`get_logger` so they inherit from the
single ``patternrace`` root logger. Log records go to stderr; stdout is
reserved for the simulation reports.
"""

import logging
import os
import sys
from typing import Optional

ROOT_LOGGER_NAME = "patternrace"

# Environment variable used to hand the parent log level to worker processes
LOG_LEVEL_ENV = "PATTERNRACE_LOG_LEVEL"

_ROOT_LOGGER_CONFIGURED = False


def setup_root_logger(
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> None:
    """Attach a single handler to the package root logger.

    Repeated calls are no-ops until :func:`reset_logging` is called.

    Args:
        level: Logging level (default: INFO).
        format_string: Custom format string (optional).
        handler: Custom handler (optional, defaults to a stderr StreamHandler).
    """
    global _ROOT_LOGGER_CONFIGURED

    if _ROOT_LOGGER_CONFIGURED:
        return

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    if handler is None:
        handler = logging.StreamHandler(sys.stderr)

    handler.setFormatter(logging.Formatter(format_string))
    root_logger.addHandler(handler)

    # Propagate so pytest's caplog sees package records
    root_logger.propagate = True

    _ROOT_LOGGER_CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger that inherits from the package root logger.

    Args:
        name: Logger name (typically ``__name__`` of the calling module).

    Returns:
        Logger instance with level NOTSET so the root level applies.
    """
    setup_root_logger()

    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    return logger


def set_global_log_level(level: int) -> None:
    """Set the log level for every patternrace logger and its handlers."""
    setup_root_logger()

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    for handler in root_logger.handlers:
        handler.setLevel(level)


def current_level_name() -> str:
    """Return the effective level of the package root logger as a name."""
    level = logging.getLogger(ROOT_LOGGER_NAME).getEffectiveLevel()
    return logging.getLevelName(level)


def apply_level_from_env() -> None:
    """Apply the level stored in ``PATTERNRACE_LOG_LEVEL``, if any.

    Used by worker process initializers so children log at the parent's level.
    """
    env_level = os.getenv(LOG_LEVEL_ENV)
    if env_level:
        set_global_log_level(getattr(logging, env_level.upper(), logging.INFO))


def enable_debug_logging() -> None:
    """Enable debug logging for the entire package."""
    set_global_log_level(logging.DEBUG)


def disable_debug_logging() -> None:
    """Disable debug logging, set to INFO level."""
    set_global_log_level(logging.INFO)


def reset_logging() -> None:
    """Reset logging configuration (mainly for testing)."""
    global _ROOT_LOGGER_CONFIGURED
    _ROOT_LOGGER_CONFIGURED = False

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)


setup_root_logger()
