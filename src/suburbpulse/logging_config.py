"""
Logging Configuration Module

All package loggers hang off the ``suburbpulse`` logger, which is configured
from ``LoggingConfig`` (SUBURBPULSE_LOG_LEVEL / SUBURBPULSE_LOG_FILE).

Usage:
    from suburbpulse.logging_config import setup_logging, get_logger

    setup_logging(level="DEBUG")  # CLI override, replaces earlier setup
    logger = get_logger(__name__)
    logger.info("Aggregation started")
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional

from suburbpulse.config import LoggingConfig, get_config

PACKAGE_LOGGER = "suburbpulse"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Request lines from the Flask dev server
QUIET_LOGGERS = ("werkzeug",)

_logging_configured = False


def _resolve_settings(level: Optional[str], log_file: Optional[str]) -> LoggingConfig:
    """Merge explicit overrides onto the configured logging settings."""
    configured = get_config().logging
    if level is None and log_file is None:
        return configured
    # LoggingConfig validates the level and falls back to INFO
    return LoggingConfig(
        level=(level or configured.level).upper(),
        log_file=log_file or configured.log_file,
    )


def _build_handlers(settings: LoggingConfig) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if settings.log_file:
        log_path = Path(settings.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))
    return handlers


def _close_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def setup_logging(
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    force: bool = False,
) -> None:
    """Configure the package logger.

    The first call wins unless ``force`` is set or an explicit ``level`` or
    ``log_file`` is passed. Modules grab their loggers at import time, so a
    CLI flag parsed afterwards still has to be able to reconfigure.

    Args:
        level: Log level name. Defaults to SUBURBPULSE_LOG_LEVEL.
        log_file: Extra file destination. Defaults to SUBURBPULSE_LOG_FILE.
        force: Rebuild handlers even if nothing was overridden.
    """
    global _logging_configured

    explicit = level is not None or log_file is not None
    if _logging_configured and not (force or explicit):
        return

    settings = _resolve_settings(level, log_file)
    numeric_level = getattr(logging, settings.level, logging.INFO)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    _close_handlers(package_logger)
    package_logger.setLevel(numeric_level)
    for handler in _build_handlers(settings):
        handler.setLevel(numeric_level)
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)
    package_logger.propagate = False

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _logging_configured = True


def get_logger(name: str) -> logging.Logger:
    """Logger under the package namespace, configuring defaults on first use."""
    if not _logging_configured:
        setup_logging()

    if not name.startswith(PACKAGE_LOGGER):
        name = f"{PACKAGE_LOGGER}.{name}"

    return logging.getLogger(name)


def reset_logging() -> None:
    """Drop and close the package handlers (used by tests)."""
    global _logging_configured
    _logging_configured = False
    _close_handlers(logging.getLogger(PACKAGE_LOGGER))
