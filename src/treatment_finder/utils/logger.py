"""
Logging Configuration

All module loggers live under the ``src.treatment_finder`` namespace, so one
configured package logger (rotating file plus console) covers the whole
pipeline. Request-level helpers print framed start/end banners.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from datetime import datetime
from typing import List, Optional

from src.treatment_finder.config import LoggingConfig

PACKAGE_LOGGER = "src.treatment_finder"
LOG_FILE_NAME = "treatment_finder.log"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that are too chatty at INFO
NOISY_LOGGERS = ("urllib3", "requests")

# Handlers installed by configure_logging, replaced on reconfiguration
_installed_handlers: List[logging.Handler] = []


def _resolve_level(settings: LoggingConfig, level_override: Optional[str]) -> int:
    name = (level_override or settings.level or "INFO").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def configure_logging(
    settings: Optional[LoggingConfig] = None,
    level_override: Optional[str] = None,
    to_file: bool = True,
    to_console: bool = True
) -> logging.Logger:
    """
    Configure the package logger from the logging settings.

    Calling it again swaps out the handlers from the previous call, so a
    CLI ``--log-level`` can re-apply the level after config loading.

    Args:
        settings: Level, directory and rotation limits (defaults if omitted)
        level_override: Level name that wins over ``settings.level``
        to_file: Write ``treatment_finder.log`` under ``settings.log_dir``
        to_console: Also log to stderr

    Returns:
        The package logger
    """
    settings = settings or LoggingConfig()
    level = _resolve_level(settings, level_override)
    package_logger = logging.getLogger(PACKAGE_LOGGER)

    for handler in _installed_handlers:
        package_logger.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    log_file = None
    if to_file:
        os.makedirs(settings.log_dir, exist_ok=True)
        log_file = os.path.join(settings.log_dir, LOG_FILE_NAME)
        _installed_handlers.append(RotatingFileHandler(
            log_file,
            maxBytes=settings.max_file_size,
            backupCount=settings.backup_count
        ))
    if to_console:
        _installed_handlers.append(logging.StreamHandler())

    for handler in _installed_handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)
    package_logger.setLevel(level)

    for noisy in NOISY_LOGGERS:
        logging.getLogger(noisy).setLevel(logging.WARNING)

    package_logger.debug(f"Logging configured at {logging.getLevelName(level)}, file: {log_file or 'disabled'}")
    return package_logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Package logger, or a child of it when ``name`` is given."""
    if not name:
        return logging.getLogger(PACKAGE_LOGGER)
    if name.startswith(PACKAGE_LOGGER):
        return logging.getLogger(name)
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")


def log_request_start(request_id: str, conditions: List[str], logger: Optional[logging.Logger] = None):
    """Log the start of a treatment comparison request."""
    log = logger or get_logger()
    log.info("=" * 60)
    log.info("TREATMENT COMPARISON STARTED")
    log.info(f"  Request ID: {request_id}")
    log.info(f"  Conditions: {', '.join(conditions)}")
    log.info(f"  Started At: {datetime.now().isoformat()}")
    log.info("=" * 60)


def log_request_end(request_id: str, results: dict, logger: Optional[logging.Logger] = None):
    """Log the end of a treatment comparison request."""
    log = logger or get_logger()
    log.info("=" * 60)
    log.info("TREATMENT COMPARISON COMPLETED")
    log.info(f"  Request ID: {request_id}")
    log.info(f"  Conditions: {results.get('conditions', 0)}")
    log.info(f"  Complete: {results.get('complete', 0)}")
    log.info(f"  Fallback: {results.get('fallback', 0)}")
    log.info(f"  Completed At: {datetime.now().isoformat()}")
    log.info("=" * 60)


def log_condition_result(
    condition: str,
    status: str,
    option_count: int = 0,
    error: Optional[str] = None,
    logger: Optional[logging.Logger] = None
):
    """Log the aggregation result for one condition."""
    log = logger or get_logger()
    if status == "complete":
        log.info(f"[OK] {condition}: {option_count} options")
    else:
        log.warning(f"[FALLBACK] {condition}: {option_count} options - {error or 'Unknown error'}")
