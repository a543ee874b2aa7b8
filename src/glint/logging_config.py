"""Logging configuration for glint."""

import logging
import logging.handlers
from pathlib import Path

from glint.config import LOG_FORMAT, LOG_LEVEL


def setup_logging(
    name: str = "glint",
    level: str | None = None,
    log_file: Path | None = None,
) -> logging.Logger:
    """Set up logging for the package (or any named logger).

    Calling this again for the same logger updates its level but never adds
    a second console or file handler.

    Args:
        name: Logger name.
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path of a rotating log file.

    Returns:
        Configured logger instance.
    """
    if level is None:
        level = LOG_LEVEL
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(name)
    logger.setLevel(numeric_level)

    formatter = logging.Formatter(LOG_FORMAT)

    # Console handler
    console_handler = _find_handler(logger, logging.StreamHandler, None)
    if console_handler is None:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)
    console_handler.setLevel(numeric_level)

    # File handler
    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = _find_handler(logger, logging.handlers.RotatingFileHandler, log_file)
        if file_handler is None:
            file_handler = logging.handlers.RotatingFileHandler(
                log_file,
                maxBytes=10485760,  # 10MB
                backupCount=5,
            )
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
        file_handler.setLevel(numeric_level)

    return logger


def _find_handler(
    logger: logging.Logger,
    handler_type: type[logging.Handler],
    log_file: Path | None,
) -> logging.Handler | None:
    for handler in logger.handlers:
        if handler_type is logging.StreamHandler:
            # FileHandler subclasses StreamHandler
            if type(handler) is logging.StreamHandler:
                return handler
        elif isinstance(handler, handler_type) and log_file is not None:
            if Path(handler.baseFilename) == log_file.resolve():
                return handler
    return None
