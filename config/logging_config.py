"""
Centralized logging configuration.
All modules log through children of the 'cardlens' logger.
"""
import logging
import logging.handlers
from pathlib import Path
from .constants import (
    LOG_LEVEL, LOG_FORMAT, LOG_FILE,
    LOG_MAX_SIZE_MB, LOG_BACKUP_COUNT
)

BASE_LOGGER_NAME = 'cardlens'


def setup_logger(name: str = None) -> logging.Logger:
    """
    Get or create a configured logger.

    Handlers live on the base 'cardlens' logger only; named loggers are
    its children and propagate to it, so each record is emitted once.

    Usage:
        from config.logging_config import setup_logger
        logger = setup_logger(__name__)
        logger.info("Message here")

    Args:
        name: Logger name. If None, returns the base 'cardlens' logger.

    Returns:
        Configured logging.Logger instance.
    """
    base = logging.getLogger(BASE_LOGGER_NAME)

    # Avoid adding handlers multiple times
    if not base.handlers:
        base.setLevel(logging.DEBUG)

        # Console handler
        console = logging.StreamHandler()
        console.setLevel(getattr(logging, LOG_LEVEL))
        console.setFormatter(logging.Formatter(LOG_FORMAT))
        base.addHandler(console)

        # File handler with rotation - DEBUG level
        log_path = Path(LOG_FILE)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            LOG_FILE,
            maxBytes=LOG_MAX_SIZE_MB * 1024 * 1024,
            backupCount=LOG_BACKUP_COUNT,
            encoding='utf-8'
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        base.addHandler(file_handler)

    if not name or name == BASE_LOGGER_NAME:
        return base
    if name.startswith(BASE_LOGGER_NAME + '.'):
        return logging.getLogger(name)
    return base.getChild(name)


def get_logger(name: str = None) -> logging.Logger:
    """
    Alias for setup_logger for convenience.

    Usage:
        from config.logging_config import get_logger
        logger = get_logger(__name__)
    """
    return setup_logger(name)


# Singleton logger for quick imports
# Usage: from config.logging_config import logger
logger = setup_logger()
