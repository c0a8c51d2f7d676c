import logging
import sys

from crm.core.config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: str, log_level: str | None = None) -> logging.Logger:
    """
    Configures and returns a logger.
    The level defaults to LOG_LEVEL from the settings.
    """
    logger = logging.getLogger(name)
    logger.setLevel(log_level or get_settings().LOG_LEVEL)

    # Modules call this at import time; only attach the console handler once
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger
