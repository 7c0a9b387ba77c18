# app/utils/logger.py
import logging
from typing import Optional

from app.config import settings

LOGGER_NAME = "tour_knowledge"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logger(name: str = LOGGER_NAME, level: Optional[str] = None) -> logging.Logger:
    """Service logger with exactly one stream handler.

    Calling it again (app reload, tests) only re-applies the level.
    """
    log_level = getattr(logging, (level or settings.log_level).upper(), logging.INFO)

    logger = logging.getLogger(name)
    logger.setLevel(log_level)

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    for handler in logger.handlers:
        handler.setLevel(log_level)

    return logger


# global logger instance
logger = setup_logger()
