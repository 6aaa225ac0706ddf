"""
Logging configuration
"""
import logging
import sys
from canvasflow.config import get_settings

settings = get_settings()

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def log_level() -> int:
    """LOG_LEVEL when set, otherwise DEBUG or INFO depending on DEBUG"""
    if settings.LOG_LEVEL:
        level = logging.getLevelName(settings.LOG_LEVEL.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown LOG_LEVEL: {settings.LOG_LEVEL}")
        return level
    return logging.DEBUG if settings.DEBUG else logging.INFO


def get_logger(name: str) -> logging.Logger:
    """Get a logger writing to stdout at the configured level"""
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    logger.setLevel(log_level())
    return logger
