"""Loguru setup for mealspin.

Generator modules log with keyword context (seed, day_index, category),
which loguru keeps in ``extra``; both sinks print it after the message.
"""

import sys
from pathlib import Path

from loguru import logger

from mealspin.config.settings import settings

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan> - <level>{message}</level> {extra}"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} - {message} {extra}"


def setup_logger(level: str = "INFO", log_file: str | None = None) -> None:
    """Replace loguru's default sink with mealspin's console and file sinks.

    Args:
        level: Minimum level for both sinks
        log_file: Optional path for a rotating file sink (parents are created)
    """
    logger.remove()
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(log_path, format=FILE_FORMAT, level=level, rotation="10 MB", retention="7 days")

    logger.debug("Logger configured", level=level, log_file=log_file)


def setup_logger_from_settings() -> None:
    """Configure the logger from LOG_LEVEL / LOG_FILE."""
    setup_logger(level=settings.log_level, log_file=settings.log_file)
