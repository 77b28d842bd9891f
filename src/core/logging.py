"""Logging configuration (loguru)."""

import sys
from pathlib import Path

from loguru import logger

from src.core.config import Settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"


def setup_logging(settings: Settings) -> None:
    """Replace loguru's default handler with the handlers described by the settings.

    Args:
        settings: log level, and (optionally) a log file with its rotation/retention policy.
    """
    logger.remove()
    logger.add(sys.stderr, level=settings.log_level, format=CONSOLE_FORMAT, colorize=True)

    if settings.log_file:
        log_path = Path(settings.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path,
            level=settings.log_level,
            format=FILE_FORMAT,
            rotation=settings.log_rotation,
            retention=settings.log_retention,
        )

    logger.info(f"Logging configured at level: {settings.log_level}")
