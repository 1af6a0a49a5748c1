"""
Vibrant Structured Logging
Centralized logging configuration using loguru.
"""
import sys
from typing import Optional

from loguru import logger

from vibrant.config import config


def configure_logging(level: Optional[str] = None, serialize: bool = False) -> None:
    """
    Configure loguru with the project log format.

    Args:
        level: Minimum level to emit; defaults to VIBRANT_LOG_LEVEL
        serialize: Emit JSON records instead of formatted lines
    """
    # Remove default handler
    logger.remove()

    logger.add(
        sys.stderr,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{function} | {message}",
        level=(level or config.LOG_LEVEL).upper(),
        serialize=serialize,
    )
