"""Logging setup built on loguru."""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

CONSOLE_FORMAT = "<dim>{time:HH:mm:ss}</dim> | <level>{level: <8}</level> | {name}: {message}"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} | {message}"


def setup_logger(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """
    Configure the process-wide loguru sinks.

    Args:
        level: Minimum level for the console sink
        log_file: Optional path for a rotating file sink (always DEBUG)
    """
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format=CONSOLE_FORMAT)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            level="DEBUG",
            format=FILE_FORMAT,
            rotation="1 MB",
            retention=3,
            encoding="utf-8",
        )
