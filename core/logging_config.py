"""Logging setup for the command line entry points."""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union


def setup_logging(log_level: Union[int, str] = logging.INFO,
                  log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the root logger.

    Args:
        log_level: Level name or number (default: INFO)
        log_file: Optional path of a rotating log file

    Returns:
        The root logger
    """
    if isinstance(log_level, str):
        level_name = log_level
        log_level = logging.getLevelName(level_name.upper())
        if not isinstance(log_level, int):
            raise ValueError(f"Unknown log level: {level_name}")

    logger = logging.getLogger()
    logger.setLevel(log_level)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)

    logger.handlers.clear()
    logger.addHandler(console_handler)

    if log_file:
        log_dir = Path(log_file).parent
        if str(log_dir) != '.':
            log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logging.getLogger('PIL').setLevel(logging.WARNING)
    logging.getLogger('matplotlib').setLevel(logging.WARNING)

    return logger
