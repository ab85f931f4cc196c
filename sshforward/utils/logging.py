"""Centralized logging configuration and utilities."""

import logging
from pathlib import Path
from typing import Optional

from rich.logging import RichHandler

ROOT_LOGGER = "sshforward"


def setup_logging(
        level: int = logging.INFO,
        log_file: Optional[str] = None,
        console_output: bool = True,
        log_dir: str = "logs"
) -> logging.Logger:
    """
    Set up logging for the sshforward logger tree.

    Args:
        level: Logging level
        log_file: Optional log file name, created inside ``log_dir``
        console_output: Whether to output to console
        log_dir: Directory for the log file

    Returns:
        Configured root logger of the package
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)

    logger.handlers.clear()

    if log_file:
        directory = Path(log_dir)
        directory.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(directory / log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%m/%d/%y %H:%M:%S'
        ))
        logger.addHandler(file_handler)

    if console_output:
        console_handler = RichHandler(
            rich_tracebacks=True,
            show_time=False,
            show_level=True,
            show_path=False,
            markup=False
        )
        console_handler.setLevel(level)
        logger.addHandler(console_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a specific module."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
