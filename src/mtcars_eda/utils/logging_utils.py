"""
Logging utilities for the mtcars analysis pipeline.
Console output is colorized with colorlog; an optional plain-text log file
can be attached for a persistent record of a run.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional
import colorlog


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

LOG_COLORS = {
    'DEBUG': 'cyan',
    'INFO': 'green',
    'WARNING': 'yellow',
    'ERROR': 'red',
    'CRITICAL': 'red,bg_white',
}


def setup_logger(
    name: str,
    log_file: Optional[str] = None,
    level: str = "INFO",
    colorize: bool = True
) -> logging.Logger:
    """
    Set up a logger with a console handler and an optional file handler.

    Args:
        name: Logger name (typically __name__ of the calling module)
        log_file: Path to log file (optional)
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        colorize: Whether to colorize console output

    Returns:
        Configured logger instance

    Example:
        >>> logger = setup_logger("mtcars_eda", log_file="logs/run.log")
        >>> logger.info("Loaded 32 rows")
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper()))

    # Replace handlers so repeated setup does not duplicate output
    logger.handlers = []

    file_formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    if colorize:
        console_formatter = colorlog.ColoredFormatter(
            '%(log_color)s' + LOG_FORMAT,
            datefmt=DATE_FORMAT,
            log_colors=LOG_COLORS
        )
    else:
        console_formatter = file_formatter

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(file_formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a module logger.

    Loggers inside the package are children of the ``mtcars_eda`` logger and
    inherit its handlers; anything else gets default handlers on first use.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.warning("Config file not found")
    """
    logger = logging.getLogger(name)

    if name.split('.')[0] == 'mtcars_eda':
        root = logging.getLogger('mtcars_eda')
        if not root.handlers:
            setup_logger('mtcars_eda')
        return logger

    if not logger.handlers:
        logger = setup_logger(name)

    return logger


def configure_logging(log_config: Dict[str, Any]) -> logging.Logger:
    """
    Configure the package logger from the ``logging`` config section.

    Recognised keys: ``level``, ``colorize`` and ``file`` (a mapping with
    ``enabled`` and ``path``).
    """
    file_config = log_config.get('file', {}) or {}
    log_file = file_config.get('path') if file_config.get('enabled') else None

    return setup_logger(
        'mtcars_eda',
        log_file=log_file,
        level=log_config.get('level', 'INFO'),
        colorize=log_config.get('colorize', True)
    )
