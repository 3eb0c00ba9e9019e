"""Logging utilities."""

import logging
import os
import sys
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logger(name: str = 'ransacfit', log_level: Union[int, str] = logging.INFO,
                 log_file: Optional[str] = None) -> logging.Logger:
    """Setup logger with console and optional file handler."""
    logger = logging.getLogger(name)
    if isinstance(log_level, str):
        log_level = logging.getLevelName(log_level.upper())
    logger.setLevel(log_level)

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')

    # Called twice with the same name, keep a single console handler
    if not any(type(h) is logging.StreamHandler for h in logger.handlers):
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        resolved = os.path.abspath(log_file)
        if not any(getattr(h, 'baseFilename', None) == resolved for h in logger.handlers):
            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    return logger


def logger_from_config(config: dict, name: str = 'ransacfit') -> logging.Logger:
    """Configure the package logger from the ``logging`` config section."""
    section = config.get('logging', {})
    return setup_logger(name, section.get('level', logging.INFO), section.get('log_file'))
