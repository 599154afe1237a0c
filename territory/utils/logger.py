# File: territory/utils/logger.py
"""
Centralized logging configuration for Territory Manager.

Handlers are attached once, to the package logger ("territory"); module and
class loggers below it propagate to those handlers.
"""

import logging
import os
import sys
from pathlib import Path
from datetime import datetime

ROOT_LOGGER_NAME = "territory"
DEFAULT_LOG_DIR = Path("logs")


def setup_logger(name: str = ROOT_LOGGER_NAME, level: int = logging.INFO) -> logging.Logger:
    """
    Configure and return a logger instance.
    
    Args:
        name: Logger name
        level: Console logging level (default: INFO)
    
    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    in_package = name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + ".")
    owner = logging.getLogger(ROOT_LOGGER_NAME) if in_package else logger
    
    # Prevent duplicate handlers
    if owner.handlers:
        return logger
    
    owner.setLevel(logging.DEBUG)
    
    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_format = logging.Formatter(
        '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
        datefmt='%H:%M:%S'
    )
    console_handler.setFormatter(console_format)
    
    # File handler for persistent logs
    log_dir = Path(os.getenv("TERRITORY_LOG_DIR", str(DEFAULT_LOG_DIR)))
    log_dir.mkdir(parents=True, exist_ok=True)
    
    log_file = log_dir / f"territory_{datetime.now().strftime('%Y%m%d')}.log"
    file_handler = logging.FileHandler(log_file, encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    
    # More detailed format for file
    file_format = logging.Formatter(
        '%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    file_handler.setFormatter(file_format)
    
    owner.addHandler(console_handler)
    owner.addHandler(file_handler)
    
    return logger


class LoggerMixin:
    """Mixin to add logging capability to any class."""
    
    @property
    def logger(self) -> logging.Logger:
        """Get logger for this class."""
        if not hasattr(self, '_logger'):
            self._logger = setup_logger(f"{ROOT_LOGGER_NAME}.{self.__class__.__name__}")
        return self._logger
