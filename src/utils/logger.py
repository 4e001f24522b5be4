"""
Logging configuration
"""

import logging
import sys
from pathlib import Path
from src.config.settings import settings
from src.config.constants import LOG_FORMAT, LOG_DATE_FORMAT


def setup_logger(name: str = "project_board", log_dir: str = settings.LOG_DIR) -> logging.Logger:
    """
    Configure the application logger
    
    Console output follows LOG_LEVEL; the file handler (skipped when log_dir
    is empty) always records debug messages, including every mutation.
    
    Args:
        name: Logger name
        log_dir: Directory for <name>.log
        
    Returns:
        Configured logger instance
    """
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    formatter = logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT)
    
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    logger.handlers.clear()
    
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)
    
    if log_dir:
        path = Path(log_dir)
        path.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path / f"{name}.log", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
    
    return logger


# Global logger instance
logger = setup_logger()
