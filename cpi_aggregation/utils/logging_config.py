"""Logging configuration for CPI aggregation"""

import logging
import sys
from typing import Optional


def setup_logging(
    name: Optional[str] = None,
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Set up logging configuration
    
    Args:
        name: Logger name (default: root logger)
        level: Logging level, as an int or a level name such as "DEBUG"
        format_string: Custom format string
        log_file: Optional file that receives the same records as stdout
    
    Returns:
        Configured logger instance
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper())
    
    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    
    logger = logging.getLogger(name)
    logger.setLevel(level)
    
    # Remove existing handlers
    logger.handlers = []
    
    formatter = logging.Formatter(format_string)
    
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
    
    return logger
