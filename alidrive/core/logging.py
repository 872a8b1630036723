"""Logging utilities for alidrive modules."""

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger that automatically inherits from root logger.
    
    Loggers propagate to the root logger so that ``basicConfig()`` works
    without an explicit ``setup_logging()`` call. A default WARNING level
    is only applied while the root logger has no handlers.
    
    Args:
        name: Logger name (e.g. 'alidrive.upload.part')
        
    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.propagate = True
    
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logger.setLevel(logging.WARNING)
    
    return logger
