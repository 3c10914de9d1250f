"""
Logging configuration for the notes application.
"""
import logging
import sys

ROOT_LOGGER_NAME = 'curio'


def setup_logging(level: str = 'INFO') -> logging.Logger:
    """
    Configure application logging.

    Args:
        level: Logging level name

    Returns:
        Root logger for the application
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stdout)]
    )
    return logging.getLogger(ROOT_LOGGER_NAME)


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a specific module."""
    return logging.getLogger(f'{ROOT_LOGGER_NAME}.{name}')
