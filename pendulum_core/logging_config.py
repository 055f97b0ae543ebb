"""
Logging Configuration
Sets up the 'pendulum_core' logger before any configuration is resolved, so that
parameter-file warnings and fallbacks reach the same handlers as the app itself.
"""
import logging
import sys
from typing import Optional, Union

# The viewport runs in its own thread; tag records with the thread name
LOG_FORMAT = '%(asctime)s - %(threadName)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: Union[int, str] = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configures the logger for the 'pendulum_core' namespace.

    Args:
        level: Logging level, either a number or a name such as "DEBUG".
        log_file: Optional path to also write the log to (overwritten each run).

    Returns:
        The configured package logger.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger("pendulum_core")
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S')
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("Logging initialized at level %s.", logging.getLevelName(level))
    return logger
