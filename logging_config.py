"""
Logging Configuration
Sets up the logger shared by the equation modules.
"""
import logging
import sys
from typing import Optional

LOGGER_NAME = 'swequations'


def setup_logging(level=logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configures the 'swequations' logger. Modules log to its children,
    e.g. 'swequations.store'.

    Args:
        level: Logging level, as a number or a name such as 'DEBUG'.
        log_file: Optional path to also write the log to.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Avoid duplicate output when called again
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.info("Logging initialized.")
    return logger
