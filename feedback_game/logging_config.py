"""
Logger setup for the game. Streamlit re-executes app.py on every widget
interaction, so this runs many times per session and must stay idempotent.
"""
import logging
import sys
from . import constants as c


def setup_logging(level=logging.INFO, log_file=None):
    """
    Configures the package logger and returns it.
    Handlers from a previous rerun are closed and replaced.
    """
    logger = logging.getLogger(c.LOGGER_NAME)
    logger.setLevel(level)
    # Streamlit installs its own root handler
    logger.propagate = False

    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    formatter = logging.Formatter(c.LOG_FORMAT, datefmt=c.LOG_DATEFMT)
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    for name in c.NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    return logger
