"""Structured logging configuration."""

import logging
import sys
from typing import Optional, TextIO

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL
}

FORMATS = {
    "structured": '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    "plain": '%(levelname)s - %(message)s',
}

ENDGAME_LOGGER = 'Endgame'


def setup_logging(level: str = "INFO",
                  format_type: str = "structured",
                  stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Route the endgame core's log records to ``stream`` (stdout by default).

    Only the ``Endgame`` logger is touched, so an embedding application keeps
    its own root configuration. Calling again replaces the handler installed
    by the previous call instead of stacking another one.
    """
    log_level = LEVELS.get(level.upper(), logging.INFO)
    formatter = logging.Formatter(FORMATS.get(format_type, FORMATS["plain"]))

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setFormatter(formatter)
    handler.set_name("endgame-setup")

    logger = logging.getLogger(ENDGAME_LOGGER)
    for old in [h for h in logger.handlers if h.get_name() == "endgame-setup"]:
        logger.removeHandler(old)
    logger.addHandler(handler)
    logger.setLevel(log_level)
    logger.propagate = False
    return logger
