"""Centralized logging configuration for the portal."""

import logging

DEFAULT_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level=logging.INFO, handlers=None):
    """Configure the root logger once; repeated calls only adjust the level."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger()
    logger.setLevel(level)

    if getattr(configure_logging, "_configured", False):
        return logger

    if handlers is None:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(logging.Formatter(DEFAULT_LOG_FORMAT))
        logger.addHandler(stream_handler)
    else:
        for handler in handlers:
            logger.addHandler(handler)

    configure_logging._configured = True
    return logger
