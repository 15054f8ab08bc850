"""
Logging helpers

Library modules only create named loggers; handlers are attached by the
application through setup_logging().
"""

import logging

_LOGGER_CONFIGURED = False

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: int = logging.INFO) -> None:
    """
    Attach a console handler to the root logger.

    Idempotent: repeated calls only adjust the level.

    Args:
        level: Logging level for root logger and handler
    """
    global _LOGGER_CONFIGURED

    root = logging.getLogger()
    root.setLevel(level)
    if _LOGGER_CONFIGURED:
        return

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    root.addHandler(handler)

    _LOGGER_CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
