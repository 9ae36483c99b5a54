import logging
import sys

from src.core.config import env_config

_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s'
_handler: logging.Handler | None = None


def _get_handler() -> logging.Handler:
    global _handler # noqa
    if _handler is None:
        _handler = logging.StreamHandler(sys.stdout)
        _handler.setFormatter(logging.Formatter(_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
    return _handler


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger writing to stdout with the configured level.

    Args:
        name: Logger name, usually __name__

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        logger.addHandler(_get_handler())
        logger.setLevel(env_config.LOG_LEVEL)
        logger.propagate = False
    return logger
