"""
Logging Configuration for the Projection Engine.

All modules obtain their logger through `get_logger` so that output format
and handlers are consistent across the package. Transforms are pure and run
per point, so the engine logs sparingly: construction and non-convergence
at DEBUG, per-point failures inside batch transforms at WARNING.
"""

import logging
import sys


DEFAULT_FORMAT = '%(asctime)s | %(name)s | %(levelname)s | %(message)s'
DEFAULT_DATEFMT = '%Y-%m-%d %H:%M:%S'


def get_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """Get a logger configured for the projection engine.

    Parameters
    ----------
    name : str
        Logger name (typically __name__).
    level : int
        Logging level.

    Returns
    -------
    logging.Logger
        Configured logger instance.
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(DEFAULT_FORMAT, datefmt=DEFAULT_DATEFMT)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(level)
    return logger


def set_level(level: int, prefix: str = "geoloc") -> None:
    """Change the level of every engine logger already created.

    Parameters
    ----------
    level : int
        New logging level, e.g. ``logging.DEBUG``.
    prefix : str
        Only loggers whose name starts with this prefix are changed.
    """
    for name, logger in logging.Logger.manager.loggerDict.items():
        if name.startswith(prefix) and isinstance(logger, logging.Logger):
            logger.setLevel(level)
