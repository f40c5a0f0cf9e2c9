"""
Logging Configuration for the Direct Geodesic Solver.

The numerical core is pure and never logs per element; logging is limited
to batch setup, coefficient-cache population and validation outcomes so
that a run can be reconstructed after the fact.

Every module asks for ``get_logger(__name__)``. The stdout handler is
installed once on the top-level package logger (``geodesic``,
``validation``, ``common``) and module loggers inherit it, so importing
many solver modules never duplicates output lines.
"""

import logging
import sys
from typing import Optional, Union

LOG_FORMAT = '%(asctime)s | %(name)s | %(levelname)s | %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

PACKAGES = ("common", "geodesic", "validation")


def _package_logger(name: str) -> logging.Logger:
    return logging.getLogger(name.split('.', 1)[0])


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """Get a logger for a solver module.

    Parameters
    ----------
    name : str
        Logger name (typically __name__).
    level : int, optional
        Level for this logger only. By default the package level (INFO)
        applies.

    Returns
    -------
    logging.Logger
        Configured logger instance.
    """
    package = _package_logger(name)
    if not package.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        package.addHandler(handler)
        package.setLevel(logging.INFO)

    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    return logger


def set_log_level(level: Union[int, str]) -> None:
    """Set the level of every solver package at once.

    ``set_log_level("DEBUG")`` traces batch shapes and cache misses.
    """
    for package in PACKAGES:
        get_logger(package).setLevel(level)
