"""
Logging Utilities

Configure the `layerpack` logger for packing runs. Engine modules log
through logging.getLogger(__name__), so handlers attached to the package
root receive placement, rejection and depth-overflow messages.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

PACKAGE_LOGGER = "layerpack"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _resolve_level(level: Union[int, str]) -> int:
    """Accept numeric levels or names such as "debug" / "WARNING"."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved


def _attach(logger: logging.Logger, handler: logging.Handler, level: int):
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)


def setup_logger(
    name: str = PACKAGE_LOGGER,
    log_file: Optional[str] = None,
    level: Union[int, str] = logging.INFO,
) -> logging.Logger:
    """
    Route a logger to stdout and, optionally, a log file.

    Calling this again for the same name replaces the previous handlers
    instead of stacking duplicates.

    Args:
        name: Logger name, the package root by default
        log_file: Append log records to this file as well (parent dirs are created)
        level: Numeric level or level name

    Returns:
        Configured logger

    Example:
        >>> logger = setup_logger(log_file="logs/pack.log", level="debug")
        >>> logger.info("Packing 12 blocks")
    """
    level = _resolve_level(level)

    logger = logging.getLogger(name)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    _attach(logger, logging.StreamHandler(sys.stdout), level)

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        _attach(logger, logging.FileHandler(log_path, mode="a"), level)

    return logger
