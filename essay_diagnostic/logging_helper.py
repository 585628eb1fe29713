"""
logging_helper.py - one-call logger setup: stdout, optional file.

Usage:
    from essay_diagnostic.logging_helper import get_logger
    log = get_logger(__name__)
    log.info("✓ It works")
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

DEF_FMT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DEF_DATE = "%Y-%m-%d %H:%M:%S"

ROOT_LOGGER = "essay_diagnostic"


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """
    Return a logger inside the package namespace.

    Handlers live on the package root logger only (see configure_logging), so
    module loggers just propagate.
    """
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name.split('.')[-1]}"
    return logging.getLogger(name)


def configure_logging(
    level: Union[int, str] = logging.INFO,
    log_dir: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """
    Attach console (and optionally file) handlers to the package root logger.

    Safe to call more than once; existing handlers are kept.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logger.setLevel(level)

    if logger.handlers:  # already initialised
        return logger

    ch = logging.StreamHandler(sys.stdout)
    ch.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    ch.setLevel(level)
    logger.addHandler(ch)

    if log_dir is not None:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(Path(log_dir) / f"{ROOT_LOGGER}.log", encoding="utf-8")
        fh.setFormatter(logging.Formatter(DEF_FMT, DEF_DATE))
        fh.setLevel(level)
        logger.addHandler(fh)

    logger.propagate = False
    return logger
