"""Opt-in log output for the ``orderdaily`` logger namespace.

Every logger the client creates is a child of ``orderdaily`` (the client
itself logs as ``orderdaily.Client``). Importing the package attaches no
handlers; an application that wants the client's request trace calls
:func:`setup_logging` once at start-up. The threshold comes from the
``LOG_LEVEL`` environment variable unless ``level`` is passed.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Union

LOGGER_NAME = "orderdaily"
LOG_FILE_NAME = "orderdaily.log"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Marks handlers attached here so a second call replaces only those.
_OWNED = "_orderdaily_handler"


def _resolve_level(level: Union[int, str, None]) -> int:
    if isinstance(level, int):
        return level
    name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logging(
    log_dir: Optional[Union[str, Path]] = None,
    level: Union[int, str, None] = None,
    propagate: bool = False,
) -> logging.Logger:
    """Attach console (and optionally file) output to the ``orderdaily`` logger.

    Parameters
    ----------
    log_dir: Optional[Union[str, Path]]
        Directory for ``orderdaily.log``. ``None`` keeps output on the console.
    level: Union[int, str, None]
        Threshold for the namespace. Defaults to ``LOG_LEVEL`` or ``INFO``.
    propagate: bool
        Also pass records on to the root logger's handlers.

    Returns
    -------
    logging.Logger
        The configured ``orderdaily`` logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(_resolve_level(level))
    logger.propagate = propagate

    for handler in [h for h in logger.handlers if getattr(h, _OWNED, False)]:
        logger.removeHandler(handler)
        handler.close()

    handlers: list = [logging.StreamHandler()]
    if log_dir:
        path = Path(log_dir)
        path.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path / LOG_FILE_NAME, encoding="utf-8"))

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        setattr(handler, _OWNED, True)
        logger.addHandler(handler)
    return logger
