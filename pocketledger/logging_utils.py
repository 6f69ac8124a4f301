"""Mini README: Application-wide logging helpers for Pocket Ledger.

Structure:
    * get_logger - factory that hands out module loggers with shared formatting.
    * configure_root_logger - installs the console handler and adjusts the level.

Usage:
    Modules import ``get_logger`` to create contextual loggers that include
    module names. The handler is installed exactly once so repeated imports
    (or a CLI re-configuring the level from settings) never duplicate output.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

_LOGGER_INITIALISED = False


def configure_root_logger(level: Optional[Union[int, str]] = None) -> None:
    """Install the console handler once and apply ``level`` when supplied."""

    global _LOGGER_INITIALISED
    root_logger = logging.getLogger()
    if not _LOGGER_INITIALISED:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter(
                "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        root_logger.addHandler(handler)
        root_logger.setLevel(logging.INFO)
        _LOGGER_INITIALISED = True

    if level is not None:
        if isinstance(level, str):
            level = level.upper()
        root_logger.setLevel(level)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-specific logger ensuring baseline configuration."""

    configure_root_logger()
    return logging.getLogger(name)
