"""Mini README: Application-wide logging helpers for Tellodrone.

Structure:
    * get_logger - factory that configures structured logging for modules.
    * configure_root_logger - optional helper to adjust global logging level.

Usage:
    Modules import ``get_logger`` to create contextual loggers. The listener
    threads of a connection log from their own threads, so the format includes
    the thread name next to the module name. Configuration is performed exactly
    once, preventing duplicate handlers when the CLI and library both ask for it.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

_LOGGER_INITIALISED = False


def configure_root_logger(level: Optional[Union[int, str]] = None) -> None:
    """Configure the root logger with a debugging friendly formatter.

    Later calls only adjust the level, and only when one is given.
    """

    global _LOGGER_INITIALISED
    root_logger = logging.getLogger()
    if _LOGGER_INITIALISED:
        if level is not None:
            root_logger.setLevel(level)
        return

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(levelname)s] [%(threadName)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    root_logger.setLevel(logging.INFO if level is None else level)
    root_logger.addHandler(handler)
    _LOGGER_INITIALISED = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-specific logger ensuring baseline configuration."""

    configure_root_logger()
    return logging.getLogger(name)
