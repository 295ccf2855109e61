"""Mini README: Application-wide logging helpers for NeoFinance.

Structure:
    * get_logger - factory returning module loggers with baseline configuration.
    * configure_root_logger - install the root handler and set the level.
    * level_for_environment - map the settings' environment label to a level.

Usage:
    Modules create a module-level ``LOGGER = get_logger(__name__)``. The root
    handler is installed at most once so reloading modules under the
    development server does not duplicate log lines; entry points call
    ``configure_root_logger`` again to pick the level for their environment.
"""

from __future__ import annotations

import logging
from typing import Optional

_LOGGER_INITIALISED = False
_NOISY_LIBRARIES = ("pymongo", "httpx", "httpcore")


def _install_handler() -> None:
    global _LOGGER_INITIALISED
    if _LOGGER_INITIALISED:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.INFO)
    root_logger.addHandler(handler)
    _LOGGER_INITIALISED = True


def configure_root_logger(level: int = logging.INFO) -> None:
    """Configure the root logger level, installing the handler on first use."""

    _install_handler()
    logging.getLogger().setLevel(level)
    # Driver heartbeat and topology chatter floods DEBUG output.
    for noisy in _NOISY_LIBRARIES:
        logging.getLogger(noisy).setLevel(max(level, logging.WARNING))


def level_for_environment(environment: str) -> int:
    """Return DEBUG for development and INFO everywhere else."""

    return logging.DEBUG if environment.lower() == "development" else logging.INFO


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-specific logger ensuring baseline configuration."""

    _install_handler()
    return logging.getLogger(name)
