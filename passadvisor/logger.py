"""
passadvisor.logger

Console logging for the command line and GUI front ends. Records from every
``passadvisor.*`` module go through one rich handler on stderr so that
stdout stays clean for results (``analyze --json`` output in particular).
"""

import logging
from typing import Union

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "passadvisor"


def _level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).upper())
    if not isinstance(value, int):
        raise ValueError(f"unknown log level: {level}")
    return value


def configure_logging(level: Union[int, str] = "WARNING") -> logging.Logger:
    """Attach the rich handler to the package logger (once) and set its level."""
    log = logging.getLogger(ROOT_LOGGER)
    log.setLevel(_level(level))
    if not any(isinstance(h, RichHandler) for h in log.handlers):
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
        log.addHandler(handler)
    return log
