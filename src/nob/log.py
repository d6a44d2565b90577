"""Leveled diagnostics on stderr.

Every fallible operation reports exactly one line through :func:`log` before
returning its failure result. Output goes through click so that ANSI styling is
dropped automatically when stderr is not a terminal.
"""

from __future__ import annotations

from enum import Enum
from typing import NoReturn

import click

from .errors import ContractViolation


class LogLevel(Enum):
    NONE = "none"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    DEBUG = "debug"


_PREFIXES = {
    LogLevel.NONE: ("", {}),
    LogLevel.INFO: ("[INFO] ", {"fg": "green", "bold": True}),
    LogLevel.WARNING: ("[WARNING] ", {"fg": "yellow", "bold": True}),
    LogLevel.ERROR: ("[ERROR] ", {"fg": "bright_red", "bold": True}),
    LogLevel.DEBUG: ("[DEBUG] ", {}),
}

_COLOR = True
_VERBOSE = False


def configure(*, color: bool | None = None, verbose: bool | None = None) -> None:
    """Set process-wide output options."""

    global _COLOR, _VERBOSE
    if color is not None:
        _COLOR = color
    if verbose is not None:
        _VERBOSE = verbose


def is_verbose() -> bool:
    return _VERBOSE


def log(level: LogLevel, message: str) -> None:
    """Write one diagnostic line to stderr."""

    prefix, style = _PREFIXES[level]
    if _COLOR and style:
        prefix = click.style(prefix, **style)
    click.echo(f"{prefix}{message}", err=True)


def info(message: str) -> None:
    log(LogLevel.INFO, message)


def warning(message: str) -> None:
    log(LogLevel.WARNING, message)


def error(message: str) -> None:
    log(LogLevel.ERROR, message)


def debug(message: str) -> None:
    log(LogLevel.DEBUG, message)


def fatal(message: str, exc_type: type[ContractViolation] = ContractViolation) -> NoReturn:
    """Log ``message`` and raise ``exc_type``; never returns."""

    error(message)
    raise exc_type(message)


__all__ = [
    "LogLevel",
    "configure",
    "debug",
    "error",
    "fatal",
    "info",
    "is_verbose",
    "log",
    "warning",
]
