"""Package loggers for ledmapping.

Every logger handed out here sits under the ``ledmapping`` namespace, owns a
single stderr handler and does not propagate to the root logger, so solver
reports never end up in an application's own log configuration by accident.
The starting level is WARNING unless ``LEDMAPPING_LOG_LEVEL`` names another.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO, Optional

_LOG_LEVEL_ENV_VAR = "LEDMAPPING_LOG_LEVEL"
_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def _parse_level(level: int | str) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.WARNING)
    return level


_DEFAULT_LEVEL = _parse_level(os.getenv(_LOG_LEVEL_ENV_VAR, "WARNING"))

_loggers: dict[str, logging.Logger] = {}


def _attach_handler(
    logger: logging.Logger,
    level: int,
    stream: IO[str],
    formatter: logging.Formatter,
) -> None:
    """Replace the handlers of ``logger`` with one stream handler."""
    for old in logger.handlers[:]:
        logger.removeHandler(old)
    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(level)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the package logger for ``name``.

    Names outside the package are prefixed with ``ledmapping.``; ``None``
    gives the package root logger. Repeated calls return the same object.

    Example:
        >>> from ledmapping.logging import get_logger
        >>> get_logger("calibration").name
        'ledmapping.calibration'
    """
    if name is None:
        name = "ledmapping"
    if not name.startswith("ledmapping"):
        name = f"ledmapping.{name}"

    logger = _loggers.get(name)
    if logger is None:
        logger = logging.getLogger(name)
        if not logger.handlers:
            _attach_handler(logger, _DEFAULT_LEVEL, sys.stderr, logging.Formatter(_FORMAT))
            logger.propagate = False
        _loggers[name] = logger
    return logger


def set_log_level(level: int | str) -> None:
    """Change the level of existing package loggers and of those created later.

    ``level`` is a ``logging`` constant or its name, e.g. ``"DEBUG"``.
    """
    global _DEFAULT_LEVEL
    _DEFAULT_LEVEL = _parse_level(level)
    for logger in _loggers.values():
        logger.setLevel(_DEFAULT_LEVEL)
        for handler in logger.handlers:
            handler.setLevel(_DEFAULT_LEVEL)


def configure_logging(
    level: int | str = logging.WARNING,
    format_string: Optional[str] = None,
    stream: Optional[IO[str]] = None,
) -> None:
    """Send every existing package logger to ``stream`` at ``level``.

    Call once at start-up, e.g. ``configure_logging("INFO")`` to see the
    per-iteration solver reports. ``stream`` defaults to stderr and
    ``format_string`` to ``[LEVEL] name: message``.
    """
    global _DEFAULT_LEVEL
    _DEFAULT_LEVEL = _parse_level(level)
    formatter = logging.Formatter(format_string or _FORMAT)
    for logger in _loggers.values():
        _attach_handler(logger, _DEFAULT_LEVEL, sys.stderr if stream is None else stream, formatter)


__all__ = ["configure_logging", "get_logger", "set_log_level"]
