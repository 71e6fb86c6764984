"""Per-iteration diagnostics for the simplex solver."""

from __future__ import annotations

import os
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Iterator

from .core import Move

_REPORT_ENV_VAR = "LEDMAPPING_REPORT"
_reporting_enabled: bool = os.getenv(_REPORT_ENV_VAR, "0").lower() in (
    "1",
    "true",
    "yes",
    "on",
)


@dataclass(frozen=True)
class IterationReport:
    """
    Snapshot of the simplex after one iteration.

    ``spread`` and ``best`` are taken once the move has been applied and
    the simplex re-sorted, so the last report of a run agrees with its
    result. Tools that print the simplex before each move show the values
    of the previous line here.

    Attributes
    ----------
    iteration:
        1-based iteration number.
    move:
        Transformation that was applied.
    spread:
        Worst minus best cost after the move.
    best:
        Best cost after the move.
    """

    iteration: int
    move: Move
    spread: float
    best: float

    def format(self) -> str:
        """Tab-separated ``code spread best`` line."""
        return f"{self.move.code}\t{self.spread:.6g}\t{self.best:.6g}"


ReportCallback = Callable[[IterationReport], None]


def is_reporting_enabled() -> bool:
    """
    Return the default reporting flag for newly built solvers.

    The default can be toggled with set_reporting_enabled(...) or the
    LEDMAPPING_REPORT environment variable.
    """
    return _reporting_enabled


def set_reporting_enabled(enabled: bool) -> None:
    """Globally enable or disable solver reporting by default."""
    global _reporting_enabled
    _reporting_enabled = bool(enabled)


@contextmanager
def reporting_context(enabled: bool = True) -> Iterator[None]:
    """
    Temporarily change the default reporting flag.

    Example
    -------
    >>> with reporting_context(True):
    ...     # solvers built here report unless told otherwise
    ...     pass
    """
    global _reporting_enabled
    prev = _reporting_enabled
    _reporting_enabled = bool(enabled)
    try:
        yield
    finally:
        _reporting_enabled = prev


__all__ = [
    "IterationReport",
    "ReportCallback",
    "is_reporting_enabled",
    "reporting_context",
    "set_reporting_enabled",
]
