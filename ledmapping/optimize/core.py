"""Core types shared by the simplex optimizer."""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional

import numpy as np

Array = np.ndarray
Objective = Callable[[Array], float]

# Nelder-Mead coefficients: reflection, expansion, contraction, shrink.
ALPHA = 1.0
GAMMA = 2.0
BETA = 0.5
DELTA = 0.5

DEFAULT_MAXITER = 1000


class InvalidConfigurationError(ValueError):
    """Raised when a solver is configured with unusable parameters."""


class Move(Enum):
    """Transformation applied to the simplex during one iteration."""

    REFLECT = "reflect"
    EXPAND = "expand"
    OUTER_CONTRACT = "outer_contract"
    INNER_CONTRACT = "inner_contract"
    SHRINK = "shrink"

    @property
    def code(self) -> str:
        """One-letter code used in report lines."""
        return _MOVE_CODES[self]


_MOVE_CODES = {
    Move.REFLECT: "r",
    Move.EXPAND: "e",
    Move.OUTER_CONTRACT: "c",
    Move.INNER_CONTRACT: "i",
    Move.SHRINK: "s",
}


@dataclass(frozen=True)
class Vertex:
    """A point of the search space together with its cost.

    The value is the result of exactly one evaluation of the cost function
    at ``position``; the position array is read-only.
    """

    position: Array
    value: float


@dataclass(frozen=True)
class SolverConfig:
    """Validated settings for a simplex run.

    Args:
        step: Edge length of the starting simplex. Must be positive.
        epsilon: Convergence threshold on ``worst - best`` cost. Must be positive.
        max_iterations: Iteration budget, at least 1.
        report: Whether per-iteration reports are logged and kept.
    """

    step: float
    epsilon: float
    max_iterations: int = DEFAULT_MAXITER
    report: bool = False

    def __post_init__(self) -> None:
        check_positive("step", self.step)
        check_positive("epsilon", self.epsilon)
        check_max_iterations(self.max_iterations)


@dataclass
class RunResult:
    """Outcome of a simplex minimisation.

    Attributes:
        x: Best point found.
        fun: Cost at ``x`` as evaluated during the run.
        nit: Number of iterations performed.
        success: True if the cost spread dropped to epsilon or below.
        message: Human-readable reason for stopping.
        nfev: Number of cost-function evaluations.
        history: Best point after every iteration, when requested.
    """

    x: Array
    fun: float
    nit: int
    success: bool
    message: str
    nfev: int
    history: List[Array] = field(default_factory=list)


def check_positive(name: str, value: float) -> None:
    """Raise InvalidConfigurationError unless value is finite and > 0."""
    if not math.isfinite(value) or value <= 0:
        raise InvalidConfigurationError(f"{name} must be a positive finite number, got {value!r}")


def check_max_iterations(max_iterations: int) -> None:
    if not isinstance(max_iterations, numbers.Integral) or max_iterations < 1:
        raise InvalidConfigurationError(
            f"max_iterations must be an integer >= 1, got {max_iterations!r}"
        )


def check_dimension(dim: Optional[int]) -> None:
    if dim is not None and dim < 1:
        raise InvalidConfigurationError(f"dimension must be at least 1, got {dim}")


def as_point(x0: Array, dim: Optional[int] = None) -> Array:
    """Return a float copy of ``x0`` after checking its shape."""
    point = np.array(x0, dtype=float)
    if point.ndim != 1 or point.size < 1:
        raise InvalidConfigurationError(
            f"starting point must be a non-empty 1-D vector, got shape {point.shape}"
        )
    if dim is not None and point.size != dim:
        raise InvalidConfigurationError(
            f"starting point has dimension {point.size}, solver expects {dim}"
        )
    return point


__all__ = [
    "ALPHA",
    "Array",
    "BETA",
    "DEFAULT_MAXITER",
    "DELTA",
    "GAMMA",
    "InvalidConfigurationError",
    "Move",
    "Objective",
    "RunResult",
    "SolverConfig",
    "Vertex",
    "as_point",
    "check_dimension",
    "check_max_iterations",
    "check_positive",
]
