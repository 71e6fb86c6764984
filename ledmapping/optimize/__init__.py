"""Derivative-free simplex optimization for ledmapping.

Example
-------
>>> import numpy as np
>>> from ledmapping.optimize import NelderMeadSolver
>>> def bowl(x):
...     return (x[0] - 3.0) ** 2 + (x[1] - 4.0) ** 2
>>> solver = NelderMeadSolver(bowl, step=1.0, epsilon=1e-6)
>>> res = solver.find_minimum(np.array([0.0, 0.0]), max_iterations=200)
>>> bool(np.allclose(res.x, [3.0, 4.0], atol=1e-3))
True
"""

from .core import (
    ALPHA,
    BETA,
    DEFAULT_MAXITER,
    DELTA,
    GAMMA,
    InvalidConfigurationError,
    Move,
    RunResult,
    SolverConfig,
    Vertex,
)
from .nelder_mead import NelderMeadSolver, nelder_mead, nelder_mead_step
from .reporting import (
    IterationReport,
    is_reporting_enabled,
    reporting_context,
    set_reporting_enabled,
)
from .simplex import Evaluator, Simplex

__all__ = [
    "ALPHA",
    "BETA",
    "DEFAULT_MAXITER",
    "DELTA",
    "Evaluator",
    "GAMMA",
    "InvalidConfigurationError",
    "IterationReport",
    "Move",
    "NelderMeadSolver",
    "RunResult",
    "Simplex",
    "SolverConfig",
    "Vertex",
    "is_reporting_enabled",
    "nelder_mead",
    "nelder_mead_step",
    "reporting_context",
    "set_reporting_enabled",
]
