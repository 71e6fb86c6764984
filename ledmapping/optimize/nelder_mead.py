"""Nelder-Mead downhill simplex minimisation.

The search needs cost values only, so it copes with cost functions that are
noisy, discontinuous or flat over large regions. It gives no global-optimum
guarantee.
"""

from __future__ import annotations

from typing import Callable, List, Optional

import numpy as np

from ..logging import get_logger
from .core import (
    ALPHA,
    BETA,
    DEFAULT_MAXITER,
    DELTA,
    GAMMA,
    Array,
    Move,
    Objective,
    RunResult,
    SolverConfig,
    as_point,
    check_dimension,
    check_max_iterations,
)
from .reporting import IterationReport, ReportCallback, is_reporting_enabled
from .simplex import Evaluator, Simplex

logger = get_logger(__name__)


def nelder_mead_step(simplex: Simplex, evaluate: Evaluator) -> Move:
    """Apply one Nelder-Mead transformation to a sorted simplex in place.

    Tries reflect, expand, outer or inner contraction and falls back to a
    shrink toward the best vertex. The simplex is sorted again on return.
    """
    best = simplex.best
    second_worst = simplex.second_worst
    worst = simplex.worst
    centroid = simplex.centroid()

    reflected = evaluate(centroid + ALPHA * (centroid - worst.position))

    replacement = None
    if best.value <= reflected.value < second_worst.value:
        replacement, move = reflected, Move.REFLECT
    elif reflected.value < best.value:
        expanded = evaluate(centroid + GAMMA * (centroid - worst.position))
        if expanded.value < reflected.value:
            replacement, move = expanded, Move.EXPAND
        else:
            replacement, move = reflected, Move.REFLECT
    elif reflected.value < worst.value:
        contracted = evaluate(centroid + BETA * (reflected.position - centroid))
        if contracted.value <= worst.value:
            replacement, move = contracted, Move.OUTER_CONTRACT
    else:
        contracted = evaluate(centroid + BETA * (worst.position - centroid))
        # strict: an inner contraction that only ties the worst vertex shrinks
        if contracted.value < worst.value:
            replacement, move = contracted, Move.INNER_CONTRACT

    if replacement is None:
        simplex.shrink(evaluate, DELTA)
        return Move.SHRINK
    simplex.replace_worst(replacement)
    return move


class NelderMeadSolver:
    """Downhill simplex minimiser for a scalar cost function.

    Args:
        fun: Cost function mapping a 1-D float array to a scalar. It may hold
            external state (images, devices) and may be non-deterministic.
        step: Edge length of the starting simplex.
        epsilon: The run converges once ``worst - best <= epsilon``.
        report: Log and keep a report per iteration. Defaults to
            :func:`~ledmapping.optimize.reporting.is_reporting_enabled`.
        dim: Dimension of the search space. Inferred from the first starting
            point when omitted.
        callback: Called with an :class:`IterationReport` after every
            iteration.
        max_iterations: Default iteration budget of :meth:`find_minimum`.

    Raises:
        InvalidConfigurationError: If ``step`` or ``epsilon`` is not
            positive, ``dim`` is smaller than 1 or ``max_iterations`` is not
            an integer of at least 1.

    Example:
        >>> solver = NelderMeadSolver(lambda x: float(np.sum((x - 3.0) ** 2)), 1.0, 1e-8)
        >>> res = solver.find_minimum(np.zeros(2))
        >>> bool(np.allclose(res.x, 3.0, atol=1e-3))
        True
    """

    def __init__(
        self,
        fun: Objective,
        step: float,
        epsilon: float,
        report: Optional[bool] = None,
        dim: Optional[int] = None,
        callback: Optional[ReportCallback] = None,
        max_iterations: int = DEFAULT_MAXITER,
    ) -> None:
        if report is None:
            report = is_reporting_enabled()
        self.config = SolverConfig(
            step=step,
            epsilon=epsilon,
            max_iterations=max_iterations,
            report=bool(report),
        )
        check_dimension(dim)
        self.fun = fun
        self.dim = dim
        self.callback = callback
        self._last_iteration_count = 0
        self._last_cost_value: Optional[float] = None
        self._reports: List[IterationReport] = []

    @property
    def step(self) -> float:
        return self.config.step

    @property
    def epsilon(self) -> float:
        return self.config.epsilon

    @property
    def last_iteration_count(self) -> int:
        """Iterations performed by the last completed run."""
        return self._last_iteration_count

    @property
    def last_cost_value(self) -> Optional[float]:
        """Best cost of the last completed run, None before the first run."""
        return self._last_cost_value

    @property
    def reports(self) -> List[IterationReport]:
        """Reports of the last run; empty unless reporting is enabled."""
        return list(self._reports)

    def find_minimum(
        self,
        x0: Array,
        max_iterations: Optional[int] = None,
        history: bool = False,
    ) -> RunResult:
        """Search for a minimum starting from ``x0``.

        At least one iteration is always performed. The run stops when the
        cost spread is at most epsilon or after ``max_iterations``
        iterations; running out of iterations is not an error.
        """
        if max_iterations is None:
            max_iterations = self.config.max_iterations
        check_max_iterations(max_iterations)
        x0 = as_point(x0, self.dim)
        if self.dim is None:
            self.dim = x0.size

        evaluate = Evaluator(self.fun)
        simplex = Simplex.from_start(evaluate, x0, self.step)
        reports: List[IterationReport] = []
        hist: List[Array] = []

        nit = 0
        success = False
        while True:
            move = nelder_mead_step(simplex, evaluate)
            nit += 1
            spread = simplex.spread
            if self.config.report or self.callback is not None:
                report = IterationReport(
                    iteration=nit, move=move, spread=spread, best=simplex.best.value
                )
                if self.config.report:
                    logger.info(report.format())
                    reports.append(report)
                if self.callback is not None:
                    self.callback(report)
            if history:
                hist.append(simplex.best.position.copy())
            if spread <= self.epsilon:
                success = True
                break
            if nit >= max_iterations:
                break

        best = simplex.best
        self._last_iteration_count = nit
        self._last_cost_value = best.value
        self._reports = reports
        message = (
            "Cost spread within epsilon."
            if success
            else "Maximum iterations reached."
        )
        logger.debug(
            "simplex run finished after %d iterations (%d evaluations): %s",
            nit,
            evaluate.nfev,
            message,
        )
        return RunResult(
            x=best.position.copy(),
            fun=best.value,
            nit=nit,
            success=success,
            message=message,
            nfev=evaluate.nfev,
            history=hist,
        )


def nelder_mead(
    fun: Objective,
    x0: Array,
    step: float = 1.0,
    epsilon: float = 1e-8,
    maxiter: int = DEFAULT_MAXITER,
    report: Optional[bool] = None,
    callback: Optional[Callable[[IterationReport], None]] = None,
    history: bool = False,
) -> RunResult:
    """Minimise ``fun`` from ``x0`` with a fresh :class:`NelderMeadSolver`."""
    solver = NelderMeadSolver(fun, step, epsilon, report=report, callback=callback)
    return solver.find_minimum(np.asarray(x0, dtype=float), max_iterations=maxiter, history=history)


__all__ = ["NelderMeadSolver", "nelder_mead", "nelder_mead_step"]
