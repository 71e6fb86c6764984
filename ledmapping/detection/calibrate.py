"""Calibrate the LED detector for an image with the simplex optimizer."""

from __future__ import annotations

from typing import Any, Optional, Sequence, Tuple

import numpy as np

from ..logging import get_logger
from ..optimize import DEFAULT_MAXITER, NelderMeadSolver, RunResult
from .blobs import PARAMETER_NAMES, BlobDetectorSettings
from .cost import DEFAULT_NOISE_RANGE, LedCountCost

logger = get_logger(__name__)


def calibrate(
    image: np.ndarray,
    expected_count: int,
    start: Optional[Sequence[float]] = None,
    step: float = 80.0,
    epsilon: float = 3.0,
    max_iterations: int = DEFAULT_MAXITER,
    rng: Optional[np.random.Generator] = None,
    report: Optional[bool] = None,
    noise_range: Tuple[float, float] = DEFAULT_NOISE_RANGE,
    settings: BlobDetectorSettings = BlobDetectorSettings(),
) -> Tuple[RunResult, Sequence[Any]]:
    """Find detector parameters under which ``expected_count`` LEDs are seen.

    Args:
        image: Single-channel ``uint8`` image of the lit LED string.
        expected_count: Number of LEDs in the image.
        start: Initial parameter vector; all zeros when omitted.
        step: Edge length of the starting simplex.
        epsilon: Convergence threshold on the cost spread.
        max_iterations: Iteration budget of the solver.
        rng: Generator for the cost function's noise.
        report: Enable per-iteration solver reports.
        noise_range: Noise bounds for empty detections.
        settings: Threshold settings of the detector.

    Returns:
        The solver result and the keypoints detected with the best parameters.
    """
    cost = LedCountCost(
        image,
        expected_count,
        noise_range=noise_range,
        settings=settings,
        rng=rng,
    )
    if start is None:
        start = np.zeros(len(PARAMETER_NAMES))
    solver = NelderMeadSolver(cost, step, epsilon, report=report, dim=len(PARAMETER_NAMES))
    result = solver.find_minimum(np.asarray(start, dtype=float), max_iterations=max_iterations)
    keypoints = cost.detect(result.x)
    logger.info(
        "calibration finished after %d iterations: %d of %d LEDs found, cost %.4g",
        result.nit,
        len(keypoints),
        expected_count,
        result.fun,
    )
    return result, keypoints


__all__ = ["calibrate"]
