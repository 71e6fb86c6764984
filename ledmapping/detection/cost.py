"""Cost function that scores detector parameters by the number of LEDs found."""

from __future__ import annotations

from typing import Any, Callable, Optional, Sequence, Tuple

import numpy as np

from ..logging import get_logger
from .blobs import BlobDetectorSettings, check_image, detect_blobs

logger = get_logger(__name__)

Detector = Callable[[np.ndarray, np.ndarray], Sequence[Any]]

DEFAULT_NOISE_RANGE: Tuple[float, float] = (7.0, 100.0)
DEFAULT_SIZE_WEIGHT = 0.01


class LedCountCost:
    """
    Scalar cost of a detector parameter vector for one image.

    The cost is the squared difference between the number of detected blobs
    and ``expected_count``, plus ``size_weight`` times the variance of the
    blob diameters. A uniform LED string gives blobs of similar size, so the
    variance term favours parameters that do not merge or split LEDs.

    Large parts of the parameter space detect nothing at all. There the cost
    is ``100 * expected_count`` plus a uniform draw from ``noise_range`` so
    that a simplex stranded in such a region still sees differing values and
    keeps moving. The draws come from the instance's own generator; pass a
    seeded ``rng`` (or ``seed``) to make runs reproducible.

    Parameters
    ----------
    image:
        Single-channel ``uint8`` image. Held by reference.
    expected_count:
        Number of LEDs visible in the image.
    noise_range:
        ``(low, high)`` bounds of the random offset for empty detections.
    size_weight:
        Weight of the blob-size variance penalty.
    settings:
        Threshold settings passed to :func:`detect_blobs`.
    rng:
        Random generator for the noise offset.
    seed:
        Seed for a new generator when ``rng`` is not given.
    detector:
        Replacement for :func:`detect_blobs`, called as
        ``detector(image, point)`` and returning objects with a ``size``.
    """

    def __init__(
        self,
        image: np.ndarray,
        expected_count: int,
        noise_range: Tuple[float, float] = DEFAULT_NOISE_RANGE,
        size_weight: float = DEFAULT_SIZE_WEIGHT,
        settings: BlobDetectorSettings = BlobDetectorSettings(),
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
        detector: Optional[Detector] = None,
    ) -> None:
        if expected_count < 0:
            raise ValueError("expected_count must be non-negative")
        low, high = noise_range
        if not low <= high:
            raise ValueError(f"noise_range must satisfy low <= high, got {noise_range}")
        if size_weight < 0:
            raise ValueError("size_weight must be non-negative")
        if detector is None:
            check_image(image)
        self.image = image
        self.expected_count = int(expected_count)
        self.noise_range = (float(low), float(high))
        self.size_weight = float(size_weight)
        self.settings = settings
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self._detector = detector
        self.nfev = 0

    def detect(self, point: np.ndarray) -> Sequence[Any]:
        """Run the detector for ``point`` on the held image."""
        if self._detector is not None:
            return self._detector(self.image, point)
        return detect_blobs(self.image, point, self.settings)

    def score(self, keypoints: Sequence[Any]) -> float:
        """Cost of a detection result."""
        if len(keypoints) == 0:
            logger.debug("no blobs detected, returning randomised cost")
            low, high = self.noise_range
            return self.expected_count * 100.0 + float(self.rng.uniform(low, high))
        deviation = len(keypoints) - self.expected_count
        sizes = np.array([kp.size for kp in keypoints], dtype=float)
        return float(deviation**2 + self.size_weight * np.var(sizes))

    def __call__(self, point: np.ndarray) -> float:
        self.nfev += 1
        return self.score(self.detect(point))


__all__ = ["DEFAULT_NOISE_RANGE", "DEFAULT_SIZE_WEIGHT", "Detector", "LedCountCost"]
