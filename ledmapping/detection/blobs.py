"""OpenCV pipeline that finds lit LEDs in a single-channel image.

The image is thresholded to a binary mask and handed to
``cv2.SimpleBlobDetector`` with every shape filter switched off except the
area filter. The tunable part of the detector is expressed as a parameter
vector so that it can be calibrated with the simplex optimizer:

    ``[min_dist_between_blobs, min_area, max_area]``
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Sequence, Tuple, Union

import cv2
import numpy as np

from ..logging import get_logger

logger = get_logger(__name__)

PARAMETER_NAMES: Tuple[str, ...] = ("min_dist_between_blobs", "min_area", "max_area")
BLUE, GREEN, RED = 0, 1, 2

# OpenCV rejects a zero minimum distance or minimum area.
PARAMETER_FLOOR = 1e-3


@dataclass(frozen=True)
class BlobDetectorSettings:
    """
    Fixed (non-calibrated) settings of the LED detector.

    Attributes:
        threshold: Grey level above which a pixel counts as lit.
        max_value: Value written for lit pixels in the binary mask.
    """

    threshold: float = 240.0
    max_value: float = 255.0


def blob_parameters(point: Sequence[float]) -> cv2.SimpleBlobDetector_Params:
    """Translate a parameter vector into ``SimpleBlobDetector`` parameters.

    Coordinates below :data:`PARAMETER_FLOOR` are raised to it.
    """
    values = np.clip(np.asarray(point, dtype=float), PARAMETER_FLOOR, None)
    if values.shape != (len(PARAMETER_NAMES),):
        raise ValueError(
            f"expected {len(PARAMETER_NAMES)} detector parameters {PARAMETER_NAMES}, "
            f"got shape {values.shape}"
        )
    min_dist, min_area, max_area = (float(v) for v in values)

    params = cv2.SimpleBlobDetector_Params()
    params.minDistBetweenBlobs = min_dist
    params.filterByInertia = False
    params.filterByConvexity = False
    params.filterByColor = False
    params.filterByCircularity = False
    params.filterByArea = True
    params.minArea = min_area
    params.maxArea = max_area
    return params


def threshold_image(image: np.ndarray, settings: BlobDetectorSettings = BlobDetectorSettings()) -> np.ndarray:
    """Binary mask of the pixels brighter than ``settings.threshold``."""
    _, mask = cv2.threshold(image, settings.threshold, settings.max_value, cv2.THRESH_BINARY)
    return mask


def detect_blobs(
    image: np.ndarray,
    point: Sequence[float],
    settings: BlobDetectorSettings = BlobDetectorSettings(),
) -> Tuple[cv2.KeyPoint, ...]:
    """Detect bright blobs in a single-channel ``uint8`` image.

    Args:
        image: 2-D ``uint8`` array.
        point: Detector parameter vector, see :data:`PARAMETER_NAMES`.
        settings: Threshold settings.

    Returns:
        Detected keypoints; ``kp.size`` is the blob diameter in pixels.
        Empty when ``min_area`` exceeds ``max_area``.
    """
    check_image(image)
    params = blob_parameters(point)
    if params.minArea > params.maxArea:
        logger.debug("empty area range %s, nothing can be detected", list(point))
        return ()
    detector = cv2.SimpleBlobDetector_create(params)
    keypoints = tuple(detector.detect(threshold_image(image, settings)))
    logger.debug("detected %d blobs with parameters %s", len(keypoints), list(point))
    return keypoints


def check_image(image: np.ndarray) -> None:
    if not isinstance(image, np.ndarray) or image.ndim != 2:
        raise ValueError("expected a single-channel (2-D) image")
    if image.dtype != np.uint8:
        raise ValueError(f"expected a uint8 image, got {image.dtype}")


def select_channel(image: np.ndarray, channel: int = BLUE) -> np.ndarray:
    """Return one colour plane of a BGR image as a contiguous 2-D array."""
    if image.ndim == 2:
        return image
    if image.ndim != 3 or not 0 <= channel < image.shape[2]:
        raise ValueError(f"cannot take channel {channel} of an image with shape {image.shape}")
    return np.ascontiguousarray(image[:, :, channel])


def load_image(path: Union[str, Path]) -> np.ndarray:
    """Read a colour image from disk.

    Raises:
        FileNotFoundError: If OpenCV could not read any image data.
    """
    image = cv2.imread(str(path), cv2.IMREAD_COLOR)
    if image is None:
        raise FileNotFoundError(f"no image data could be read from {path}")
    return image


__all__ = [
    "BLUE",
    "BlobDetectorSettings",
    "GREEN",
    "PARAMETER_FLOOR",
    "PARAMETER_NAMES",
    "RED",
    "blob_parameters",
    "check_image",
    "detect_blobs",
    "load_image",
    "select_channel",
    "threshold_image",
]
