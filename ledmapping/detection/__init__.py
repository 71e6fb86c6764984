"""Blob-based LED detection and its calibration cost function."""

from .blobs import (
    BLUE,
    GREEN,
    PARAMETER_FLOOR,
    PARAMETER_NAMES,
    RED,
    BlobDetectorSettings,
    blob_parameters,
    detect_blobs,
    load_image,
    select_channel,
    threshold_image,
)
from .calibrate import calibrate
from .cost import DEFAULT_NOISE_RANGE, DEFAULT_SIZE_WEIGHT, LedCountCost

__all__ = [
    "BLUE",
    "BlobDetectorSettings",
    "DEFAULT_NOISE_RANGE",
    "DEFAULT_SIZE_WEIGHT",
    "GREEN",
    "LedCountCost",
    "PARAMETER_FLOOR",
    "PARAMETER_NAMES",
    "RED",
    "blob_parameters",
    "calibrate",
    "detect_blobs",
    "load_image",
    "select_channel",
    "threshold_image",
]
