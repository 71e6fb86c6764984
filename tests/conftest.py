"""Pytest configuration and shared fixtures for ledmapping tests.

This module provides:
- A deterministic numpy RNG fixture
- Synthetic LED images for the detection tests
"""

import os

import cv2
import numpy as np
import pytest


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    """
    seed = int(os.environ.get("TEST_RNG_SEED", "0"))
    return np.random.default_rng(seed)


@pytest.fixture(scope="function")
def led_image() -> np.ndarray:
    """Dark 120x200 image with six bright discs of radius 5 on a grid."""
    image = np.full((120, 200), 20, dtype=np.uint8)
    for row in (30, 90):
        for col in (40, 100, 160):
            cv2.circle(image, (col, row), 5, 255, thickness=-1)
    return image
