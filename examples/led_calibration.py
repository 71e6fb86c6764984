"""
Example: calibrating the LED detector

Renders a synthetic picture of an LED string (bright discs of slightly
different sizes on a noisy background), then searches for blob detector
parameters under which exactly the expected number of LEDs is found.
Pass the path of a real photograph to calibrate on its blue channel instead.
"""

import sys

import cv2
import numpy as np

from ledmapping import calibrate, load_image, select_channel
from ledmapping.detection import BLUE, PARAMETER_NAMES


def synthetic_leds(count=12, seed=0):
    rng = np.random.default_rng(seed)
    image = rng.integers(0, 60, size=(240, 400), dtype=np.uint8)
    for i in range(count):
        row = 60 + 120 * (i % 2)
        col = 30 + 30 * i
        cv2.circle(image, (col, row), int(rng.integers(4, 7)), 255, thickness=-1)
    return image


def main(argv):
    if len(argv) > 1:
        image = select_channel(load_image(argv[1]), BLUE)
        expected = int(argv[2]) if len(argv) > 2 else 50
    else:
        image = synthetic_leds()
        expected = 12

    result, keypoints = calibrate(
        image,
        expected,
        start=[5.0, 10.0, 100.0],
        step=40.0,
        epsilon=0.5,
        max_iterations=300,
        rng=np.random.default_rng(1),
    )
    for name, value in zip(PARAMETER_NAMES, result.x):
        print(f"{name}: {value:.2f}")
    print(f"Cost: {result.fun:.4f} after {result.nit} iterations")
    print(f"Found {len(keypoints)} of {expected} LEDs")


if __name__ == "__main__":
    main(sys.argv)
