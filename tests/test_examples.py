"""Smoke tests for example scripts.

These tests run the example scripts in a subprocess and check that they exit
cleanly and print their summary lines.
"""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]


def run_example(name: str) -> subprocess.CompletedProcess:
    script = ROOT / "examples" / name
    assert script.exists(), f"Example script not found: {script}"
    result = subprocess.run(
        [sys.executable, str(script)],
        capture_output=True,
        text=True,
        check=False,
        timeout=60,
    )
    assert result.returncode == 0, (
        f"Example script failed with return code {result.returncode}.\n"
        f"STDOUT:\n{result.stdout}\n"
        f"STDERR:\n{result.stderr}"
    )
    return result


def test_simplex_demo_runs() -> None:
    result = run_example("simplex_demo.py")
    assert "Simplex examples completed" in result.stdout


def test_led_calibration_runs() -> None:
    result = run_example("led_calibration.py")
    assert "LEDs" in result.stdout
    assert "min_dist_between_blobs" in result.stdout
