"""ledmapping - locate the LEDs of an addressable string in camera images."""

__version__ = "0.1.0"

# LED detection
from .detection import (
    BlobDetectorSettings,
    LedCountCost,
    calibrate,
    detect_blobs,
    load_image,
    select_channel,
)

# Logging
from .logging import configure_logging, get_logger, set_log_level

# Simplex optimizer
from .optimize import (
    InvalidConfigurationError,
    IterationReport,
    Move,
    NelderMeadSolver,
    RunResult,
    SolverConfig,
    nelder_mead,
)

__all__ = [
    "__version__",
    "BlobDetectorSettings",
    "InvalidConfigurationError",
    "IterationReport",
    "LedCountCost",
    "Move",
    "NelderMeadSolver",
    "RunResult",
    "SolverConfig",
    "calibrate",
    "configure_logging",
    "detect_blobs",
    "get_logger",
    "load_image",
    "nelder_mead",
    "select_channel",
    "set_log_level",
]
