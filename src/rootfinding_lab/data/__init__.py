"""Data module for run parameters and solver result series."""

from rootfinding_lab.data.parameters import (
    DEFAULT_FIXED_POINT_MAX_ITER,
    DEFAULT_FUNCTION,
    DEFAULT_INTERVAL_END,
    DEFAULT_INTERVAL_START,
    DEFAULT_TOLERANCE,
    DERIVATIVE_THRESHOLD,
    RunParameters,
    SolverSettings,
    coerce_number,
)
from rootfinding_lab.data.series import (
    IterationRecord,
    SolverResult,
    StopReason,
    build_result,
)

__all__ = [
    "DEFAULT_FIXED_POINT_MAX_ITER",
    "DEFAULT_FUNCTION",
    "DEFAULT_INTERVAL_END",
    "DEFAULT_INTERVAL_START",
    "DEFAULT_TOLERANCE",
    "DERIVATIVE_THRESHOLD",
    "IterationRecord",
    "RunParameters",
    "SolverResult",
    "SolverSettings",
    "StopReason",
    "build_result",
    "coerce_number",
]
