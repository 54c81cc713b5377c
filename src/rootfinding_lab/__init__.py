"""Rootfinding Lab: Watching elementary root-finding methods converge."""

__version__ = "0.1.0"

import logging

from rootfinding_lab.algorithms.orchestrator import (
    RootFindingSession,
    RunResult,
    calculate,
)
from rootfinding_lab.data.parameters import RunParameters, SolverSettings
from rootfinding_lab.errors import (
    DifferentiationError,
    EvaluationError,
    ParseError,
    RootFindingError,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    "DifferentiationError",
    "EvaluationError",
    "ParseError",
    "RootFindingError",
    "RootFindingSession",
    "RunParameters",
    "RunResult",
    "SolverSettings",
    "calculate",
]
