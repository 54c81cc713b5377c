"""Numerical algorithms module.

This module contains implementations of:
- Expression engine (parse, evaluate, differentiate formulas in x)
- Bisection, Newton and fixed-point root finders with error tracking
- Orchestrator running all three methods on one set of inputs
"""

from rootfinding_lab.algorithms.bisection import run_bisection
from rootfinding_lab.algorithms.expression import (
    Expression,
    differentiate,
    parse,
)
from rootfinding_lab.algorithms.fixed_point import default_update, run_fixed_point
from rootfinding_lab.algorithms.newton import run_newton
from rootfinding_lab.algorithms.orchestrator import (
    METHODS,
    RootFindingSession,
    RunResult,
    calculate,
)

__all__ = [
    # Expression engine
    "Expression",
    "differentiate",
    "parse",
    # Solvers
    "default_update",
    "run_bisection",
    "run_fixed_point",
    "run_newton",
    # Orchestration
    "METHODS",
    "RootFindingSession",
    "RunResult",
    "calculate",
]
