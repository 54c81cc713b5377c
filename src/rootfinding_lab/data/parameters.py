"""
Run Parameters and Defaults - Single Source of Truth

This module holds the default inputs of a calculation, the tunable solver
settings, and the coercion rules that turn raw form text into numbers.
"""

import math
import re
from dataclasses import dataclass

# =============================================================================
# DEFAULT INPUTS
# =============================================================================

DEFAULT_FUNCTION = "x^2 - 5*sin(x) + x - 1"
DEFAULT_INTERVAL_START = 0.0
DEFAULT_INTERVAL_END = 1.0
DEFAULT_TOLERANCE = 0.001

# =============================================================================
# SOLVER CONSTANTS
# =============================================================================
# Fixed-point is the only solver with a built-in cap. Bisection and Newton are
# unbounded unless SolverSettings.max_iterations is set.

DEFAULT_FIXED_POINT_MAX_ITER = 100
DERIVATIVE_THRESHOLD = 1e-10

# Leading decimal number, same prefix a browser number field would accept
_NUMBER_PREFIX = re.compile(
    r"\s*([+-]?(?:Infinity|inf|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))"
)


@dataclass(frozen=True, slots=True)
class SolverSettings:
    """Tunable solver knobs."""

    max_iterations: int | None = None
    """Optional guard for bisection and Newton (None = run until convergence)."""

    fixed_point_max_iter: int = DEFAULT_FIXED_POINT_MAX_ITER
    """Iteration cap for the fixed-point solver."""

    derivative_threshold: float = DERIVATIVE_THRESHOLD
    """Newton stops when |f'(x)| falls below this value."""


@dataclass(frozen=True, slots=True)
class RunParameters:
    """User inputs of a single calculation."""

    expression_text: str = DEFAULT_FUNCTION
    """Function of x whose root is sought."""

    interval_start: float = DEFAULT_INTERVAL_START
    """Left bisection bound."""

    interval_end: float = DEFAULT_INTERVAL_END
    """Right bisection bound."""

    tolerance: float = DEFAULT_TOLERANCE
    """Convergence threshold shared by all solvers (assumed > 0)."""

    fixed_point_map: str | None = None
    """Optional g(x) replacing the built-in x^2 - 2 fixed-point rule."""

    @property
    def start_point(self) -> float:
        """Midpoint of the interval, used as x0 by Newton and fixed-point."""
        return (self.interval_start + self.interval_end) / 2

    @classmethod
    def from_form(
        cls,
        expression_text: str,
        interval_start: str | float,
        interval_end: str | float,
        tolerance: str | float,
        fixed_point_map: str | None = None,
    ) -> "RunParameters":
        """Build parameters from raw form values.

        Numeric fields are coerced with :func:`coerce_number`, so invalid
        text becomes NaN instead of raising.

        Example:
            >>> RunParameters.from_form("x^2 - 2", "0", "2", "1e-6").interval_end
            2.0
        """
        return cls(
            expression_text=expression_text,
            interval_start=coerce_number(interval_start),
            interval_end=coerce_number(interval_end),
            tolerance=coerce_number(tolerance),
            fixed_point_map=fixed_point_map or None,
        )


def coerce_number(value: str | float) -> float:
    """
    Coerce a form value to float.

    Reads the leading decimal number of the text and ignores the rest
    ("1.5abc" -> 1.5, "1_000" -> 1.0). ``Infinity`` and ``inf`` are read as
    infinity. Text without a numeric prefix becomes NaN.

    Example:
        >>> coerce_number("0.001")
        0.001
        >>> coerce_number("abc")
        nan
    """
    if isinstance(value, (int, float)):
        return float(value)

    match = _NUMBER_PREFIX.match(value)
    if match is None:
        return math.nan
    return float(match.group(1))


__all__ = [
    "DEFAULT_FUNCTION",
    "DEFAULT_INTERVAL_START",
    "DEFAULT_INTERVAL_END",
    "DEFAULT_TOLERANCE",
    "DEFAULT_FIXED_POINT_MAX_ITER",
    "DERIVATIVE_THRESHOLD",
    "SolverSettings",
    "RunParameters",
    "coerce_number",
]
