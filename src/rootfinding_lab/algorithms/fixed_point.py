"""Fixed-point iteration.

Iterates x_{k+1} = g(x_k) for at most ``max_iter`` steps.

The default update rule is the hardcoded map g(x) = x^2 - 2. It does not
depend on the function being solved: a default run gives the same result
whatever formula the other solvers receive. A different rule must be passed
explicitly through ``update``.

g(x) = x^2 - 2 has fixed points -1 and 2, both repelling (|g'| = 2 and 4),
so most start points wander chaotically in [-2, 2] until the cap is hit.

Arithmetic is done in numpy float64 with overflow allowed: a start point
outside [-2, 2] escapes to inf and the error series turns into inf/nan
rather than raising.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

import numpy as np

from rootfinding_lab.data.parameters import DEFAULT_FIXED_POINT_MAX_ITER
from rootfinding_lab.data.series import SolverResult, StopReason, build_result

logger = logging.getLogger(__name__)


def default_update(x: np.float64) -> np.float64:
    """Built-in fixed-point map g(x) = x^2 - 2."""
    return np.square(x) - 2.0


def run_fixed_point(
    x0: float,
    tol: float,
    max_iter: int = DEFAULT_FIXED_POINT_MAX_ITER,
    *,
    update: Callable[[float], float] | None = None,
) -> SolverResult:
    """Run fixed-point iteration from ``x0``.

    Each step records |g(x) - x| and stops once it is below ``tol``. On
    convergence the reported root is x, one step behind the final g(x); when
    the cap is hit it is the last computed g(x).

    Args:
        x0: Start point.
        tol: Step-size threshold.
        max_iter: Iteration cap, always honoured.
        update: Optional map replacing the built-in g(x) = x^2 - 2 (an
            Expression or any float callable).

    Returns:
        SolverResult with at most ``max_iter`` records.

    Raises:
        EvaluationError: If a custom ``update`` Expression is undefined at an
            iterate.

    Example:
        >>> result = run_fixed_point(2.0, 1e-3)
        >>> result.root, result.iterations
        (2.0, 1)
    """
    g = default_update if update is None else update
    x = np.float64(x0)
    errors: list[float] = []
    stop_reason = StopReason.ITERATION_CAP

    with np.errstate(over="ignore", invalid="ignore"):
        while len(errors) < max_iter:
            next_x = np.float64(g(x))
            error = np.abs(next_x - x)
            errors.append(float(error))

            if error < tol:
                stop_reason = StopReason.CONVERGED
                break

            x = next_x

    logger.debug(
        "fixed point stopped (%s) after %d iterations, root=%s",
        stop_reason.value,
        len(errors),
        x,
    )
    return build_result("fixed_point", float(x), errors, stop_reason)


__all__ = ["default_update", "run_fixed_point"]
