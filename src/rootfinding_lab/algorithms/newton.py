"""Newton's method.

Iterates x_{k+1} = x_k - f(x_k) / f'(x_k) from a single start point.

Reporting conventions:
- the recorded error of a step is |x_{k+1} - x_k|
- on convergence the reported root is x_k, the point *before* the final
  update, so it lags the last computed iterate by one step
- when |f'(x)| drops below the derivative threshold the loop stops without
  recording that step, and the root is the last x reached

References:
- Burden & Faires: "Numerical Analysis" (9th ed.), §2.3
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from rootfinding_lab.data.parameters import DERIVATIVE_THRESHOLD
from rootfinding_lab.data.series import SolverResult, StopReason, build_result

logger = logging.getLogger(__name__)


def run_newton(
    f: Callable[[float], float],
    df: Callable[[float], float],
    x0: float,
    tol: float,
    *,
    max_iterations: int | None = None,
    derivative_threshold: float = DERIVATIVE_THRESHOLD,
) -> SolverResult:
    """Run Newton's method from ``x0``.

    Args:
        f: Function to solve.
        df: Derivative of f.
        x0: Start point.
        tol: Step-size threshold, assumed > 0.
        max_iterations: Optional iteration guard (None = unbounded).
        derivative_threshold: Stop when |df(x)| is below this value.

    Returns:
        SolverResult with the last x reached as root.

    Raises:
        EvaluationError: If f or df is undefined at an iterate.
    """
    x = float(x0)
    errors: list[float] = []

    while True:
        if max_iterations is not None and len(errors) >= max_iterations:
            stop_reason = StopReason.ITERATION_CAP
            break

        fx = f(x)
        dfx = df(x)
        if abs(dfx) < derivative_threshold:
            stop_reason = StopReason.DERIVATIVE_GUARD
            break

        next_x = x - fx / dfx
        error = abs(next_x - x)
        errors.append(error)

        if error < tol:
            stop_reason = StopReason.CONVERGED
            break

        x = next_x

    logger.debug(
        "newton stopped (%s) after %d iterations, root=%s",
        stop_reason.value,
        len(errors),
        x,
    )
    return build_result("newton", x, errors, stop_reason)


__all__ = ["run_newton"]
