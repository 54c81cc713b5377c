"""Bisection method.

Halves a bracket [a, b] until its width drops to the tolerance. The sign
test compares f(a) with f(mid) at every step; the initial bracket is not
checked for a sign change, so a bracket without one slides towards an
endpoint instead of failing.

References:
- Burden & Faires: "Numerical Analysis" (9th ed.), §2.1
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from rootfinding_lab.data.series import SolverResult, StopReason, build_result

logger = logging.getLogger(__name__)


def run_bisection(
    f: Callable[[float], float],
    a: float,
    b: float,
    tol: float,
    *,
    max_iterations: int | None = None,
) -> SolverResult:
    """Run bisection on [a, b].

    Each step records the bracket width |b - a| *before* the bracket is
    narrowed. The loop has no built-in cap: a non-positive tolerance never
    terminates unless ``max_iterations`` is given.

    Args:
        f: Function to solve (an Expression or any float callable).
        a: Bracket start (a < b is not required).
        b: Bracket end.
        tol: Width threshold, assumed > 0.
        max_iterations: Optional iteration guard (None = unbounded).

    Returns:
        SolverResult whose root is the last midpoint, or None when the
        initial bracket is already no wider than ``tol``.

    Raises:
        EvaluationError: If f is undefined at a sampled point.

    Example:
        >>> result = run_bisection(lambda x: x * x - 2, 0.0, 2.0, 1e-6)
        >>> round(result.root, 5)
        1.41421
    """
    mid: float | None = None
    errors: list[float] = []
    stop_reason = StopReason.CONVERGED

    while abs(b - a) > tol:
        if max_iterations is not None and len(errors) >= max_iterations:
            stop_reason = StopReason.ITERATION_CAP
            break

        mid = (a + b) / 2
        fa = f(a)
        fm = f(mid)

        errors.append(abs(b - a))

        if fa * fm < 0:
            b = mid
        else:
            a = mid

    logger.debug(
        "bisection stopped (%s) after %d iterations, root=%s",
        stop_reason.value,
        len(errors),
        mid,
    )
    return build_result("bisection", mid, errors, stop_reason)


__all__ = ["run_bisection"]
