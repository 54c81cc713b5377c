"""Run all three root-finding methods on one set of user inputs.

Flow of :func:`calculate`:
1. Parse the function and its derivative from the source text. Any
   ParseError/DifferentiationError aborts the run before a solver starts.
2. Run bisection on [start, end], then Newton and fixed-point from the
   interval midpoint, all with the shared tolerance.
3. Collect one SolverResult per method into a RunResult.

Solvers are isolated: an EvaluationError in one of them is recorded in
``RunResult.failures`` and the remaining methods still run.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from rootfinding_lab.algorithms.bisection import run_bisection
from rootfinding_lab.algorithms.expression import differentiate, parse
from rootfinding_lab.algorithms.fixed_point import run_fixed_point
from rootfinding_lab.algorithms.newton import run_newton
from rootfinding_lab.data.parameters import RunParameters, SolverSettings
from rootfinding_lab.data.series import SolverResult
from rootfinding_lab.errors import EvaluationError

logger = logging.getLogger(__name__)

METHODS: tuple[str, ...] = ("bisection", "newton", "fixed_point")


@dataclass(frozen=True, slots=True)
class RunResult:
    """Aggregate of one calculation."""

    parameters: RunParameters
    """Inputs the run was computed from."""

    bisection: SolverResult | None
    """Bisection result, None if the solver failed."""

    newton: SolverResult | None
    """Newton result, None if the solver failed."""

    fixed_point: SolverResult | None
    """Fixed-point result, None if the solver failed."""

    failures: dict[str, str] = field(default_factory=dict)
    """Method name -> evaluation error message for failed solvers."""

    def results(self) -> dict[str, SolverResult | None]:
        """Per-method results in display order."""
        return {
            "bisection": self.bisection,
            "newton": self.newton,
            "fixed_point": self.fixed_point,
        }

    def to_dict(self) -> dict[str, Any]:
        """Convert run to dictionary for JSON serialization."""
        params = self.parameters
        return {
            "parameters": {
                "expression": params.expression_text,
                "interval_start": params.interval_start,
                "interval_end": params.interval_end,
                "tolerance": params.tolerance,
                "fixed_point_map": params.fixed_point_map,
            },
            "results": {
                name: None if result is None else result.to_dict()
                for name, result in self.results().items()
            },
            "failures": dict(self.failures),
        }


def calculate(
    params: RunParameters,
    settings: SolverSettings | None = None,
) -> RunResult:
    """Run bisection, Newton and fixed-point iteration on ``params``.

    Args:
        params: User inputs.
        settings: Solver knobs (defaults: no cap for bisection/Newton,
            100 fixed-point iterations, 1e-10 derivative guard).

    Returns:
        RunResult with one entry per method.

    Raises:
        ParseError: If the function (or fixed-point map) text is invalid.
        DifferentiationError: If the function has no closed-form derivative.
    """
    if settings is None:
        settings = SolverSettings()

    f = parse(params.expression_text)
    df = differentiate(params.expression_text)
    update = parse(params.fixed_point_map) if params.fixed_point_map else None

    x0 = params.start_point
    tol = params.tolerance
    logger.debug(
        "calculating roots of %r on [%s, %s], tol=%s, x0=%s",
        params.expression_text,
        params.interval_start,
        params.interval_end,
        tol,
        x0,
    )

    solvers: dict[str, Callable[[], SolverResult]] = {
        "bisection": lambda: run_bisection(
            f,
            params.interval_start,
            params.interval_end,
            tol,
            max_iterations=settings.max_iterations,
        ),
        "newton": lambda: run_newton(
            f,
            df,
            x0,
            tol,
            max_iterations=settings.max_iterations,
            derivative_threshold=settings.derivative_threshold,
        ),
        "fixed_point": lambda: run_fixed_point(
            x0,
            tol,
            settings.fixed_point_max_iter,
            update=update,
        ),
    }

    results: dict[str, SolverResult | None] = {}
    failures: dict[str, str] = {}
    for name in METHODS:
        try:
            results[name] = solvers[name]()
        except EvaluationError as exc:
            logger.warning("%s failed: %s", name, exc)
            results[name] = None
            failures[name] = str(exc)

    return RunResult(
        parameters=params,
        bisection=results["bisection"],
        newton=results["newton"],
        fixed_point=results["fixed_point"],
        failures=failures,
    )


class RootFindingSession:
    """Holds the single "current result" slot of an interactive session.

    A successful :meth:`calculate` replaces the previous result wholesale. A
    run that fails to parse raises and leaves the previous result untouched.

    Example:
        >>> session = RootFindingSession()
        >>> session.calculate(RunParameters()).newton.converged
        True
    """

    __slots__ = ("_settings", "_current")

    def __init__(self, settings: SolverSettings | None = None) -> None:
        self._settings = settings if settings is not None else SolverSettings()
        self._current: RunResult | None = None

    @property
    def current(self) -> RunResult | None:
        """Result of the last successful run (None before the first one)."""
        return self._current

    def calculate(self, params: RunParameters) -> RunResult:
        result = calculate(params, self._settings)
        self._current = result
        return result

    def clear(self) -> None:
        self._current = None


__all__ = [
    "METHODS",
    "RunResult",
    "RootFindingSession",
    "calculate",
]
