"""Result and error-series model shared by every solver.

Each solver returns a fresh :class:`SolverResult` holding the ordered error
series of the run. The series is the chart-ready shape consumed by display
layers: x = iteration number, y = error.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

import numpy as np

if TYPE_CHECKING:
    from numpy.typing import NDArray


class StopReason(Enum):
    """Why a solver loop ended."""

    CONVERGED = "converged"
    DERIVATIVE_GUARD = "derivative_guard"  # Newton: |f'(x)| below threshold
    ITERATION_CAP = "iteration_cap"


@dataclass(frozen=True, slots=True)
class IterationRecord:
    """Convergence error of a single solver step."""

    iteration: int
    """1-based step number."""

    error: float
    """Step error (bracket width or |x_next - x|)."""

    def to_dict(self) -> dict[str, Any]:
        return {"iteration": self.iteration, "error": self.error}


@dataclass(frozen=True, slots=True)
class SolverResult:
    """Outcome of one solver run."""

    method: str
    """Solver name ("bisection", "newton", "fixed_point")."""

    root: float | None
    """Root estimate, None if no iteration ran."""

    errors: tuple[IterationRecord, ...]
    """Error series in chronological order."""

    stop_reason: StopReason
    """Termination cause."""

    @property
    def iterations(self) -> int:
        """Number of recorded iterations."""
        return len(self.errors)

    @property
    def converged(self) -> bool:
        return self.stop_reason is StopReason.CONVERGED

    @property
    def final_error(self) -> float | None:
        """Error of the last recorded step, None for an empty series."""
        return self.errors[-1].error if self.errors else None

    def error_array(self) -> NDArray[np.float64]:
        """Return the error series as a float64 array (index i = iteration i+1)."""
        return np.fromiter(
            (record.error for record in self.errors),
            dtype=np.float64,
            count=len(self.errors),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert result to dictionary for JSON serialization."""
        return {
            "method": self.method,
            "root": self.root,
            "iterations": self.iterations,
            "stop_reason": self.stop_reason.value,
            "errors": [record.to_dict() for record in self.errors],
        }


def build_result(
    method: str,
    root: float | None,
    errors: list[float],
    stop_reason: StopReason,
) -> SolverResult:
    """Number a raw error list 1..n and freeze it into a SolverResult.

    Args:
        method: Solver name.
        root: Final root estimate (None if the loop never ran).
        errors: Per-step errors, oldest first.
        stop_reason: Termination cause.

    Returns:
        Immutable SolverResult.
    """
    records = tuple(
        IterationRecord(iteration=i, error=float(error))
        for i, error in enumerate(errors, start=1)
    )
    return SolverResult(
        method=method,
        root=None if root is None else float(root),
        errors=records,
        stop_reason=stop_reason,
    )


__all__ = [
    "StopReason",
    "IterationRecord",
    "SolverResult",
    "build_result",
]
