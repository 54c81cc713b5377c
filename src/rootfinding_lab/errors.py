"""Exception hierarchy for expression handling and root finding.

ParseError and DifferentiationError are fatal to a run: no solver starts
when the function text cannot be compiled. EvaluationError is raised at a
single sample point and only aborts the solver that hit it.
"""

from __future__ import annotations


class RootFindingError(Exception):
    """Base class for all rootfinding-lab errors."""


class ExpressionError(RootFindingError, ValueError):
    """Base class for errors raised by the expression engine."""


class ParseError(ExpressionError):
    """Function text is not a valid formula in ``x``."""

    def __init__(self, text: str, reason: str) -> None:
        self.text = text
        self.reason = reason
        super().__init__(f"Cannot parse '{text}': {reason}")


class DifferentiationError(ExpressionError):
    """Derivative has no closed form."""

    def __init__(self, text: str, reason: str) -> None:
        self.text = text
        self.reason = reason
        super().__init__(f"Cannot differentiate '{text}': {reason}")


class EvaluationError(ExpressionError):
    """Expression value is undefined at the requested point."""

    def __init__(self, text: str, x: float, reason: str) -> None:
        self.text = text
        self.x = x
        self.reason = reason
        super().__init__(f"Cannot evaluate '{text}' at x={x!r}: {reason}")


__all__ = [
    "RootFindingError",
    "ExpressionError",
    "ParseError",
    "DifferentiationError",
    "EvaluationError",
]
