"""Symbolic expression engine.

Parses formula text in the single variable ``x`` into a compiled,
differentiable representation. Parsing happens once; the compiled callable
is evaluated many times by the solvers.

Syntax:
- ``^`` and ``**`` are exponentiation
- implicit multiplication is accepted (``5 x``, ``2(x + 1)``)
- ``pi`` and ``e`` are constants; elementary functions follow sympy names
  (``sin``, ``cos``, ``exp``, ``log``, ``sqrt``, ``Abs``...)

Evaluation uses the standard ``math`` module, so undefined values raise
instead of silently turning into NaN or complex numbers.
"""

from __future__ import annotations

import builtins
import math
import re
from collections.abc import Callable
from tokenize import TokenError

import sympy as sp
from sympy.core.function import AppliedUndef
from sympy.parsing.sympy_parser import (
    convert_xor,
    implicit_multiplication,
    parse_expr,
    standard_transformations,
)

from rootfinding_lab.errors import (
    DifferentiationError,
    EvaluationError,
    ParseError,
)

X = sp.Symbol("x", real=True)

_TRANSFORMATIONS = standard_transformations + (implicit_multiplication, convert_xor)
_LOCALS: dict[str, sp.Basic] = {"x": X, "e": sp.E, "pi": sp.pi}

# Digits, letters, whitespace, arithmetic operators and parentheses only.
# Underscores, quotes and brackets never appear in a formula.
_ALLOWED = re.compile(r"^[0-9A-Za-z\s.+\-*/^(),]+$")


class Expression:
    """Compiled formula f(x).

    Example:
        >>> f = parse("x^2 - 2")
        >>> f.evaluate(3.0)
        7.0
        >>> f(0.5)
        -1.75
    """

    __slots__ = ("_text", "_expr", "_compiled", "_undefined", "_unsupported")

    def __init__(self, text: str, expr: sp.Expr) -> None:
        self._text = text
        self._expr = expr
        # 1/0 and friends fold into zoo/nan during parsing
        self._undefined = expr.has(sp.zoo, sp.nan)
        self._compiled: Callable[[float], object] | None = (
            None if self._undefined else sp.lambdify(X, expr, "math")
        )
        self._unsupported: tuple[str, ...] = (
            () if self._compiled is None else _unresolved_names(self._compiled)
        )

    @property
    def text(self) -> str:
        """Source text the expression was compiled from."""
        return self._text

    @property
    def sympy_expr(self) -> sp.Expr:
        """Underlying sympy expression."""
        return self._expr

    @property
    def unsupported_functions(self) -> tuple[str, ...]:
        """Function names the ``math`` backend cannot provide (empty if none)."""
        return self._unsupported

    def evaluate(self, x: float) -> float:
        """Evaluate the expression at ``x``.

        Raises:
            EvaluationError: If the value is undefined (domain error, division
                by zero, overflow, complex or non-finite result).
        """
        x = float(x)
        if self._compiled is None:
            raise EvaluationError(self._text, x, "expression is undefined")
        if self._unsupported:
            names = ", ".join(self._unsupported)
            raise EvaluationError(self._text, x, f"unsupported function(s): {names}")

        try:
            value = self._compiled(x)
        # math.factorial and friends reject non-integral floats with TypeError
        except (ArithmeticError, ValueError, TypeError) as exc:
            raise EvaluationError(self._text, x, str(exc) or type(exc).__name__) from exc

        if isinstance(value, complex):
            raise EvaluationError(self._text, x, f"complex result {value}")

        value = float(value)
        if not math.isfinite(value):
            raise EvaluationError(self._text, x, f"non-finite result {value}")
        return value

    __call__ = evaluate

    def __repr__(self) -> str:
        return f"Expression({self._text!r})"


def parse(text: str) -> Expression:
    """Parse formula text into an :class:`Expression`.

    Args:
        text: Formula in ``x`` (e.g. ``"x^2 - 5*sin(x) + x - 1"``).

    Returns:
        Compiled Expression.

    Raises:
        ParseError: If the text is not a valid single-variable formula, or
            uses a function the ``math`` module cannot evaluate.
    """
    expression = Expression(text, _to_sympy(text))
    if expression.unsupported_functions:
        names = ", ".join(expression.unsupported_functions)
        raise ParseError(text, f"unsupported function(s): {names}")
    return expression


def differentiate(text: str) -> Expression:
    """Differentiate formula text with respect to ``x`` and compile the result.

    The derivative is built from the source text, not from a previously
    parsed Expression.

    Raises:
        ParseError: If the text is not a valid formula.
        DifferentiationError: If the derivative has no closed form, or needs
            a function the ``math`` module cannot evaluate (``polygamma``).
    """
    expr = _to_sympy(text)
    try:
        derivative = sp.diff(expr, X)
    except (TypeError, ValueError, NotImplementedError) as exc:
        raise DifferentiationError(text, str(exc)) from exc

    if derivative.has(sp.Derivative, sp.Subs):
        raise DifferentiationError(text, "derivative has no closed form")

    result = Expression(str(derivative), derivative)
    if result.unsupported_functions:
        names = ", ".join(result.unsupported_functions)
        raise DifferentiationError(
            text, f"derivative needs unsupported function(s): {names}"
        )
    return result


def _unresolved_names(func: Callable[..., object]) -> tuple[str, ...]:
    """Global names used by a lambdified function that its namespace lacks."""
    namespace = func.__globals__
    names: set[str] = set()
    codes = [func.__code__]
    while codes:
        code = codes.pop()
        names.update(code.co_names)
        codes.extend(c for c in code.co_consts if hasattr(c, "co_names"))
    return tuple(
        sorted(
            name
            for name in names
            if name not in namespace and not hasattr(builtins, name)
        )
    )


def _to_sympy(text: str) -> sp.Expr:
    """Parse text into a sympy expression in ``x``, or raise ParseError."""
    if not text or not text.strip():
        raise ParseError(text, "expression is empty")

    if not _ALLOWED.match(text):
        raise ParseError(text, "unexpected character")

    try:
        expr = parse_expr(
            text,
            local_dict=dict(_LOCALS),
            transformations=_TRANSFORMATIONS,
        )
    except (
        sp.SympifyError,
        SyntaxError,
        TokenError,
        TypeError,
        ValueError,
        AttributeError,
    ) as exc:
        raise ParseError(text, str(exc) or type(exc).__name__) from exc

    if not isinstance(expr, sp.Expr):
        raise ParseError(text, "not a scalar expression")

    unknown_functions = expr.atoms(AppliedUndef)
    if unknown_functions:
        names = sorted(str(fn.func) for fn in unknown_functions)
        raise ParseError(text, f"unknown function(s): {', '.join(names)}")

    unknown_symbols = expr.free_symbols - {X}
    if unknown_symbols:
        names = sorted(str(symbol) for symbol in unknown_symbols)
        raise ParseError(text, f"unknown symbol(s): {', '.join(names)}")

    return expr


__all__ = [
    "X",
    "Expression",
    "parse",
    "differentiate",
]
