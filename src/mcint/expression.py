"""Integrands given as text expressions in ``x`` or as Python callables."""

import io
import logging
import tokenize
from collections.abc import Callable
from typing import Any

import numpy as np
import sympy as sp
from sympy.parsing.sympy_parser import (
    convert_xor,
    parse_expr,
    standard_transformations,
)

from mcint.errors import InvalidFunctionError

logger = logging.getLogger(__name__)

VARIABLE = "x"

X = sp.Symbol(VARIABLE, real=True)

# Named functions available inside expressions
FUNCTIONS: dict[str, Any] = {
    "sin": sp.sin,
    "cos": sp.cos,
    "tan": sp.tan,
    "arcsin": sp.asin,
    "arccos": sp.acos,
    "arctan": sp.atan,
    "asin": sp.asin,
    "acos": sp.acos,
    "atan": sp.atan,
    "sinh": sp.sinh,
    "cosh": sp.cosh,
    "tanh": sp.tanh,
    "exp": sp.exp,
    "log": sp.log,
    "ln": sp.log,
    "log10": lambda arg: sp.log(arg, 10),
    "log2": lambda arg: sp.log(arg, 2),
    "sqrt": sp.sqrt,
    "abs": sp.Abs,
    "floor": sp.floor,
    "ceil": sp.ceiling,
}

CONSTANTS: dict[str, Any] = {
    "pi": sp.pi,
    "e": sp.E,
    "inf": sp.oo,
}

_OPERATORS = {"+", "-", "*", "/", "//", "%", "**", "^", "(", ")"}
_LAYOUT_TOKENS = {tokenize.NEWLINE, tokenize.NL, tokenize.ENDMARKER}


def _float_literals(tokens: list, local_dict: dict, global_dict: dict) -> list:
    """Read every numeric literal as a float, as R does."""
    return [
        (toknum, repr(float(tokval)) if toknum == tokenize.NUMBER else tokval)
        for toknum, tokval in tokens
    ]


_TRANSFORMATIONS = (_float_literals,) + standard_transformations + (convert_xor,)


def _screen_tokens(expression: str) -> None:
    """Allow only numbers, known names and arithmetic operators."""
    try:
        tokens = list(tokenize.generate_tokens(io.StringIO(expression).readline))
    except (tokenize.TokenError, SyntaxError) as exc:
        raise InvalidFunctionError(f"cannot parse {expression!r}: {exc}") from exc

    for tok in tokens:
        if tok.type in _LAYOUT_TOKENS or tok.type == tokenize.NUMBER:
            continue
        if tok.type == tokenize.NAME:
            if tok.string == VARIABLE or tok.string in CONSTANTS:
                continue
            if tok.string in FUNCTIONS:
                continue
            raise InvalidFunctionError(f"unknown name {tok.string!r} in {expression!r}")
        if tok.type == tokenize.OP and tok.string in _OPERATORS:
            continue
        raise InvalidFunctionError(f"{tok.string!r} is not allowed in {expression!r}")


class Integrand:
    """A real function of one variable, evaluated on numpy arrays."""

    def __init__(
        self,
        func: Callable[[Any], Any],
        source: str,
        expr: sp.Expr | None = None,
    ):
        """Wrap an already compiled function.

        Args:
            func: Function of x (array or scalar)
            source: Expression text or callable name, used in messages
            expr: Parsed sympy expression when func was compiled from text
        """
        self._func = func
        self.source = source
        self.expr = expr

    @property
    def is_expression(self) -> bool:
        return self.expr is not None

    @classmethod
    def compile(cls, fun: "str | Callable[[Any], Any] | Integrand") -> "Integrand":
        """Build an integrand from an expression in x or a callable.

        Expressions are parsed with sympy (``^`` is power, with the usual
        precedence) and turned into a numpy function once.

        Args:
            fun: Expression text such as ``"x^2*sin(x^2/pi)"``, or a callable

        Returns:
            Integrand ready for evaluation

        Raises:
            InvalidFunctionError: If the expression uses anything besides
                arithmetic, x, known constants and known functions
        """
        if isinstance(fun, Integrand):
            return fun
        if isinstance(fun, str):
            return cls._from_expression(fun)
        if callable(fun):
            return cls(fun, source=getattr(fun, "__name__", repr(fun)))
        raise InvalidFunctionError(
            f"integrand must be an expression string or a callable, got {type(fun).__name__}"
        )

    @classmethod
    def _from_expression(cls, expression: str) -> "Integrand":
        text = expression.strip()
        if not text:
            raise InvalidFunctionError("integrand expression is empty")

        _screen_tokens(text)
        local_dict = {VARIABLE: X, **FUNCTIONS, **CONSTANTS}
        try:
            expr = parse_expr(text, local_dict=local_dict, transformations=_TRANSFORMATIONS)
        except Exception as exc:
            raise InvalidFunctionError(f"cannot parse {expression!r}: {exc}") from exc

        if not isinstance(expr, sp.Expr):
            raise InvalidFunctionError(f"{expression!r} is not an expression in {VARIABLE}")
        if expr.has(sp.zoo, sp.nan):
            raise InvalidFunctionError(f"{expression!r} is undefined")

        func = sp.lambdify(X, expr, modules=["numpy"])
        logger.debug("Compiled integrand %r as %s", expression, expr)
        return cls(func, source=expression, expr=expr)

    def _evaluate(self, x: np.ndarray) -> Any:
        if self.is_expression or x.ndim == 0:
            return self._func(x)
        try:
            return self._func(x)
        except (TypeError, ValueError):
            # Callable does not accept arrays; go element by element
            return np.array([self._func(float(v)) for v in x.ravel()]).reshape(x.shape)

    def __call__(self, x: Any) -> np.ndarray:
        """Evaluate at x.

        Args:
            x: Scalar or array of points

        Returns:
            Float array with the shape of x (constants are broadcast)

        Raises:
            InvalidFunctionError: If evaluation fails or yields non-real values
        """
        x = np.asarray(x, dtype=float)
        try:
            values = np.asarray(self._evaluate(x))
        except Exception as exc:
            raise InvalidFunctionError(f"cannot evaluate {self.source!r}: {exc}") from exc

        if values.dtype.kind not in "biuf":
            raise InvalidFunctionError(
                f"{self.source!r} does not produce real values (got dtype {values.dtype})"
            )

        try:
            return np.broadcast_to(values, x.shape).astype(float)
        except ValueError as exc:
            raise InvalidFunctionError(
                f"{self.source!r} returned shape {values.shape} for input of shape {x.shape}"
            ) from exc

    def __repr__(self) -> str:
        return f"Integrand({self.source!r})"
