"""Tests for integrand compilation and evaluation."""

import math

import numpy as np
import pytest

from mcint import Integrand, InvalidFunctionError


def test_caret_means_power():
    f = Integrand.compile("x^2")
    assert f(3.0) == pytest.approx(9.0)
    assert f.is_expression
    assert f.source == "x^2"


@pytest.mark.parametrize(
    "expression, x, expected",
    [
        ("x^2+1", 2.0, 5.0),
        ("x^2*3", 2.0, 12.0),
        ("-x^2", 2.0, -4.0),
        ("2^3^2", 0.0, 512.0),
        ("(x+1)^2", 2.0, 9.0),
        ("x^2/4", 2.0, 1.0),
        ("2*x^-1", 4.0, 0.5),
    ],
)
def test_caret_has_power_precedence(expression, x, expected):
    assert Integrand.compile(expression)(x) == pytest.approx(expected)


def test_caret_and_double_star_compile_alike():
    assert Integrand.compile("x^2*sin(x^2/pi)").expr == Integrand.compile("x**2*sin(x**2/pi)").expr


def test_integer_literals_are_floats():
    assert Integrand.compile("7/2")(0.0) == pytest.approx(3.5)
    assert Integrand.compile("2^0.5")(0.0) == pytest.approx(math.sqrt(2))


def test_named_functions_and_constants():
    f = Integrand.compile("x^2*sin(x^2/pi)")
    xs = np.linspace(0, 1, 5)
    np.testing.assert_allclose(f(xs), xs ** 2 * np.sin(xs ** 2 / np.pi))

    assert Integrand.compile("ln(e)")(0.0) == pytest.approx(1.0)
    assert Integrand.compile("abs(-x) + floor(x) + ceil(x)")(1.5) == pytest.approx(4.5)
    assert Integrand.compile("atan(x)")(1.0) == pytest.approx(np.pi / 4)


def test_constant_is_broadcast():
    values = Integrand.compile("3")(np.zeros(4))
    assert values.shape == (4,)
    assert np.all(values == 3.0)
    assert values.dtype == np.float64


def test_output_has_input_shape():
    xs = np.arange(6.0).reshape(2, 3)
    assert Integrand.compile("x + 1")(xs).shape == (2, 3)


@pytest.mark.parametrize(
    "expression",
    [
        "not_a_function(x)",
        "y + 1",
        "sin",
        "x.real",
        "__import__('os').system('true')",
        "x[0]",
        "x if x > 0 else 0",
        "x > 1",
        "x.__class__",
        "x; 1",
        "[x]",
        "'x'",
        "True",
        "lambda: 1",
        "sin(x, 2)",
        "sin(x=1)",
        "x & 1",
        "not x",
        "",
        "   ",
        "x +",
        "(x",
    ],
)
def test_rejected_expressions(expression):
    with pytest.raises(InvalidFunctionError):
        Integrand.compile(expression)


def test_division_by_zero_rejected():
    with pytest.raises(InvalidFunctionError):
        Integrand.compile("1/0")(0.5)


def test_callable_is_wrapped():
    f = Integrand.compile(np.cos)
    assert not f.is_expression
    assert f.source == "cos"
    assert f(0.0) == pytest.approx(1.0)


def test_scalar_callable_on_arrays():
    f = Integrand.compile(lambda x: math.log1p(x))
    xs = np.array([0.0, 1.0, 2.0])
    np.testing.assert_allclose(f(xs), np.log1p(xs))


def test_complex_results_rejected():
    f = Integrand.compile(lambda x: x + 1j)
    with pytest.raises(InvalidFunctionError, match="real values"):
        f(np.ones(3))


def test_failing_callable_rejected():
    def broken(x):
        raise RuntimeError("boom")

    with pytest.raises(InvalidFunctionError, match="boom"):
        Integrand.compile(broken)(0.5)


def test_wrong_shape_rejected():
    f = Integrand.compile(lambda x: np.ones(3))
    with pytest.raises(InvalidFunctionError, match="shape"):
        f(np.ones(5))


@pytest.mark.parametrize("fun", [None, 3, ["x"]])
def test_non_callable_rejected(fun):
    with pytest.raises(InvalidFunctionError):
        Integrand.compile(fun)


def test_compile_is_idempotent():
    f = Integrand.compile("x")
    assert Integrand.compile(f) is f
