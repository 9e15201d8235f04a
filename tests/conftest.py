"""Shared fixtures for the test suite."""

import matplotlib

matplotlib.use("Agg")

import pytest

from mcint import estimate


@pytest.fixture
def square_estimate():
    """Estimate of the integral of x^2 on [0, 1]."""
    return estimate(0, 1, "x^2", 10_000, seed=1291)


@pytest.fixture
def close_figures():
    import matplotlib.pyplot as plt

    yield
    plt.close("all")
