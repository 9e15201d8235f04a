"""Uniform-sampling Monte Carlo estimate of a one-dimensional integral."""

import logging
from collections.abc import Callable, Sequence
from typing import Any

import numpy as np

from mcint.config import DEFAULT_SEED
from mcint.errors import InvalidFunctionError
from mcint.models import EstimationResult, IntegrationRequest

logger = logging.getLogger(__name__)


def generator_seed(seed: int) -> int:
    """Seed accepted by numpy; negative seeds wrap modulo 2**64."""
    return seed if seed >= 0 else seed & (2**64 - 1)


def sample_points(
    rng: np.random.Generator,
    x_range: tuple[float, float],
    sample_count: int,
) -> np.ndarray:
    """Draw points uniformly on [a, b).

    Args:
        rng: Generator to draw from
        x_range: Bounds (a, b)
        sample_count: Number of points

    Returns:
        Array X_i = a + U_i * (b - a) with U_i ~ U[0, 1)
    """
    a, b = x_range
    uniforms = rng.random(sample_count)
    return a + uniforms * (b - a)


class MonteCarloIntegrator:
    """Estimates integrals of real functions over an interval."""

    def __init__(self, seed: int = DEFAULT_SEED):
        """Initialize the integrator.

        Args:
            seed: Seed for the generator created on every call
        """
        self.seed = seed

    def integrate(
        self,
        x_range: Sequence[float],
        fun: "str | Callable[..., Any]",
        B: int,
    ) -> EstimationResult:
        """Estimate the integral of fun over x_range.

        Args:
            x_range: Integration bounds (a, b) with a < b
            fun: Expression in x such as ``"x^2"``, or a callable
            B: Number of simulations

        Returns:
            EstimationResult with the estimate, its variance and the inputs

        Raises:
            InvalidRangeError: Interval malformed
            InvalidFunctionError: fun cannot be evaluated
            InvalidSampleCountError: B < 1
            InvalidSeedError: Seed is not an integer
        """
        request = IntegrationRequest.from_inputs(x_range, fun, B, seed=self.seed)
        return self.run(request)

    def run(self, request: IntegrationRequest) -> EstimationResult:
        """Estimate the integral for an already validated request."""
        logger.debug(
            "Integrating %r over [%s, %s] with B=%d, seed=%d",
            request.integrand.source, request.a, request.b,
            request.sample_count, request.seed,
        )

        # Fresh generator per call so repeated calls are reproducible
        rng = np.random.default_rng(generator_seed(request.seed))
        length = request.interval_length

        xs = sample_points(rng, request.x_range, request.sample_count)
        # Non-finite values are reported below
        with np.errstate(all="ignore"):
            ys = request.integrand(xs)

        non_finite = np.count_nonzero(~np.isfinite(ys))
        if non_finite:
            raise InvalidFunctionError(
                f"{request.integrand.source!r} is not finite at {non_finite} of "
                f"{request.sample_count} sample points in [{request.a}, {request.b}]"
            )

        i_hat = length * np.mean(ys)
        i2_hat = length * np.mean(ys ** 2)
        var_hat = (length * i2_hat - i_hat ** 2) / request.sample_count

        if var_hat < 0:
            logger.debug("Raw variance estimate %.3e is negative, flooring at 0", var_hat)
            var_hat = 0.0

        result = EstimationResult(
            I=float(i_hat),
            var=float(var_hat),
            fun=request.fun,
            x_range=request.x_range,
            B=request.sample_count,
            seed=request.seed,
        )
        logger.debug(
            "Estimated integral of %r over [%s, %s]: %.6g (se %.3g, B=%d)",
            request.integrand.source, request.a, request.b,
            result.I, result.std_error, result.B,
        )
        return result


def estimate(
    a: float,
    b: float,
    f: "str | Callable[..., Any]",
    B: int,
    seed: int = DEFAULT_SEED,
) -> EstimationResult:
    """Estimate the integral of f over [a, b] by uniform Monte Carlo sampling.

    Example:
        >>> result = estimate(0, 1, "x^2", 10**5)
        >>> round(result.I, 2)
        0.33
    """
    return MonteCarloIntegrator(seed=seed).integrate((a, b), f, B)
