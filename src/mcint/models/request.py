"""Validated integration request."""

import numbers
from collections.abc import Callable, Sequence
from typing import Any

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from mcint.config import DEFAULT_SEED
from mcint.errors import (
    InvalidRangeError,
    InvalidSampleCountError,
    InvalidSeedError,
)
from mcint.expression import Integrand


def _validate_range(x_range: Sequence[float]) -> tuple[float, float]:
    if isinstance(x_range, (str, bytes)):
        raise InvalidRangeError(f"x_range must be two real bounds, got {x_range!r}")
    try:
        bounds = tuple(float(v) for v in x_range)
    except (TypeError, ValueError) as exc:
        raise InvalidRangeError(f"x_range must be two real bounds, got {x_range!r}") from exc

    if len(bounds) != 2:
        raise InvalidRangeError(
            f"x_range must contain exactly two bounds, got {len(bounds)}"
        )

    a, b = bounds
    if not (np.isfinite(a) and np.isfinite(b)):
        raise InvalidRangeError(f"x_range bounds must be finite, got [{a}, {b}]")
    if a >= b:
        raise InvalidRangeError(
            f"x_range lower bound must be below the upper bound, got [{a}, {b}]"
        )
    return a, b


def _as_whole_number(value: Any) -> int | None:
    """Return value as int if it is a whole number (10**5 and 1e5 both count)."""
    if isinstance(value, bool):
        return None
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, numbers.Real) and float(value).is_integer():
        return int(value)
    return None


def _validate_sample_count(sample_count: Any) -> int:
    count = _as_whole_number(sample_count)
    if count is None:
        raise InvalidSampleCountError(
            f"B must be a positive integer, got {sample_count!r}"
        )
    if count < 1:
        raise InvalidSampleCountError(f"B must be at least 1, got {count}")
    return count


def _validate_seed(seed: Any) -> int:
    value = _as_whole_number(seed)
    if value is None:
        raise InvalidSeedError(f"seed must be an integer, got {seed!r}")
    return value


class IntegrationRequest(BaseModel):
    """Inputs of one Monte Carlo integration, checked before sampling."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    x_range: tuple[float, float] = Field(..., description="Integration bounds (a, b), a < b")
    fun: str | Callable[..., Any] = Field(..., description="Expression in x or a callable")
    sample_count: int = Field(..., ge=1, description="Number of uniform draws (B)")
    seed: int = Field(default=DEFAULT_SEED, description="Generator seed (any integer)")
    integrand: Integrand = Field(..., exclude=True, repr=False)

    @classmethod
    def from_inputs(
        cls,
        x_range: Sequence[float],
        fun: "str | Callable[..., Any]",
        sample_count: Any,
        seed: Any = DEFAULT_SEED,
    ) -> "IntegrationRequest":
        """Validate raw inputs in order: range, function, sample count, seed.

        The function is compiled and evaluated once at the interval midpoint.

        Raises:
            InvalidRangeError: Interval malformed
            InvalidFunctionError: Function cannot be evaluated at the midpoint
            InvalidSampleCountError: B is not a positive integer
            InvalidSeedError: Seed is not an integer
        """
        a, b = _validate_range(x_range)

        integrand = Integrand.compile(fun)
        with np.errstate(all="ignore"):
            integrand((a + b) / 2)

        return cls(
            x_range=(a, b),
            fun=fun,
            sample_count=_validate_sample_count(sample_count),
            seed=_validate_seed(seed),
            integrand=integrand,
        )

    @property
    def a(self) -> float:
        """Lower bound."""
        return self.x_range[0]

    @property
    def b(self) -> float:
        """Upper bound."""
        return self.x_range[1]

    @property
    def interval_length(self) -> float:
        """b - a."""
        return self.x_range[1] - self.x_range[0]

    @property
    def midpoint(self) -> float:
        return (self.x_range[0] + self.x_range[1]) / 2
