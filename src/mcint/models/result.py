"""Result of a Monte Carlo integration."""

import math
from collections.abc import Callable
from statistics import NormalDist
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class EstimationResult(BaseModel):
    """Point and variance estimate of an integral, with the inputs that produced it."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    I: float = Field(..., description="Estimated value of the integral")
    var: float = Field(..., ge=0.0, description="Estimated variance of the estimator")
    fun: str | Callable[..., Any] = Field(..., description="Integrand as supplied")
    x_range: tuple[float, float] = Field(..., description="Integration bounds (a, b)")
    B: int = Field(..., ge=1, description="Number of simulations")
    seed: int = Field(..., description="Generator seed")

    @field_serializer("fun")
    def _serialize_fun(self, fun: "str | Callable[..., Any]") -> str:
        if isinstance(fun, str):
            return fun
        return getattr(fun, "__name__", repr(fun))

    @property
    def a(self) -> float:
        """Lower integration bound."""
        return self.x_range[0]

    @property
    def b(self) -> float:
        """Upper integration bound."""
        return self.x_range[1]

    @property
    def std_error(self) -> float:
        """Standard error of the estimate (square root of var)."""
        return math.sqrt(self.var)

    def confidence_interval(self, level: float = 0.95) -> tuple[float, float]:
        """Normal-approximation confidence interval for the integral.

        Args:
            level: Coverage probability, strictly between 0 and 1

        Returns:
            (lower, upper) bounds
        """
        if not 0.0 < level < 1.0:
            raise ValueError(f"level must be between 0 and 1, got {level}")
        z = NormalDist().inv_cdf((1.0 + level) / 2.0)
        half_width = z * self.std_error
        return self.I - half_width, self.I + half_width

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready mapping of the result."""
        data = self.model_dump(mode="json")
        data["std_error"] = self.std_error
        return data
