"""Monte Carlo integration of real functions of one variable."""

from .analysis import ConvergenceResults, ConvergenceStudy
from .config import DEFAULT_SEED, RenderSettings, configure_logging
from .errors import (
    IntegrationError,
    InvalidFunctionError,
    InvalidRangeError,
    InvalidSampleCountError,
    InvalidSeedError,
)
from .expression import Integrand
from .integration import MonteCarloIntegrator, estimate, generator_seed, sample_points
from .models import EstimationResult, IntegrationRequest

__all__ = [
    "DEFAULT_SEED",
    "ConvergenceResults",
    "ConvergenceStudy",
    "EstimationResult",
    "Integrand",
    "IntegrationError",
    "IntegrationRequest",
    "InvalidFunctionError",
    "InvalidRangeError",
    "InvalidSampleCountError",
    "InvalidSeedError",
    "MonteCarloIntegrator",
    "RenderSettings",
    "configure_logging",
    "estimate",
    "generator_seed",
    "sample_points",
]
