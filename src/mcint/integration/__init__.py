"""Monte Carlo integration engine."""

from .montecarlo import MonteCarloIntegrator, estimate, generator_seed, sample_points

__all__ = ["MonteCarloIntegrator", "estimate", "generator_seed", "sample_points"]
