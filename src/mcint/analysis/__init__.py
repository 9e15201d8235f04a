"""Repeated-seed analysis of the Monte Carlo estimator."""

from .convergence import ConvergenceResults, ConvergenceStudy, SampleSizeStatistics

__all__ = ["ConvergenceResults", "ConvergenceStudy", "SampleSizeStatistics"]
