"""Convergence study: how the estimator behaves as the sample count grows."""

import logging
from collections.abc import Callable, Sequence
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, field
from typing import Any

import numpy as np
import pandas as pd

from mcint.integration import MonteCarloIntegrator
from mcint.models import IntegrationRequest

logger = logging.getLogger(__name__)


@dataclass
class SampleSizeStatistics:
    """Aggregated replicate statistics for one sample count."""

    sample_count: int
    estimates: list[float] = field(default_factory=list)
    variance_estimates: list[float] = field(default_factory=list)
    seeds: list[int] = field(default_factory=list)

    @property
    def replicates(self) -> int:
        return len(self.estimates)

    @property
    def mean_estimate(self) -> float:
        """Average point estimate across replicates."""
        return float(np.mean(self.estimates)) if self.estimates else float("nan")

    @property
    def empirical_variance(self) -> float:
        """Spread of the point estimates across replicates (ddof=1)."""
        if len(self.estimates) < 2:
            return float("nan")
        return float(np.var(self.estimates, ddof=1))

    @property
    def mean_variance_estimate(self) -> float:
        """Average of the per-run variance estimates."""
        return float(np.mean(self.variance_estimates)) if self.variance_estimates else float("nan")

    @property
    def mean_std_error(self) -> float:
        if not self.variance_estimates:
            return float("nan")
        return float(np.mean(np.sqrt(self.variance_estimates)))


@dataclass
class ConvergenceResults:
    """Results from a convergence study."""

    fun: Any
    x_range: tuple[float, float]
    base_seed: int
    stats: dict[int, SampleSizeStatistics]

    @property
    def sample_counts(self) -> list[int]:
        return sorted(self.stats)

    def to_frame(self) -> pd.DataFrame:
        """One row per sample count, sorted by sample count."""
        rows = [
            {
                "sample_count": s.sample_count,
                "replicates": s.replicates,
                "mean_estimate": s.mean_estimate,
                "empirical_variance": s.empirical_variance,
                "mean_variance_estimate": s.mean_variance_estimate,
                "mean_std_error": s.mean_std_error,
            }
            for s in (self.stats[n] for n in self.sample_counts)
        ]
        return pd.DataFrame(rows)

    def replicates_frame(self) -> pd.DataFrame:
        """One row per individual run."""
        rows = [
            {
                "sample_count": n,
                "replicate": k,
                "seed": seed,
                "estimate": est,
                "variance_estimate": var,
            }
            for n in self.sample_counts
            for k, (seed, est, var) in enumerate(
                zip(self.stats[n].seeds, self.stats[n].estimates, self.stats[n].variance_estimates)
            )
        ]
        return pd.DataFrame(rows)

    def variance_decay_slope(self) -> float:
        """Slope of log(mean variance estimate) against log(sample count).

        Close to -1 when the integrand has bounded variance.
        """
        frame = self.to_frame()
        frame = frame[frame["mean_variance_estimate"] > 0]
        if len(frame) < 2:
            raise ValueError("need at least two sample counts with positive variance")

        slope, _ = np.polyfit(
            np.log(frame["sample_count"].to_numpy(dtype=float)),
            np.log(frame["mean_variance_estimate"].to_numpy(dtype=float)),
            1,
        )
        return float(slope)


def _run_single_estimate(args: tuple) -> tuple[int, int, float, float]:
    """Run one estimate (for multiprocessing).

    Args:
        args: Tuple of (x_range, fun, sample_count, seed)

    Returns:
        Tuple of (sample_count, seed, estimate, variance_estimate)
    """
    x_range, fun, sample_count, seed = args
    result = MonteCarloIntegrator(seed=seed).integrate(x_range, fun, sample_count)
    return sample_count, seed, result.I, result.var


class ConvergenceStudy:
    """Repeats the estimator over several sample counts and seeds."""

    def __init__(
        self,
        x_range: Sequence[float],
        fun: "str | Callable[..., Any]",
        seed: int | None = None,
    ):
        """Initialize the study.

        Args:
            x_range: Integration bounds (a, b)
            fun: Expression in x or a callable
            seed: Base seed; replicate k uses base_seed + k
        """
        self.x_range = x_range
        self.fun = fun
        self.base_seed = int(seed) if seed is not None else int(np.random.default_rng().integers(0, 2**31))

    def run(
        self,
        sample_counts: Sequence[int] = (100, 1000, 10000),
        replicates: int = 20,
        parallel: bool = False,
        max_workers: int | None = None,
    ) -> ConvergenceResults:
        """Run the study.

        Args:
            sample_counts: Values of B to try
            replicates: Independent runs per sample count
            parallel: Fan runs out to worker processes (textual integrands only)
            max_workers: Maximum parallel workers (None = CPU count)

        Returns:
            ConvergenceResults with per-sample-count statistics
        """
        if not sample_counts:
            raise ValueError("sample_counts must not be empty")
        if replicates < 2:
            raise ValueError(f"replicates must be at least 2, got {replicates}")

        # Validate everything once before fanning out
        checked = [
            IntegrationRequest.from_inputs(self.x_range, self.fun, n, seed=self.base_seed)
            for n in sample_counts
        ]
        x_range = checked[0].x_range
        counts = sorted({request.sample_count for request in checked})

        seeds = [self.base_seed + k for k in range(replicates)]
        args_list = [(x_range, self.fun, n, seed) for n in counts for seed in seeds]

        stats = {n: SampleSizeStatistics(sample_count=n) for n in counts}

        if parallel and len(args_list) > 1:
            if not isinstance(self.fun, str):
                raise ValueError("parallel runs need a textual integrand")
            with ProcessPoolExecutor(max_workers=max_workers) as executor:
                runs = list(executor.map(_run_single_estimate, args_list))
        else:
            runs = [_run_single_estimate(args) for args in args_list]

        for n, seed, est, var in runs:
            stats[n].seeds.append(seed)
            stats[n].estimates.append(est)
            stats[n].variance_estimates.append(var)

        logger.info(
            "Convergence study of %r finished: %d sample counts x %d replicates",
            self.fun if isinstance(self.fun, str) else getattr(self.fun, "__name__", self.fun),
            len(counts), replicates,
        )
        return ConvergenceResults(
            fun=self.fun,
            x_range=x_range,
            base_seed=self.base_seed,
            stats=stats,
        )

    def run_quick(self, sample_counts: Sequence[int] = (100, 1000), replicates: int = 10) -> ConvergenceResults:
        """Run a small study without parallelization."""
        return self.run(sample_counts=sample_counts, replicates=replicates, parallel=False)
