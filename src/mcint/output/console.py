"""Console output formatting."""

from mcint.analysis.convergence import ConvergenceResults
from mcint.models import EstimationResult


def _describe(fun: object) -> str:
    return fun if isinstance(fun, str) else getattr(fun, "__name__", repr(fun))


class ConsoleOutput:
    """Formats integration results for console display."""

    @staticmethod
    def print_estimate(result: EstimationResult, level: float = 0.95) -> None:
        """Print a single estimate.

        Args:
            result: Estimation result
            level: Confidence level for the reported interval
        """
        lower, upper = result.confidence_interval(level)

        print("\n" + "=" * 60)
        print("MONTE CARLO INTEGRATION")
        print("=" * 60)
        print(f"  f(x):           {_describe(result.fun)}")
        print(f"  Interval:       [{result.a:g}, {result.b:g}]")
        print(f"  Simulations:    {result.B:,}")
        print(f"  Seed:           {result.seed}")
        print("-" * 60)
        print(f"  Estimate:       {result.I:.6f}")
        print(f"  Variance:       {result.var:.3e}")
        print(f"  Std. error:     {result.std_error:.6f}")
        print(f"  {level:.0%} CI:         [{lower:.6f}, {upper:.6f}]")
        print("=" * 60)

    @staticmethod
    def print_convergence_summary(results: ConvergenceResults) -> None:
        """Print convergence study summary.

        Args:
            results: Aggregated study results
        """
        print("\n" + "=" * 78)
        print(f"CONVERGENCE STUDY - {_describe(results.fun)} on "
              f"[{results.x_range[0]:g}, {results.x_range[1]:g}]")
        print(f"(base seed {results.base_seed})")
        print("=" * 78)
        print(f"{'B':>10} {'Reps':>5} {'Mean est.':>14} {'Emp. var':>12} {'Mean var':>12} {'Mean s.e.':>12}")
        print("-" * 78)

        for n in results.sample_counts:
            s = results.stats[n]
            print(
                f"{n:>10,} "
                f"{s.replicates:>5} "
                f"{s.mean_estimate:>14.6f} "
                f"{s.empirical_variance:>12.3e} "
                f"{s.mean_variance_estimate:>12.3e} "
                f"{s.mean_std_error:>12.3e}"
            )

        if len(results.sample_counts) > 1:
            try:
                slope = results.variance_decay_slope()
            except ValueError:
                print("-" * 78)
                print("  Variance decay slope: n/a (zero variance)")
            else:
                print("-" * 78)
                print(f"  Variance decay slope (log-log): {slope:.3f}  (about -1 expected)")

        print("=" * 78)
