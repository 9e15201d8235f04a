"""Export integration results to CSV and JSON."""

import csv
import json
from pathlib import Path
from typing import Any

from mcint.analysis.convergence import ConvergenceResults
from mcint.models import EstimationResult


class Exporter:
    """Exports integration results to various formats."""

    def __init__(self, output_dir: str | Path = "output"):
        """Initialize exporter.

        Args:
            output_dir: Directory for output files
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def export_estimate_json(
        self,
        result: EstimationResult,
        filename: str = "estimate.json",
    ) -> Path:
        """Export a single estimate to JSON.

        Args:
            result: Estimation result
            filename: Output filename

        Returns:
            Path to created file
        """
        filepath = self.output_dir / filename

        lower, upper = result.confidence_interval()
        data: dict[str, Any] = result.to_dict()
        data["confidence_interval_95"] = [lower, upper]

        with open(filepath, "w") as f:
            json.dump(data, f, indent=2)

        return filepath

    def export_convergence_csv(
        self,
        results: ConvergenceResults,
        filename: str = "convergence.csv",
    ) -> Path:
        """Export the per-sample-count summary table to CSV."""
        filepath = self.output_dir / filename
        results.to_frame().to_csv(filepath, index=False)
        return filepath

    def export_replicates_csv(
        self,
        results: ConvergenceResults,
        filename: str = "replicates.csv",
    ) -> Path:
        """Export every individual run of a convergence study to CSV.

        Args:
            results: Convergence study results
            filename: Output filename

        Returns:
            Path to created file
        """
        filepath = self.output_dir / filename

        with open(filepath, "w", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(["sample_count", "replicate", "seed", "estimate", "variance_estimate"])

            for n in results.sample_counts:
                stats = results.stats[n]
                for k, (seed, est, var) in enumerate(
                    zip(stats.seeds, stats.estimates, stats.variance_estimates)
                ):
                    writer.writerow([n, k, seed, repr(est), repr(var)])

        return filepath

    def export_all(
        self,
        results: ConvergenceResults,
        prefix: str = "",
    ) -> dict[str, Path]:
        """Export all convergence study formats.

        Args:
            results: Convergence study results
            prefix: Optional prefix for filenames

        Returns:
            Dictionary of format -> filepath
        """
        prefix = f"{prefix}_" if prefix else ""

        return {
            "convergence_csv": self.export_convergence_csv(
                results, f"{prefix}convergence.csv"
            ),
            "replicates_csv": self.export_replicates_csv(
                results, f"{prefix}replicates.csv"
            ),
        }
