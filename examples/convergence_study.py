#!/usr/bin/env python3
"""Example: Watch the Monte Carlo variance shrink as the sample count grows.

Usage:
    python examples/convergence_study.py [--fun EXPR] [--range A B]
        [--sample-counts N ...] [--replicates R] [--parallel] [--export]

Examples:
    python examples/convergence_study.py --fun "exp(-x^2)" --range 0 2
    python examples/convergence_study.py --sample-counts 10 100 1000 10000 --replicates 50
"""

import argparse
import sys
from pathlib import Path

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from mcint import ConvergenceStudy, IntegrationError, configure_logging
from mcint.output import ConsoleOutput, Exporter


def main():
    parser = argparse.ArgumentParser(description="Convergence study of the Monte Carlo estimator")
    parser.add_argument("--fun", default="x^2", help="Function of x (default: x^2)")
    parser.add_argument(
        "--range",
        nargs=2,
        type=float,
        default=[0.0, 1.0],
        metavar=("A", "B"),
        help="Integration bounds (default: 0 1)",
    )
    parser.add_argument(
        "--sample-counts",
        nargs="+",
        type=int,
        default=[100, 1000, 10000],
        help="Sample counts to compare (default: 100 1000 10000)",
    )
    parser.add_argument(
        "--replicates",
        "-r",
        type=int,
        default=20,
        help="Runs per sample count (default: 20)",
    )
    parser.add_argument("--seed", type=int, default=42, help="Base seed (default: 42)")
    parser.add_argument(
        "--parallel",
        action="store_true",
        help="Use parallel processing",
    )
    parser.add_argument(
        "--export",
        action="store_true",
        help="Export results to CSV",
    )
    parser.add_argument(
        "--output-dir",
        default="output",
        help="Output directory for exports (default: output)",
    )
    args = parser.parse_args()

    configure_logging()

    print(f"Running {len(args.sample_counts)} x {args.replicates} estimates...")
    study = ConvergenceStudy(x_range=args.range, fun=args.fun, seed=args.seed)
    try:
        results = study.run(
            sample_counts=args.sample_counts,
            replicates=args.replicates,
            parallel=args.parallel,
        )
    except IntegrationError as e:
        print(f"Error: {e}")
        return 1

    ConsoleOutput.print_convergence_summary(results)

    if args.export:
        print(f"\nExporting results to {args.output_dir}/...")
        exporter = Exporter(output_dir=args.output_dir)
        files = exporter.export_all(results, prefix="convergence")

        print("Exported files:")
        for fmt, path in files.items():
            print(f"  {fmt}: {path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
