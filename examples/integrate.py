#!/usr/bin/env python3
"""Example: Estimate an integral by Monte Carlo and plot it.

Usage:
    python examples/integrate.py [--fun EXPR] [--range A B] [-B N] [--seed S]

Examples:
    python examples/integrate.py --fun "x^2" --range 0 1 -B 100000
    python examples/integrate.py --fun "x^2*sin(x^2/pi)" -B 1000 --plot output/mc.png
"""

import argparse
import sys
from pathlib import Path

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from mcint import DEFAULT_SEED, IntegrationError, configure_logging, estimate
from mcint.output import ConsoleOutput, Exporter, save_estimate_plot


def main():
    parser = argparse.ArgumentParser(description="Monte Carlo integration of f(x) over [a, b]")
    parser.add_argument(
        "--fun",
        default="x^2",
        help="Function of x to integrate (default: x^2)",
    )
    parser.add_argument(
        "--range",
        nargs=2,
        type=float,
        default=[0.0, 1.0],
        metavar=("A", "B"),
        help="Integration bounds (default: 0 1)",
    )
    parser.add_argument(
        "-B",
        "--simulations",
        type=int,
        default=100_000,
        help="Number of simulations (default: 100000)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=DEFAULT_SEED,
        help=f"Random seed (default: {DEFAULT_SEED})",
    )
    parser.add_argument(
        "--plot",
        help="Write a plot of the estimate to this path",
    )
    parser.add_argument(
        "--export",
        action="store_true",
        help="Export the estimate to JSON",
    )
    parser.add_argument(
        "--output-dir",
        default="output",
        help="Output directory for exports (default: output)",
    )
    args = parser.parse_args()

    configure_logging()

    try:
        result = estimate(args.range[0], args.range[1], args.fun, args.simulations, seed=args.seed)
    except IntegrationError as e:
        print(f"Error: {e}")
        return 1

    ConsoleOutput.print_estimate(result)

    if args.plot:
        path = save_estimate_plot(result, args.plot)
        print(f"\nPlot written to {path}")

    if args.export:
        exporter = Exporter(output_dir=args.output_dir)
        path = exporter.export_estimate_json(result)
        print(f"Estimate exported to {path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
