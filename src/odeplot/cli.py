# Copyright (c) 2026 Shmuel Link
# SPDX-License-Identifier: MIT

"""Command-line interface: render method comparisons and run step-size studies."""

import argparse
import logging
import os

from odeplot.chart.options import LegendFormat
from odeplot.io import save_image, save_run
from odeplot.problems import PROBLEMS
from odeplot.render import plot_run
from odeplot.solvers.registry import METHODS
from odeplot.study import build_sweep_grid, observed_orders, run_sweep, single_run
from odeplot.study_utils import configure_logging, print_summary_table, save_sweep_results

logger = logging.getLogger(__name__)


def _setup_logging(log_dir, run_name, verbose):
    level = logging.DEBUG if verbose else logging.INFO
    if log_dir:
        configure_logging(log_dir, run_name, level=level)
    else:
        logging.basicConfig(
            level=level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


def _bounds(parser, lo, hi, axis):
    if lo is None and hi is None:
        return None
    if lo is None or hi is None:
        parser.error(f"give both --{axis}-min and --{axis}-max, or neither")
    return (lo, hi)


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="odeplot",
        description="Integrate dy/dx = f(x, y) with fixed-step methods and plot the curves.",
    )
    parser.add_argument(
        "-s", "--step", type=float, default=0.1,
        help="Step size h (default: 0.1)",
    )
    parser.add_argument(
        "--methods", nargs="*", default=[], choices=list(METHODS),
        help="Methods to run",
    )
    parser.add_argument(
        "--problem", type=str, default="log_rational", choices=sorted(PROBLEMS),
        help="Right-hand side (default: log_rational)",
    )
    parser.add_argument("--x0", type=float, default=1.0, help="Initial x (default: 1.0)")
    parser.add_argument("--y0", type=float, default=1.0, help="Initial y (default: 1.0)")
    parser.add_argument(
        "--span", type=float, default=1.0,
        help="Length of the integration interval (default: 1.0)",
    )
    parser.add_argument("--x-min", type=float, default=None, help="Left x-axis bound")
    parser.add_argument("--x-max", type=float, default=None, help="Right x-axis bound")
    parser.add_argument("--y-min", type=float, default=None, help="Bottom y-axis bound")
    parser.add_argument("--y-max", type=float, default=None, help="Top y-axis bound")
    parser.add_argument("--title", type=str, default="PG", help="Chart title (default: PG)")
    parser.add_argument(
        "--legend", type=str, default="bottom",
        choices=[f.value for f in LegendFormat],
        help="Legend placement (default: bottom)",
    )
    parser.add_argument("--width", type=int, default=800, help="Image width (default: 800)")
    parser.add_argument("--height", type=int, default=600, help="Image height (default: 600)")
    parser.add_argument(
        "--out", type=str, default="samp.png",
        help="Output image path (default: samp.png)",
    )
    parser.add_argument("--json", type=str, default=None, help="Also save the run as JSON")
    parser.add_argument("--log-dir", type=str, default=None, help="Write a log file here")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    args = parser.parse_args(argv)

    if not args.methods:
        parser.error("select at least one method")
    # registry order, not command-line order
    methods = [m for m in METHODS if m in args.methods]
    x_range = _bounds(parser, args.x_min, args.x_max, "x")
    y_range = _bounds(parser, args.y_min, args.y_max, "y")

    _setup_logging(args.log_dir, "odeplot", args.verbose)

    try:
        result = single_run(dict(
            h=args.step, methods=methods, problem=args.problem,
            x0=args.x0, y0=args.y0, span=args.span,
        ))
        plot = plot_run(
            result, x_range=x_range, y_range=y_range, title=args.title,
            legend=LegendFormat(args.legend), width=args.width, height=args.height,
        )
    except ValueError as e:
        parser.error(str(e))

    path = save_image(plot.render(), args.out)
    logger.info("Saved %s (%d points, methods: %s)",
                path, result["params"]["n"], ", ".join(methods))
    if args.json:
        save_run(result, args.json)
        logger.info("Saved run to %s", args.json)
    return path


def convergence_main(argv=None):
    parser = argparse.ArgumentParser(
        prog="odeplot-convergence",
        description="Measure integrator error against a closed-form solution over step sizes.",
    )
    parser.add_argument(
        "--h", nargs="+", type=float, default=[0.1, 0.05, 0.025, 0.0125],
        help="Step sizes (default: 0.1 0.05 0.025 0.0125)",
    )
    parser.add_argument(
        "--methods", nargs="+", default=list(METHODS), choices=list(METHODS),
        help="Methods to run (default: all)",
    )
    parser.add_argument(
        "--problem", type=str, default="exponential", choices=sorted(PROBLEMS),
        help="Problem (default: exponential)",
    )
    parser.add_argument("--span", type=float, default=1.0, help="Interval length (default: 1.0)")
    parser.add_argument(
        "--workers", type=int, default=None,
        help="Max parallel workers (default: cpu count)",
    )
    parser.add_argument(
        "--outdir", type=str, default="results",
        help="Output directory (default: results/)",
    )

    args = parser.parse_args(argv)

    configure_logging(args.outdir, "convergence")
    param_list = build_sweep_grid(
        h_vals=args.h, methods=args.methods, problem=args.problem, span=args.span,
    )

    print(f"Running {len(param_list)} cases (problem={args.problem}, h={args.h})")
    print(f"Methods: {', '.join(args.methods)}, Workers: {args.workers or 'auto'}")
    print()

    results = run_sweep(param_list, max_workers=args.workers)

    summary_rows = save_sweep_results(results, args.outdir)
    print_summary_table(summary_rows)

    orders = observed_orders(results)
    if orders:
        print("\nObserved order (finest pair):")
        for name, pairs in orders.items():
            h, order = pairs[-1]
            print(f"  {name:>10}: {order:6.3f}  (expected {METHODS[name].order})")

    print(f"\nResults saved to {args.outdir}/")
    print(f"Summary: {os.path.join(args.outdir, 'summary.csv')}")
    return results
