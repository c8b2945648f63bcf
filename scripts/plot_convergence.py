#!/usr/bin/env python
# Copyright (c) 2026 Shmuel Link
# SPDX-License-Identifier: MIT

"""Plot integrator error against step size from a convergence sweep.

Usage:
    odeplot-convergence --outdir results/convergence
    python scripts/plot_convergence.py results/convergence/summary.csv [--out FILE]

Writes a log-log figure of max |y - y_exact| vs h, one line per method, with
reference slopes for orders 1, 2 and 4.
"""

import argparse
import os
import sys
from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np
import seaborn as sns

# Allow running without pip install -e .
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from odeplot.solvers.registry import METHODS
from odeplot.study_utils import load_summary

sns.set_theme(style="whitegrid", context="paper", font_scale=1.1)


def fig_error_vs_step(rows, output_path):
    """Max error vs h for each method on log-log axes."""
    by_method = {}
    for r in rows:
        if r["max_error"] is None or not r["finite"]:
            continue
        by_method.setdefault(r["method"], []).append(r)
    if not by_method:
        print("  no rows with a closed-form error; nothing to plot")
        return

    fig, ax = plt.subplots(figsize=(5.5, 4))
    markers = ["o", "s", "D", "^", "v", "p"]
    colors = sns.color_palette("colorblind", len(by_method))

    all_h = []
    for i, (method, records) in enumerate(by_method.items()):
        records.sort(key=lambda r: r["h"])
        hs = [r["h"] for r in records]
        errs = [r["max_error"] for r in records]
        all_h.extend(hs)
        label = METHODS[method].label if method in METHODS else method
        ax.loglog(hs, errs, marker=markers[i % len(markers)], color=colors[i],
                  markersize=5, linewidth=1.2, label=label)

    h_ref = np.array(sorted(set(all_h)))
    for order, style in [(1, ":"), (2, "--"), (4, "-.")]:
        ax.loglog(h_ref, (h_ref / h_ref[-1]) ** order * 1e-1, color="k",
                  linestyle=style, linewidth=0.8, alpha=0.6,
                  label=rf"$O(h^{order})$")

    ax.set_xlabel("Step size $h$")
    ax.set_ylabel(r"$\max_i |y_i - y(x_i)|$")
    ax.legend(fontsize=7, loc="center left", bbox_to_anchor=(1.02, 0.5))

    fig.tight_layout()
    fig.savefig(output_path, bbox_inches="tight")
    plt.close(fig)
    print(f"  {output_path}")


def main():
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("summary", type=str, help="summary.csv from odeplot-convergence")
    parser.add_argument("--out", type=str, default=None,
                        help="Output figure (default: error_vs_step.pdf next to the CSV)")
    args = parser.parse_args()

    summary = Path(args.summary)
    if not summary.exists():
        print(f"ERROR: {summary} not found")
        sys.exit(1)
    out = Path(args.out) if args.out else summary.parent / "error_vs_step.pdf"

    rows = load_summary(summary)
    print(f"Loaded {len(rows)} rows from {summary}")
    fig_error_vs_step(rows, out)
    print("\nDone.")


if __name__ == "__main__":
    main()
