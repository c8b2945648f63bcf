# Copyright (c) 2026 Shmuel Link
# SPDX-License-Identifier: MIT

"""Shared utilities for step-size studies: save/load results, logging, summary tables."""

import csv
import logging
import os

from odeplot.io import save_run


def save_sweep_results(results, outdir):
    """Save per-case JSON files and a summary CSV.

    Args:
        results: list of result dicts from single_run.
        outdir: output directory path.

    Returns:
        list of summary row dicts, one per (h, method).
    """
    os.makedirs(outdir, exist_ok=True)
    summary_rows = []

    for r in results:
        p = r["params"]
        fname = f"{p['problem']}_h{p['h']}.json"
        save_run(r, os.path.join(outdir, fname))

        for method, y in r["solutions"].items():
            summary_rows.append({
                "problem": p["problem"],
                "h": p["h"],
                "n": p["n"],
                "method": method,
                "finite": r["finite"][method],
                "max_error": r["max_error"][method],
                "y_end": float(y[-1]),
            })

    # Write summary CSV
    if summary_rows:
        csv_path = os.path.join(outdir, "summary.csv")
        with open(csv_path, "w", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=summary_rows[0].keys())
            writer.writeheader()
            writer.writerows(summary_rows)

    return summary_rows


def load_summary(csv_path):
    """Read a summary CSV into a list of dicts with proper types.

    Numeric columns (h, max_error, y_end) are converted to float, n to int.
    The 'finite' column is converted to bool. An empty max_error (problem
    without a closed form) becomes None.
    """
    rows = []
    with open(csv_path, "r") as f:
        reader = csv.DictReader(f)
        for row in reader:
            typed = {}
            for k, v in row.items():
                if k in ("h", "y_end"):
                    typed[k] = float(v)
                elif k == "max_error":
                    typed[k] = float(v) if v.strip() else None
                elif k == "n":
                    typed[k] = int(v)
                elif k == "finite":
                    typed[k] = v.strip().lower() in ("true", "1", "yes")
                else:
                    typed[k] = v
            rows.append(typed)
    return rows


def configure_logging(outdir, run_name, level=logging.INFO):
    """Set up file + console logging on the 'odeplot' logger.

    Args:
        outdir: directory for the log file.
        run_name: used in the log filename.
        level: logging level for the logger and both handlers.

    Returns:
        the configured logger.
    """
    os.makedirs(outdir, exist_ok=True)
    logger = logging.getLogger("odeplot")
    logger.setLevel(level)

    fmt = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")

    # File handler
    log_path = os.path.join(outdir, f"{run_name}.log")
    fh = logging.FileHandler(log_path)
    fh.setLevel(level)
    fh.setFormatter(fmt)
    logger.addHandler(fh)

    # Console handler (only if none already exists)
    if not any(isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
               for h in logger.handlers):
        ch = logging.StreamHandler()
        ch.setLevel(level)
        ch.setFormatter(fmt)
        logger.addHandler(ch)

    return logger


def print_summary_table(summary_rows):
    """Print a formatted summary table to stdout."""
    header = f"{'h':>10} {'n':>6} {'method':>10} {'finite':>7} {'max_err':>12} {'y_end':>12}"
    print(header)
    print("-" * len(header))
    for row in summary_rows:
        err = row["max_error"]
        err_str = f"{err:>12.4e}" if err is not None else f"{'-':>12}"
        print(
            f"{row['h']:>10.4g} {row['n']:>6d} {row['method']:>10} "
            f"{str(row['finite']):>7} {err_str} {row['y_end']:>12.6g}"
        )
