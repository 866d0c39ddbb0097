# experiment.py
from __future__ import annotations
import argparse, csv, json, os, time
from typing import Iterable, Mapping, Optional

import numpy as np

from simplex_fit.algorithm import NelderMeadParams, StoppingCriteria, optimize
from simplex_fit.functions import PROBLEMS, SUCCESS_THRESHOLDS
from simplex_fit.utils import ensure_dirs, random_initial_guess

"""
Repeats every demonstration problem from seeded random starts and persists
the results in a reproducible way.
"""

RUN_FIELDS = ["problem", "run", "seed", "best_f", "best_x_json", "error", "evals",
              "iterations", "converged", "success", "time_s"]


def run_suite(
    *,
    outdir: str,
    runs: int,
    seed0: int,
    problems: Optional[Iterable[str]] = None,
    thresholds: Optional[Mapping[str, float | None]] = None,
    stopping: Optional[StoppingCriteria] = None,
    params: Optional[NelderMeadParams] = None,
    save_curves: bool = True,
):
    """
    Args:
      outdir: output directory for CSVs and curves.
      runs: number of independent runs per problem.
      seed0: base seed; run r of every problem starts from seed0 + r.
      problems: names from PROBLEMS (default: all of them).
      thresholds: problem name -> max distance to the known optimum counted
                  as success, or None to skip success scoring.
      stopping, params: forwarded to optimize().
    Returns:
      (log_csv_path, summary_csv_path)
    """
    if not isinstance(outdir, str) or not outdir:
        raise ValueError("outdir must be a non-empty string.")
    if not isinstance(runs, int) or runs <= 0:
        raise ValueError("runs must be a positive int.")
    if not isinstance(seed0, int):
        raise ValueError("seed0 must be an int.")
    problems = list(problems) if problems is not None else list(PROBLEMS)
    unknown = [p for p in problems if p not in PROBLEMS]
    if unknown or not problems:
        raise ValueError(f"Unknown problems {unknown}; choose from {sorted(PROBLEMS)}.")
    thresholds = dict(SUCCESS_THRESHOLDS) if thresholds is None else dict(thresholds)

    curves_dir = os.path.join(outdir, "curves")
    ensure_dirs(outdir, curves_dir)

    log_path = os.path.join(outdir, "runs.csv")
    with open(log_path, "w", newline="") as fh:
        w = csv.writer(fh)
        w.writerow(RUN_FIELDS)

        for name in problems:
            meta = PROBLEMS[name]
            objective = meta["make"]()
            optimum = np.asarray(meta["optimum"], dtype=float)
            thr = thresholds.get(name)

            for r in range(runs):
                seed = seed0 + r
                x0 = random_initial_guess(meta["dim"], seed=seed)

                t0 = time.time()
                res = optimize(objective, x0, stopping=stopping, params=params)
                dt = time.time() - t0

                if save_curves:
                    np.save(os.path.join(curves_dir, f"{name}_run{r}.npy"), np.asarray(res.history))

                error = float(np.linalg.norm(res.point - optimum))
                success = int(error <= thr) if thr is not None else 0
                w.writerow([
                    name,
                    r,
                    seed,
                    float(res.value),
                    json.dumps([float(v) for v in res.point]),
                    error,
                    res.evaluations,
                    res.iterations,
                    int(res.converged),
                    success,
                    float(dt),
                ])

    agg_path = os.path.join(outdir, "summary.csv")
    _aggregate(log_path, agg_path)
    return log_path, agg_path


def _aggregate(log_csv: str, out_csv: str):
    import pandas as pd
    df = pd.read_csv(log_csv)
    g = df.groupby("problem", as_index=False)
    summ = g["best_f"].agg(mean="mean", median="median", min="min", max="max", std="std")
    evals = g["evals"].mean().rename(columns={"evals": "mean_evals"})
    sr = g["success"].mean().rename(columns={"success": "success_rate"})
    out = summ.merge(evals, on="problem").merge(sr, on="problem")
    out.to_csv(out_csv, index=False)
    return out


def parse_args(argv=None):
    ap = argparse.ArgumentParser(description="Repeated Nelder-Mead runs on the demonstration problems.")
    ap.add_argument("--outdir", default="results")
    ap.add_argument("--runs", type=int, default=30)
    ap.add_argument("--seed", type=int, default=123)
    ap.add_argument("--problems", nargs="+", choices=sorted(PROBLEMS), default=None)
    ap.add_argument("--preset", default="DEFAULT", help="Stopping preset (QUICK, DEFAULT, PRECISE)")
    ap.add_argument("--no-plot", dest="no_plot", action="store_true")
    return ap.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    stopping = StoppingCriteria.from_preset(args.preset)
    runs_csv, summary_csv = run_suite(
        outdir=args.outdir,
        runs=args.runs,
        seed0=args.seed,
        problems=args.problems,
        stopping=stopping,
    )
    if not args.no_plot:
        from simplex_fit.plots import plot_convergence
        plot_convergence(os.path.join(args.outdir, "curves"), os.path.join(args.outdir, "convergence.png"))
    print("wrote:", runs_csv, summary_csv)


if __name__ == "__main__":
    main()
