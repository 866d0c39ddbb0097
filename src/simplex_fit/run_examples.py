"""Solve the three demonstration problems and print `[point] : value` for each."""

import argparse
import sys
from pathlib import Path

import numpy as np

from simplex_fit.algorithm import NelderMeadParams, StoppingCriteria, optimize
from simplex_fit.algorithm.constants import LOG_EVERY, PRESETS
from simplex_fit.errors import ConfigurationError, NumericError
from simplex_fit.functions import PROBLEMS
from simplex_fit.logging import RunLogger
from simplex_fit.utils import random_initial_guess

# Start used when neither --seed nor --start is given.
FIXED_START = 0.5


def _parse_preset(value: str) -> str:
    """Return an uppercase preset name if it exists, else raise."""

    name = value.upper()
    if name not in PRESETS:
        valid = ", ".join(sorted(PRESETS))
        raise argparse.ArgumentTypeError(
            f"Unknown preset '{value}'. Choose from: {valid}."
        )
    return name


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="simplex-fit",
        description="Run Nelder-Mead on the paraboloid, line-fit and circle-fit problems",
    )
    parser.add_argument("--problem", choices=sorted(PROBLEMS) + ["all"], default="all")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for uniform [0, 1) random starts (default: fixed start 0.5)")
    parser.add_argument("--start", type=float, nargs="+", default=None,
                        help="Explicit initial guess; only valid with a single --problem")
    parser.add_argument("--preset", default="DEFAULT", type=_parse_preset,
                        help="Stopping preset (QUICK, DEFAULT, PRECISE)")

    # Optional overrides: only applied if explicitly set
    parser.add_argument("--max-evals", dest="max_evals", type=int, default=None)
    parser.add_argument("--rel-tol", dest="rel_tol", type=float, default=None)
    parser.add_argument("--abs-tol", dest="abs_tol", type=float, default=None)
    parser.add_argument("--step", type=float, default=None, help="Initial simplex step per axis")
    parser.add_argument("--maximize", action="store_true", help="Maximize instead of minimize")

    parser.add_argument("--log-dir", type=Path, help="Optional directory for iteration-level CSV logs")
    parser.add_argument("--verbose", action="store_true")
    parser.add_argument("--log-every", dest="log_every", type=int, default=LOG_EVERY)
    return parser


def initial_guess(dim: int, seed, start):
    if start is not None:
        return np.asarray(start, dtype=float)
    if seed is not None:
        return random_initial_guess(dim, seed=seed)
    return np.full(dim, FIXED_START)


def solve(name: str, args, stopping: StoppingCriteria, params: NelderMeadParams):
    meta = PROBLEMS[name]
    objective = meta["make"]()
    x0 = initial_guess(meta["dim"], args.seed, args.start)

    logger = None
    if args.log_dir is not None:
        logger = RunLogger(
            base_dir=args.log_dir,
            filename=f"{name}_nelder_mead_log.csv",
            metadata={"runner": "run_examples", "problem": name, "preset": args.preset},
        )

    result = optimize(
        objective,
        x0,
        goal="maximize" if args.maximize else "minimize",
        stopping=stopping,
        params=params,
        logger=logger,
        verbose=args.verbose,
        log_every=args.log_every,
    )
    if logger is not None and len(logger):
        logger.flush()
    return result


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.start is not None and args.problem == "all":
        parser.error("--start needs a single --problem")

    try:
        stopping = StoppingCriteria.from_preset(
            args.preset,
            rel_tol=args.rel_tol,
            abs_tol=args.abs_tol,
            max_evaluations=args.max_evals,
        )
        params = NelderMeadParams() if args.step is None else NelderMeadParams(step=args.step)
    except ConfigurationError as exc:
        parser.error(str(exc))

    names = sorted(PROBLEMS) if args.problem == "all" else [args.problem]
    for name in names:
        try:
            result = solve(name, args, stopping, params)
        except ConfigurationError as exc:
            print(f"{name}: configuration error: {exc}", file=sys.stderr)
            return 2
        except NumericError as exc:
            print(f"{name}: numeric error: {exc}", file=sys.stderr)
            return 1
        print(f"{name}: {result}")
        if args.verbose:
            status = "converged" if result.converged else "budget exhausted"
            print(f"  evals  : {result.evaluations} ({status})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
