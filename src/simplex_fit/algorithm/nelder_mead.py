"""Nelder-Mead simplex optimizer.

This module orchestrates a full run:
- validates the guess, goal and stopping rules
- builds and evaluates the initial simplex (initialize phase)
- applies reflection / expansion / contraction / shrink (move phase)
- compares vertex values with the previous iteration (convergence phase)
- stops when converged or when the evaluation budget is spent

The main entry point is `optimize()`.
"""

from __future__ import annotations

import dataclasses
import time
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

import numpy as np

from simplex_fit.algorithm import constants
from simplex_fit.algorithm.components import BudgetExhausted, Evaluator
from simplex_fit.algorithm.config import NelderMeadParams, StoppingCriteria
from simplex_fit.algorithm.steps import convergence_phase, initialize_phase, move_phase
from simplex_fit.algorithm.steps.initialize import as_point
from simplex_fit.errors import ConfigurationError
from simplex_fit.logging import RunLogger


@dataclass(frozen=True, eq=False)
class OptimizationResult:
    """Best point of a run and its objective value, in the caller's sign."""

    point: np.ndarray
    value: float
    evaluations: int
    iterations: int
    converged: bool
    goal: str = constants.MINIMIZE
    history: tuple = ()

    def __post_init__(self):
        point = np.array(self.point, dtype=float)
        point.setflags(write=False)
        object.__setattr__(self, "point", point)
        object.__setattr__(self, "history", tuple(float(v) for v in self.history))

    def __iter__(self):
        # allows `point, value = optimize(...)`
        yield self.point
        yield self.value

    def __str__(self):
        return f"{np.array2string(self.point, separator=', ')} : {self.value!r}"


def _normalize_goal(goal: str) -> str:
    if not isinstance(goal, str) or goal.lower() not in constants.GOALS:
        raise ConfigurationError(f"goal must be one of {constants.GOALS}, got {goal!r}.")
    return goal.lower()


def optimize(
    objective: Callable[[np.ndarray], float],
    initial_guess: Sequence[float],
    goal: str = constants.MINIMIZE,
    stopping: Optional[StoppingCriteria] = None,
    max_evaluations: Optional[int] = None,
    params: Optional[NelderMeadParams] = None,
    logger: Optional[RunLogger] = None,
    verbose: bool = False,
    log_every: int = constants.LOG_EVERY,
) -> OptimizationResult:
    """Minimize (or maximize) `objective` starting from `initial_guess`.

    Args:
      objective: callable Point -> float. If it has a `dimension` attribute
                 the guess length is checked against it.
      initial_guess: sequence of N floats.
      goal: 'minimize' or 'maximize'.
      stopping: relative/absolute tolerances and evaluation budget
                (defaults: 1e-10, 1e-30, 10000).
      max_evaluations: overrides `stopping.max_evaluations` when given.
      params: simplex coefficients and initial step.
      logger: optional RunLogger receiving one row per iteration.
      verbose: print progress every `log_every` iterations.

    Raises:
      ConfigurationError: bad guess, goal, budget or degenerate simplex.
      NumericError: the objective returned NaN/inf at a required point.
    """
    start_time = time.time()

    goal = _normalize_goal(goal)
    stopping = stopping if stopping is not None else StoppingCriteria()
    if max_evaluations is not None:
        stopping = dataclasses.replace(stopping, max_evaluations=max_evaluations)
    params = params if params is not None else NelderMeadParams()

    x0 = as_point(initial_guess, getattr(objective, "dimension", None))
    steps = params.steps_for(x0.size)

    sign = 1.0 if goal == constants.MINIMIZE else -1.0
    evaluate = Evaluator(objective, sign=sign, max_evaluations=stopping.max_evaluations)

    if logger is not None:
        logger.update_metadata(
            dim=int(x0.size),
            goal=goal,
            rel_tol=stopping.rel_tol,
            abs_tol=stopping.abs_tol,
            max_evaluations=stopping.max_evaluations,
        )

    simplex = initialize_phase(evaluate, x0, steps)
    evaluate.enforce_budget = True

    history = []
    iteration = 0
    converged = False

    while True:
        previous = simplex.values.copy()
        try:
            move = move_phase(simplex, evaluate, params)
        except BudgetExhausted:
            simplex.order()
            break
        simplex.order()
        iteration += 1

        best_f = sign * float(simplex.values[0])
        history.append(best_f)

        if logger is not None:
            logger.log_iteration(
                iteration=iteration,
                evaluations=evaluate.evaluations,
                best_value=best_f,
                worst_value=sign * float(simplex.values[-1]),
                move=move,
                runtime_ms=(time.time() - start_time) * 1000,
            )

        if verbose and log_every > 0 and iteration % log_every == 0:
            print(f"Iter {iteration}: best={best_f:.6g}, evals={evaluate.evaluations}, move={move}")

        if convergence_phase(previous, simplex.values, stopping.rel_tol, stopping.abs_tol):
            converged = True
            break
        if evaluate.evaluations >= stopping.max_evaluations:
            break

    best_x, best_f = simplex.best()
    if verbose:
        status = "converged" if converged else "evaluation budget exhausted"
        print(f"Done after {iteration} iterations / {evaluate.evaluations} evaluations ({status}).")

    return OptimizationResult(
        point=best_x.copy(),
        value=sign * best_f,
        evaluations=evaluate.evaluations,
        iterations=iteration,
        converged=converged,
        goal=goal,
        history=history,
    )
