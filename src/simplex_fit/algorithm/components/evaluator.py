"""Objective wrapper used by the optimizer.

Normalizes the goal to minimization, counts evaluations against the budget
and rejects values that are not finite scalars.
"""

from math import isfinite
from typing import Callable, Optional

import numpy as np

from simplex_fit.errors import NumericError


class BudgetExhausted(Exception):
    """Raised internally when another evaluation would exceed the budget."""


class Evaluator:
    """Counting, sign-normalizing front for an objective function."""

    def __init__(self, objective: Callable, sign: float = 1.0, max_evaluations: Optional[int] = None):
        self.objective = objective
        self.sign = sign
        self.max_evaluations = max_evaluations
        self.evaluations = 0
        # the initial simplex is always evaluated in full
        self.enforce_budget = False

    def __call__(self, point: np.ndarray) -> float:
        if (self.enforce_budget and self.max_evaluations is not None
                and self.evaluations >= self.max_evaluations):
            raise BudgetExhausted()

        # hand the objective its own copy so it cannot mutate simplex vertices
        raw = self.objective(np.array(point, dtype=float))
        self.evaluations += 1

        try:
            value = float(raw)
        except (TypeError, ValueError) as exc:
            raise NumericError(
                f"Objective returned a non-scalar value {raw!r} at {point.tolist()}."
            ) from exc
        if not isfinite(value):
            raise NumericError(f"Objective evaluated to {value} at {point.tolist()}.")
        return self.sign * value
